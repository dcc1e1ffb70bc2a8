"""
Command Line Interface for the 1D SOM tracer
"""

import argparse
import os
import sys
import structlog

from somtracer import (
    SOMTracer,
    TracerConfig,
    DatasetShape,
    __version__,
    get_metrics,
    load_matrix,
    run_scenario,
    setup_logging,
)

# Initialize observability
setup_logging(
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    json_format=False,  # Use console format for CLI
)

logger = structlog.get_logger()


def load_data(file_path: str, format: str = "auto", header: bool = False):
    """Load a dataset, see ``somtracer.io.load_matrix``"""
    return load_matrix(file_path, format=format, header=header)


def save_weights(tracer: SOMTracer, output_path: str, initial: bool = False) -> None:
    """Save the trained (or initial) node map"""
    try:
        tracer.save_weights(output_path, initial=initial)
        print(f"Weights saved to: {output_path}")
    except Exception as e:
        print(f"Error saving weights: {e}", file=sys.stderr)
        sys.exit(1)


def train_command(args) -> None:
    """Train a node chain on a data file"""
    print(f"Loading data from: {args.input}")
    try:
        data = load_data(args.input, args.format, args.header)
        print(f"Data shape: {data.shape}")

        config = TracerConfig(
            n_nodes=args.nodes,
            n_features=data.shape[1],
            alpha_min=args.alpha_min,
            initial_radius=args.radius,
            parallel=args.parallel,
            n_workers=args.workers,
            seed=args.seed,
        )

        print(
            f"Training SOM: {config.n_nodes} nodes, radius {config.initial_radius}, "
            f"alpha floor {config.alpha_min}"
        )

        tracer = SOMTracer(config, verbose=args.verbose)
        tracer.fit(data)

        qe = tracer.quantization_error(data)
        print("Training completed!")
        print(f"Epochs: {tracer.metadata['total_epochs']}")
        print(f"Quantization Error: {qe:.4f}")

        if args.initial_output:
            save_weights(tracer, args.initial_output, initial=True)
        save_weights(tracer, args.output)

        if args.visualize:
            # Absolute paths keep the plots next to the weights file
            stem = os.path.abspath(os.path.splitext(args.output)[0])
            if data.shape[1] >= 2:
                trace_path = stem + "_trace.png"
                tracer.plot_trace(data, show_plot=False, save_path=trace_path)
                print(f"Trace plot saved to: {trace_path}")
            progress_path = stem + "_progress.png"
            tracer.plot_training_progress(show_plot=False, save_path=progress_path)
            print(f"Training progress saved to: {progress_path}")

        if args.metrics:
            print(get_metrics().decode())

    except Exception as e:
        print(f"Error during training: {e}", file=sys.stderr)
        sys.exit(1)


def demo_command(args) -> None:
    """Run the circle and/or lemniscate demos and write their CSVs"""
    if args.shape == "all":
        shapes = [DatasetShape.CIRCLE, DatasetShape.LEMNISCATE]
    else:
        shapes = [DatasetShape(args.shape)]

    try:
        for shape in shapes:
            print(f"Running {shape.value} demo")
            result = run_scenario(
                shape,
                seed=args.seed,
                output_dir=args.output_dir,
                parallel=args.parallel,
                verbose=args.verbose,
            )
            print(f"Epochs: {result.epochs}")
            print(
                "Mean node-to-data distance: "
                f"{result.initial_distance:.4f} -> {result.final_distance:.4f}"
            )
    except Exception as e:
        print(f"Error running demo: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"CSV files written to: {args.output_dir}")


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="1D Kohonen Self-Organizing Map CLI",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Train command
    train_parser = subparsers.add_parser("train", help="Train a node chain")
    train_parser.add_argument("input", help="Input data file")
    train_parser.add_argument(
        "--output", "-o", default="weights.csv", help="Trained weights CSV"
    )
    train_parser.add_argument(
        "--initial-output", help="Also save the initial random weights here"
    )
    train_parser.add_argument("--nodes", type=int, default=50, help="Number of nodes")
    train_parser.add_argument(
        "--alpha-min", type=float, default=0.1, help="Learning-rate floor"
    )
    train_parser.add_argument(
        "--radius", type=int, help="Initial neighborhood radius (nodes >> 2 if unset)"
    )
    train_parser.add_argument(
        "--format",
        choices=["auto", "csv", "json", "npy", "npz"],
        default="auto",
        help="Input data format",
    )
    train_parser.add_argument(
        "--header", action="store_true", help="CSV input has a header row"
    )
    train_parser.add_argument(
        "--parallel", action="store_true", help="Split node updates across threads"
    )
    train_parser.add_argument("--workers", type=int, help="Number of worker threads")
    train_parser.add_argument(
        "--seed", type=int, help="Random seed for reproducibility"
    )
    train_parser.add_argument(
        "--visualize", action="store_true", help="Save trace and progress plots"
    )
    train_parser.add_argument(
        "--metrics", action="store_true", help="Print Prometheus metrics"
    )
    train_parser.add_argument("--verbose", action="store_true", help="Verbose output")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run the synthetic demos")
    demo_parser.add_argument(
        "shape",
        nargs="?",
        choices=["circle", "lemniscate", "all"],
        default="all",
        help="Demo to run",
    )
    demo_parser.add_argument(
        "--output-dir", "-o", default=".", help="Directory for the CSV files"
    )
    demo_parser.add_argument(
        "--seed", type=int, help="Random seed for reproducibility"
    )
    demo_parser.add_argument(
        "--parallel", action="store_true", help="Split node updates across threads"
    )
    demo_parser.add_argument("--verbose", action="store_true", help="Verbose output")

    # Version command
    subparsers.add_parser("version", help="Show version information")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "train":
        train_command(args)
    elif args.command == "demo":
        demo_command(args)
    elif args.command == "version":
        print(f"SOM tracer CLI v{__version__}")
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
