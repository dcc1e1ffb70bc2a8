"""
Example usage of the somtracer package
"""

import numpy as np
from somtracer import (
    SOMTracer,
    TracerConfig,
    DatasetShape,
    SnapshotCallback,
    circle,
    run_scenario,
    train,
    random_weights,
)


def run_examples():
    """Run the two classic demos plus the lower-level API"""

    # Example 1: Points near a circle, traced by a closed-looking chain
    print("Example 1: Circle (50 nodes, alpha floor 0.1)")
    result = run_scenario(DatasetShape.CIRCLE, seed=42, output_dir=".")
    print(f"Epochs: {result.epochs}")
    print(
        f"Mean node-to-data distance: {result.initial_distance:.4f} -> "
        f"{result.final_distance:.4f}"
    )

    # Example 2: Points near a lemniscate of Gerono
    print("\nExample 2: Lemniscate (20 nodes, alpha floor 0.01)")
    result = run_scenario(DatasetShape.LEMNISCATE, seed=42, output_dir=".")
    print(f"Epochs: {result.epochs}")
    print(
        f"Mean node-to-data distance: {result.initial_distance:.4f} -> "
        f"{result.final_distance:.4f}"
    )

    # Example 3: Object API with snapshots and plots
    print("\nExample 3: SOMTracer with snapshots")
    rng = np.random.RandomState(7)
    data = circle(300, rng)
    config = TracerConfig(n_nodes=30, n_features=2, alpha_min=0.1, seed=7)
    snapshots = SnapshotCallback(interval=30)
    tracer = SOMTracer(config, verbose=False)
    tracer.fit(data, callbacks=[snapshots])
    print(f"Snapshots taken at epochs: {[epoch for epoch, _ in snapshots.snapshots]}")
    tracer.plot_trace(data, show_plot=False).plot_training_progress(show_plot=False)

    # Example 4: Functional API on caller-owned arrays
    print("\nExample 4: train() on a caller-owned node map")
    node_map = random_weights(30, 2, (-1.0, 1.0), rng)
    train(data, node_map, 0.1)
    print(f"First trained node: {node_map[0]}")

    print("\nCSV files written: test1.csv, w11.csv, w12.csv, test2.csv, w21.csv, w22.csv")
    print("Plot them in gnuplot with:")
    print("  set datafile separator ','")
    print('  plot "test1.csv" title "data", "w11.csv" title "w1", "w12.csv" title "w2"')


if __name__ == "__main__":
    run_examples()
