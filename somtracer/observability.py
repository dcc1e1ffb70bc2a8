"""
Observability infrastructure for the SOM tracer
Provides structured logging, training metrics and operation tracing
"""

import logging
import time
import uuid
import psutil
import structlog
from contextlib import contextmanager
from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    Gauge,
    generate_latest,
)


# Prometheus Metrics
REGISTRY = CollectorRegistry()

TRAINING_DURATION = Histogram(
    "somtracer_training_duration_seconds",
    "1D SOM training duration in seconds",
    ["n_nodes"],
    registry=REGISTRY,
)

TRAINING_EPOCHS = Counter(
    "somtracer_training_epochs_total",
    "Total annealing epochs completed",
    registry=REGISTRY,
)

SAMPLES_PROCESSED = Counter(
    "somtracer_samples_processed_total",
    "Total single-sample weight updates applied",
    registry=REGISTRY,
)

MODELS_TRAINED = Counter(
    "somtracer_models_trained_total",
    "Total number of completed training runs",
    registry=REGISTRY,
)

PROCESS_MEMORY_USAGE = Gauge(
    "somtracer_process_memory_rss_bytes",
    "Resident memory of the training process in bytes",
    registry=REGISTRY,
)

PROCESS_CPU_USAGE = Gauge(
    "somtracer_process_cpu_usage_percent",
    "CPU usage of the training process",
    registry=REGISTRY,
)


class CorrelationIDProcessor:
    """Add correlation ID to log entries"""

    def __call__(self, logger, method_name, event_dict):
        if "correlation_id" not in event_dict:
            event_dict["correlation_id"] = "unknown"
        return event_dict


def setup_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Configure structured logging with structlog"""

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        CorrelationIDProcessor(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
    )


def get_correlation_id() -> str:
    """Generate a new correlation ID"""
    return str(uuid.uuid4())


@contextmanager
def trace_operation(operation_name: str, **extra_context):
    """Context manager for tracing operations with duration logging"""
    logger = structlog.get_logger()
    correlation_id = get_correlation_id()
    start_time = time.time()

    logger.info(
        "Operation started",
        operation=operation_name,
        correlation_id=correlation_id,
        **extra_context,
    )

    try:
        yield correlation_id
        duration = time.time() - start_time
        logger.info(
            "Operation completed",
            operation=operation_name,
            correlation_id=correlation_id,
            duration_seconds=duration,
            **extra_context,
        )
    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            "Operation failed",
            operation=operation_name,
            correlation_id=correlation_id,
            duration_seconds=duration,
            error=str(e),
            error_type=type(e).__name__,
            **extra_context,
        )
        raise


def update_process_metrics():
    """Update process-level metrics"""
    try:
        process = psutil.Process()
        PROCESS_MEMORY_USAGE.set(process.memory_info().rss)
        PROCESS_CPU_USAGE.set(process.cpu_percent(interval=None))
    except psutil.Error as e:
        logger = structlog.get_logger()
        logger.error("Failed to update process metrics", error=str(e))


def get_metrics() -> bytes:
    """Get Prometheus metrics in text exposition format"""
    update_process_metrics()
    return generate_latest(REGISTRY)


def log_training_metrics(n_nodes: int, duration: float, epochs: int, samples: int):
    """Record a finished training run"""
    TRAINING_DURATION.labels(n_nodes=str(n_nodes)).observe(duration)
    TRAINING_EPOCHS.inc(epochs)
    SAMPLES_PROCESSED.inc(samples)
    MODELS_TRAINED.inc()
