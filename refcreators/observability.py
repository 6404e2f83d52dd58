"""Observability - Structured logging, metrics and the diagnostic channel"""

import asyncio
import json
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Optional

from .db.config import settings


# ============ Structured Logging ============

class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields
        if hasattr(record, "extra"):
            log_data.update(record.extra)

        # Add exception info
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_format: bool = True) -> logging.Logger:
    """
    Setup structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON format for logs

    Returns:
        Configured logger
    """
    logger = logging.getLogger("refcreators")
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logger.addHandler(handler)
    return logger


# Global logger
logger = setup_logging(settings.log_level, settings.log_json)


def log_with_context(**context):
    """Create a log adapter that attaches extra context to every record"""
    class ContextAdapter(logging.LoggerAdapter):
        def process(self, msg, kwargs):
            kwargs.setdefault("extra", {})
            kwargs["extra"]["extra"] = {**self.extra, **kwargs["extra"].get("extra", {})}
            return msg, kwargs

    return ContextAdapter(logger, context)


# ============ Metrics ============

@dataclass
class Metrics:
    """In-memory metrics collector"""

    # Counters
    resolve_count: int = 0
    create_count: int = 0
    fetch_count: int = 0
    update_count: int = 0
    purge_count: int = 0
    purged_creators: int = 0
    anomaly_count: int = 0
    error_count: int = 0

    # Latency histograms (simplified as lists)
    resolve_latencies: list[float] = field(default_factory=list)
    fetch_latencies: list[float] = field(default_factory=list)
    purge_latencies: list[float] = field(default_factory=list)

    # Gauges
    cached_creators: int = 0

    # Cache for hit rate
    cache_hits: int = 0
    cache_misses: int = 0

    def increment(self, name: str, value: int = 1) -> None:
        """Increment a counter"""
        if hasattr(self, name):
            setattr(self, name, getattr(self, name) + value)

    def record_latency(self, name: str, latency_ms: float) -> None:
        """Record a latency measurement"""
        latency_list = getattr(self, f"{name}_latencies", None)
        if latency_list is not None:
            latency_list.append(latency_ms)
            # Keep last 1000 measurements
            if len(latency_list) > 1000:
                latency_list.pop(0)

    def set_gauge(self, name: str, value: int) -> None:
        """Set a gauge value"""
        if hasattr(self, name):
            setattr(self, name, value)

    def get_percentile(self, name: str, percentile: float) -> Optional[float]:
        """Get percentile from latency histogram"""
        latencies = getattr(self, f"{name}_latencies", [])
        if not latencies:
            return None
        sorted_latencies = sorted(latencies)
        idx = int(len(sorted_latencies) * percentile / 100)
        return sorted_latencies[min(idx, len(sorted_latencies) - 1)]

    def get_hit_rate(self) -> float:
        """Calculate cache hit rate"""
        total = self.cache_hits + self.cache_misses
        return self.cache_hits / total if total > 0 else 0.0

    def to_dict(self) -> dict:
        """Export metrics as dictionary"""
        return {
            "counters": {
                "resolve_count": self.resolve_count,
                "create_count": self.create_count,
                "fetch_count": self.fetch_count,
                "update_count": self.update_count,
                "purge_count": self.purge_count,
                "purged_creators": self.purged_creators,
                "anomaly_count": self.anomaly_count,
                "error_count": self.error_count,
            },
            "latencies": {
                "resolve_p50": self.get_percentile("resolve", 50),
                "resolve_p95": self.get_percentile("resolve", 95),
                "fetch_p50": self.get_percentile("fetch", 50),
                "fetch_p95": self.get_percentile("fetch", 95),
                "purge_p50": self.get_percentile("purge", 50),
            },
            "gauges": {
                "cached_creators": self.cached_creators,
            },
            "cache": {
                "hit_rate": round(self.get_hit_rate(), 3),
                "hits": self.cache_hits,
                "misses": self.cache_misses,
            },
        }

    def reset(self) -> None:
        """Reset all metrics"""
        self.resolve_count = 0
        self.create_count = 0
        self.fetch_count = 0
        self.update_count = 0
        self.purge_count = 0
        self.purged_creators = 0
        self.anomaly_count = 0
        self.error_count = 0
        self.resolve_latencies.clear()
        self.fetch_latencies.clear()
        self.purge_latencies.clear()
        self.cached_creators = 0
        self.cache_hits = 0
        self.cache_misses = 0


# Global metrics instance
metrics = Metrics()


# ============ Diagnostic Channel ============

class DiagnosticChannel:
    """
    Fire-and-forget sink for non-fatal anomalies.

    Anomalies are logged at WARNING level and counted; reporting never
    raises, so callers' control flow is unaffected.
    """

    def __init__(self, log: Optional[logging.Logger] = None, max_reported: int = 1000):
        self._logger = log or logger
        # Most recent anomalies only; the full history lives in the log
        self.reported: deque[str] = deque(maxlen=max_reported)

    def report_anomaly(self, message: Any) -> None:
        """Record an anomaly (a message or a Warning instance)"""
        text = str(message)
        self.reported.append(text)
        metrics.increment("anomaly_count")
        # logging handlers report their own failures via handleError
        self._logger.warning(text, extra={"extra": {"anomaly": type(message).__name__}})

    def clear(self) -> None:
        self.reported.clear()


# Global diagnostic channel
diagnostics = DiagnosticChannel()


# ============ Decorators ============

def track_latency(operation: str):
    """Decorator to track operation latency"""
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                metrics.record_latency(operation, elapsed_ms)
                metrics.increment(f"{operation}_count")

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                metrics.record_latency(operation, elapsed_ms)
                metrics.increment(f"{operation}_count")

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def track_errors(func: Callable):
    """Decorator to count and log unexpected errors, then re-raise"""
    @wraps(func)
    async def async_wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            metrics.increment("error_count")
            logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
            raise

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            metrics.increment("error_count")
            logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
            raise

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper


# ============ Health Check ============

async def get_health_status(uow) -> dict:
    """
    Get comprehensive health status.

    Args:
        uow: Unit of work

    Returns:
        Health status dict
    """
    status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {},
    }

    try:
        creator_types = await uow.creator_types.list()
        purge_pending = await uow.preferences.get_bool("purge.creators")
        status["checks"]["database"] = {"status": "ok"}
        status["checks"]["data"] = {
            "status": "ok",
            "creator_types": len(creator_types),
            "purge_pending": purge_pending,
        }
    except Exception as e:
        status["checks"]["database"] = {"status": "error", "message": str(e)}
        status["status"] = "unhealthy"

    return status
