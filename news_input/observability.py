import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram

# Attributes every LogRecord carries; anything else came in through ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> dict:
    return {k: v for k, v in vars(record).items()
            if k not in _STANDARD_ATTRS and not k.startswith("_")}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger from the ``log_level``/``log_format`` settings."""
    handler = logging.StreamHandler()
    if fmt.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO),
                        handlers=[handler], force=True)


@dataclass
class IngestionMetrics:
    """Prometheus metrics for one processor instance, on its own registry."""
    registry: CollectorRegistry = field(default_factory=CollectorRegistry)
    requests: Optional[Counter] = None
    duration: Optional[Histogram] = None
    fetch_attempts: Optional[Counter] = None

    def __post_init__(self):
        self.requests = Counter(
            "ingestion_requests_total", "Ingestion requests by source and outcome",
            labelnames=("source_type", "outcome"), registry=self.registry,
        )
        self.duration = Histogram(
            "ingestion_seconds", "Time spent processing one ingestion request",
            labelnames=("source_type",),
            buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60), registry=self.registry,
        )
        self.fetch_attempts = Counter(
            "fetch_attempts_total", "URL fetch attempts by outcome",
            labelnames=("outcome",), registry=self.registry,
        )

    def observe_request(self, source_type: str, success: bool, seconds: float) -> None:
        outcome = "success" if success else "failure"
        self.requests.labels(source_type, outcome).inc()
        self.duration.labels(source_type).observe(max(0.0, seconds))

    def inc_fetch_attempt(self, outcome: str) -> None:
        self.fetch_attempts.labels(outcome).inc()
