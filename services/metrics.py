"""In-process metrics for authentication, authorization and request timing.

Counters and histograms are keyed by name plus sorted labels, e.g.
``auth_events{event="login_success"}``. Every ``report_interval`` seconds the
collected window is logged as one "Metrics report" line and cleared.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable, Optional

from flask import current_app

METRICS_KEY = "teamtasks.metrics"
AUTH_EVENTS = ("login_success", "login_failure", "logout")


def metric_key(name: str, labels: Optional[dict[str, str]] = None) -> str:
    if not labels:
        return name
    rendered = ",".join(f'{key}="{value}"' for key, value in sorted(labels.items()))
    return f"{name}{{{rendered}}}"


def _percentile(values: list[float], fraction: float) -> float:
    ordered = sorted(values)
    index = max(math.ceil(len(ordered) * fraction) - 1, 0)
    return ordered[index]


class MetricsRegistry:
    def __init__(self, report_interval: float = 60, clock: Callable[[], float] = time.monotonic):
        self.report_interval = report_interval
        self.clock = clock
        self._counters: dict[str, dict] = {}
        self._histograms: dict[str, dict] = {}
        self._lock = threading.Lock()
        self._window_started = clock()

    def increment_counter(self, name: str, labels: Optional[dict[str, str]] = None) -> None:
        key = metric_key(name, labels)
        with self._lock:
            counter = self._counters.setdefault(key, {"value": 0, "labels": labels or {}})
            counter["value"] += 1

    def record_histogram(
        self, name: str, value: float, labels: Optional[dict[str, str]] = None
    ) -> None:
        key = metric_key(name, labels)
        with self._lock:
            histogram = self._histograms.setdefault(key, {"values": [], "labels": labels or {}})
            histogram["values"].append(value)

    def track_auth_event(self, event: str, user_id: Optional[str] = None) -> None:
        if event not in AUTH_EVENTS:
            raise ValueError(f"Unknown authentication event '{event}'")
        self.increment_counter("auth_events", {"event": event})
        logging.info("Authentication event: %s (user=%s)", event, user_id)

    def track_authorization_failure(self, resource: str, user_id: Optional[str], reason: str) -> None:
        self.increment_counter("authorization_failures", {"resource": resource})
        logging.warning(
            "Authorization failure: resource=%s user=%s reason=%s", resource, user_id, reason
        )

    def counter(self, name: str, labels: Optional[dict[str, str]] = None) -> int:
        with self._lock:
            counter = self._counters.get(metric_key(name, labels))
            return counter["value"] if counter else 0

    def snapshot(self) -> dict[str, dict]:
        """Return the current window, histograms summarized."""
        with self._lock:
            report = {
                key: {"type": "counter", "value": counter["value"], "labels": dict(counter["labels"])}
                for key, counter in self._counters.items()
            }
            for key, histogram in self._histograms.items():
                values = histogram["values"]
                if not values:
                    continue
                total = sum(values)
                report[key] = {
                    "type": "histogram",
                    "count": len(values),
                    "sum": total,
                    "avg": total / len(values),
                    "min": min(values),
                    "max": max(values),
                    "p50": _percentile(values, 0.5),
                    "p95": _percentile(values, 0.95),
                    "p99": _percentile(values, 0.99),
                    "labels": dict(histogram["labels"]),
                }
            return report

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._histograms.clear()
            self._window_started = self.clock()

    def report_if_due(self) -> bool:
        """Log and clear the window once ``report_interval`` has elapsed.

        An interval of 0 turns periodic reporting off.
        """
        if not self.report_interval or self.clock() - self._window_started < self.report_interval:
            return False
        report = self.snapshot()
        if report:
            logging.info("Metrics report: %s", report)
        self.reset()
        return True


def current_metrics() -> Optional[MetricsRegistry]:
    return current_app.extensions.get(METRICS_KEY)
