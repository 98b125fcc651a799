"""Stage-level timing capture for graph pipeline runs."""

from __future__ import annotations

import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator


def _isoformat(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StageTimer:
    """Utility to capture stage-level timings for a pipeline run."""

    def __init__(self) -> None:
        self._origin = time.perf_counter()
        self._wall_start = datetime.now(timezone.utc)
        self._stages: list[dict[str, Any]] = []

    @contextmanager
    def track(self, name: str) -> Iterator[None]:
        start_counter = time.perf_counter()
        start_wall = datetime.now(timezone.utc)
        try:
            yield
        finally:
            end_counter = time.perf_counter()
            end_wall = datetime.now(timezone.utc)
            self._stages.append(
                {
                    "name": name,
                    "duration_ms": round((end_counter - start_counter) * 1000.0, 3),
                    "offset_ms": round((start_counter - self._origin) * 1000.0, 3),
                    "started_at": _isoformat(start_wall),
                    "finished_at": _isoformat(end_wall),
                }
            )

    def snapshot(self) -> dict[str, Any]:
        total_ms = round((time.perf_counter() - self._origin) * 1000.0, 3)
        return {
            "total_duration_ms": total_ms,
            "stages": list(self._stages),
            "started_at": _isoformat(self._wall_start),
            "finished_at": _isoformat(datetime.now(timezone.utc)),
        }
