from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, TextIO
import json
import os
import threading
import time


class TelemetryLogger:
    """Structured JSONL logger for rover telemetry.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    Every record carries an ``event`` name and a wall-clock ``t`` stamp.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_event(self, event: str, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        payload = {"event": event, "t": time.time()}
        payload.update(record)
        line = json.dumps(payload, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()

    def log_step(self, rover: int, index: int, instruction: str, state: Dict[str, Any]) -> None:
        """Record the state of a rover after one instruction."""
        self.log_event(
            "step",
            {"rover": rover, "index": index, "instruction": instruction, **state},
        )

    def log_final(self, rover: int, state: Dict[str, Any]) -> None:
        """Record the state of a rover once its instructions are exhausted."""
        self.log_event("final", {"rover": rover, **state})

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def iter_telemetry(path: str) -> Iterator[Dict[str, Any]]:
    """Yield records of a JSONL telemetry file, skipping undecodable lines."""
    if not os.path.exists(path):
        return
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def load_telemetry(path: str, event: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read a telemetry file, optionally keeping only one event type."""
    return [r for r in iter_telemetry(path) if event is None or r.get("event") == event]
