from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Optional


class EventTrace:
    """JSON-lines record of command cycles.

    Each row carries the event name and a running ``seq`` number. A trace
    without a path records nothing. Use it as a context manager so the file
    is closed when a run ends or fails.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else None
        self.seq = 0
        self._fh: Optional[IO[str]] = None

    def open(self) -> "EventTrace":
        if self.path is not None and self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("w", encoding="utf-8")
        return self

    def record(self, event: str, **fields: Any) -> None:
        if self._fh is None:
            return
        self.seq += 1
        row = {"seq": self.seq, "event": event, **fields}
        self._fh.write(json.dumps(row, sort_keys=True) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "EventTrace":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
