"""Run logger for recording each aggregation's upstream pages to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from newssphere.data import AggregatedResult


class PageRecord(BaseModel):
    """Record of a single upstream page fetched during aggregation."""

    index: int
    cursor: str | None = None
    fetched: int = 0
    kept: int = 0
    collected: int = 0
    next_token: str | None = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete aggregation."""

    run_id: str
    endpoint: str
    params: dict[str, Any]
    requested_size: int
    started_at: str
    completed_at: str | None = None
    pages: list[PageRecord] = []
    returned_count: int = 0
    total_results_approx: int = 0
    next_continuation_token: str | None = None
    error: str | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, lists, dicts, and primitives.
    """
    if obj is None:
        return None
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Accumulates page records and writes a JSON log file per aggregation.

    When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    def start_run(
        self,
        endpoint: str,
        params: dict[str, Any],
        requested_size: int,
    ) -> RunRecord | None:
        """Create a record for a new aggregation.

        Each request owns its record, so concurrent aggregations sharing
        this logger never interleave.
        """
        if not self._enabled:
            return None

        return RunRecord(
            run_id=str(uuid.uuid4()),
            endpoint=endpoint,
            params=_serialize(params),
            requested_size=requested_size,
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_page(
        self,
        record: RunRecord | None,
        *,
        cursor: str | None,
        fetched: int,
        kept: int,
        collected: int,
        next_token: str | None,
        duration_seconds: float,
    ) -> None:
        """Append a page record to ``record``.

        Args:
            record: Record returned by ``start_run``.
            cursor: Continuation token the page was requested with.
            fetched: Articles returned by the provider.
            kept: Articles left after deduplicating within the page.
            collected: Size of the running collection after this page.
            next_token: Token returned by the provider, if any.
            duration_seconds: Wall-clock time of the upstream call.
        """
        if not self._enabled or record is None:
            return

        record.pages.append(
            PageRecord(
                index=len(record.pages),
                cursor=cursor,
                fetched=fetched,
                kept=kept,
                collected=collected,
                next_token=next_token,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(
        self,
        record: RunRecord | None,
        result: AggregatedResult | None,
        *,
        error: BaseException | None = None,
    ) -> Path | None:
        """Write the run record to a JSON file.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or record is None:
            return None

        record.completed_at = datetime.now(tz=UTC).isoformat()
        if result is not None:
            record.returned_count = len(result.articles)
            record.total_results_approx = result.total_results_approx
            record.next_continuation_token = result.next_continuation_token
        if error is not None:
            record.error = str(error)

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00_<id>.json (colons → dashes)
        ts = record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"run_{ts}_{record.run_id[:8]}.json"

        filepath.write_text(record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
