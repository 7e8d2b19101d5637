"""Durable per-node progress for resumable downloads."""

import json
import os
from pathlib import Path

from loguru import logger

from yuque_mirror.config import PROGRESS_FILE_NAME
from yuque_mirror.models.toc import ProgressRecord, ResolvedEntry


class ProgressStore:
    """Append-only record of finished nodes, one JSON object per line.

    Every append is flushed and fsynced before returning, so a killed process
    leaves at most one torn trailing line, which load() discards.
    """

    def __init__(self, book_path: str | Path, total: int) -> None:
        self.path = Path(book_path) / PROGRESS_FILE_NAME
        self.total = total
        self.records: list[ProgressRecord] = []
        self.completed_count = 0

    def load(self) -> list[ProgressRecord]:
        """Read back whatever was durably appended by earlier runs."""
        self.records = []
        self.completed_count = 0
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []

        lines = raw.split(b"\n")
        good_size = 0
        for lnum, line in enumerate(lines):
            is_last = lnum == len(lines) - 1
            if not line.strip():
                good_size += len(line) + (0 if is_last else 1)
                continue
            try:
                record = _parse_record(line)
            except (ValueError, KeyError, TypeError) as e:
                if is_last:
                    logger.warning(f"Dropping torn progress record at end of {str(self.path)!r}")
                    self._truncate(good_size)
                    break
                msg = f"Corrupt progress record in {str(self.path)!r} line {lnum + 1}: {e}"
                raise ValueError(msg) from e
            if is_last:
                # Complete JSON but no newline; terminate it so the next append stays on its own line.
                self._truncate(good_size + len(line), terminate=True)
            good_size += len(line) + 1
            self._add(record)

        logger.debug(
            f"Loaded {len(self.records)} progress records "
            f"({self.completed_count} completed of {self.total})"
        )
        return list(self.records)

    def append(self, entry: ResolvedEntry, success: bool) -> None:
        """Persist one outcome. Durable once this returns."""
        line = json.dumps({"entry": entry.to_dict(), "success": success}, ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()
            os.fsync(f.fileno())
        self._add(ProgressRecord(entry=entry, success=success))

    def is_interrupted(self) -> bool:
        return 0 < len(self.records) < self.total

    def is_complete(self) -> bool:
        return self.completed_count == self.total

    def _add(self, record: ProgressRecord) -> None:
        self.records.append(record)
        if record.success:
            self.completed_count += 1

    def _truncate(self, size: int, *, terminate: bool = False) -> None:
        with open(self.path, "r+b") as f:
            f.truncate(size)
            if terminate:
                f.seek(size)
                f.write(b"\n")
            f.flush()
            os.fsync(f.fileno())


def _parse_record(line: bytes) -> ProgressRecord:
    raw = json.loads(line.decode("utf-8"))
    success = raw["success"]
    if not isinstance(success, bool):
        msg = f"bad success flag: {success!r}"
        raise ValueError(msg)
    return ProgressRecord(entry=ResolvedEntry.from_dict(raw["entry"]), success=success)
