"""
Rotating file error log - Infrastructure layer.

One file per UTC day (``error-YYYY-MM-DD.log``), one JSON record per line.
After every append the directory is trimmed to ``max_log_files`` and any
retained file above ``max_log_size`` is renamed out of the way so the next
write starts a fresh canonical file.

Nothing in this module raises into the caller: a logger that fails loudly
would feed its own failure back into itself.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional

from siteops.domain.entities.log_record import LogRecord, format_timestamp
from siteops.domain.ports.log_sink import ILogSink
from siteops.shared import get_logger

logger = get_logger(__name__)

LOG_FILE_PREFIX = "error-"
LOG_FILE_SUFFIX = ".log"
DEFAULT_MAX_LOG_FILES = 10
DEFAULT_MAX_LOG_SIZE = 10 * 1024 * 1024


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_log_file_name(name: str) -> bool:
    return name.startswith(LOG_FILE_PREFIX) and name.endswith(LOG_FILE_SUFFIX)


def archive_name_for(file_name: str, rotated_at: datetime) -> str:
    """``error-2024-05-01.log`` -> ``error-2024-05-01-<timestamp>.log``."""
    stamp = format_timestamp(rotated_at).replace(":", "-").replace(".", "-")
    return file_name.replace(LOG_FILE_SUFFIX, f"-{stamp}{LOG_FILE_SUFFIX}", 1)


class FileErrorLogger(ILogSink):
    """Append-only dated log files with size rotation and retention."""

    def __init__(
        self,
        log_dir: str | Path = "logs",
        max_log_files: int = DEFAULT_MAX_LOG_FILES,
        max_log_size: int = DEFAULT_MAX_LOG_SIZE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.max_log_files = max_log_files
        self.max_log_size = max_log_size
        self._clock = clock

    def current_log_file(self) -> Path:
        date = self._clock().astimezone(timezone.utc).date().isoformat()
        return self.log_dir / f"{LOG_FILE_PREFIX}{date}{LOG_FILE_SUFFIX}"

    async def write(self, record: LogRecord) -> None:
        await self.log_to_file(record)

    async def log_to_file(self, record: LogRecord) -> None:
        """Append ``record`` to today's file, then rotate."""
        try:
            line = json.dumps(record.to_dict(), default=str) + "\n"
            await asyncio.to_thread(self._append, self.current_log_file(), line)
        except Exception as exc:
            logger.error("error_logger.write_failed", error=str(exc))
            return

        await self.rotate_logs()

    def _append(self, path: Path, line: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line)

    def _list_log_files(self) -> List[str]:
        """Log file names, newest first (name order is chronological)."""
        return sorted(
            (
                entry.name
                for entry in self.log_dir.iterdir()
                if is_log_file_name(entry.name)
            ),
            reverse=True,
        )

    async def rotate_logs(self) -> None:
        try:
            await asyncio.to_thread(self._rotate)
        except Exception as exc:
            logger.error("error_logger.rotation_failed", error=str(exc))

    def _rotate(self) -> None:
        log_files = self._list_log_files()

        for name in log_files[self.max_log_files :]:
            try:
                (self.log_dir / name).unlink()
                logger.info("error_logger.file_evicted", file=name)
            except OSError as exc:
                logger.warning("error_logger.evict_failed", file=name, error=str(exc))

        for name in log_files[: self.max_log_files]:
            path = self.log_dir / name
            if path.stat().st_size > self.max_log_size:
                archive = archive_name_for(name, self._clock())
                path.rename(self.log_dir / archive)
                logger.info("error_logger.file_rotated", file=name, archive=archive)

    async def get_recent_logs(self, limit: int = 50) -> List[LogRecord]:
        """Newest records first, skipping anything that does not parse."""
        try:
            return await asyncio.to_thread(self._read_recent, limit)
        except Exception as exc:
            logger.error("error_logger.read_failed", error=str(exc))
            return []

    def _read_recent(self, limit: int) -> List[LogRecord]:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        records: List[LogRecord] = []
        if limit <= 0:
            return records

        for name in self._list_log_files():
            if len(records) >= limit:
                break
            try:
                content = (self.log_dir / name).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("error_logger.file_unreadable", file=name, error=str(exc))
                continue

            for line in reversed(content.strip().splitlines()):
                if len(records) >= limit:
                    break
                if not line.strip():
                    continue
                record = self._parse_line(line)
                if record is not None:
                    records.append(record)

        return records

    @staticmethod
    def _parse_line(line: str) -> Optional[LogRecord]:
        try:
            return LogRecord.from_dict(json.loads(line))
        except (ValueError, KeyError, TypeError, AttributeError):
            return None

    async def clear_logs(self, older_than_days: int = 30) -> List[str]:
        """Delete log files last modified before the cutoff; returns their names."""
        try:
            return await asyncio.to_thread(self._clear, older_than_days)
        except Exception as exc:
            logger.error("error_logger.clear_failed", error=str(exc))
            return []

    def _clear(self, older_than_days: int) -> List[str]:
        cutoff = (self._clock() - timedelta(days=older_than_days)).timestamp()
        removed: List[str] = []
        if not self.log_dir.exists():
            return removed

        for entry in self.log_dir.iterdir():
            if not is_log_file_name(entry.name):
                continue
            try:
                if entry.stat().st_mtime < cutoff:
                    entry.unlink()
                    removed.append(entry.name)
            except FileNotFoundError:
                continue

        if removed:
            logger.info("error_logger.files_cleared", count=len(removed))
        return removed
