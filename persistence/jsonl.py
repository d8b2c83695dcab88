#!/usr/bin/env python3
"""
Session JSONL Writer and Readers

Provides append-only per-session persistence with:
- One file per session: <base_dir>/<session_id>.jsonl
- Auto-directory creation (recursive, idempotent) before every append
- Compact single-line records, one write() per record in append mode
- Read helpers for inspection tooling (full read, tail, session listing)

The session id is used unsanitized as a path segment. "/" and ".." are
interpreted as path syntax, so an id can point outside base_dir.
"""

import json
import logging
import os
from collections import deque
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from config import HOOK_DEBUG_DIR, SESSION_LOG_SUFFIX
from core.errors import FilesystemError

logger = logging.getLogger(__name__)


def session_stem(session_id: Any) -> str:
    """
    File stem for a session id.

    Strings are used verbatim; any other JSON value is rendered as its
    compact JSON text (null, true, 42, ...).
    """
    if isinstance(session_id, str):
        return session_id
    return json.dumps(session_id, separators=(',', ':'), ensure_ascii=False)


class SessionJSONLWriter:
    """
    Append-only JSONL writer keyed by session id.

    No locking and no rotation: concurrent writers to the same session rely
    on the atomicity of O_APPEND writes provided by the operating system.
    Errors are raised, never swallowed.
    """

    def __init__(self, base_dir: str = HOOK_DEBUG_DIR, suffix: str = SESSION_LOG_SUFFIX):
        """
        Initialize session writer.

        Args:
            base_dir: Base directory for session files (default: config.HOOK_DEBUG_DIR)
            suffix: File suffix including the dot (default: ".jsonl")
        """
        self.base_dir = Path(base_dir)
        self.suffix = suffix

    def path_for(self, session_id: Any) -> Path:
        """
        Resolve the log file for a session.

        Joins and normalizes lexically, like a path-join: absolute ids stay
        below base_dir, ".." segments collapse.
        """
        stem = session_stem(session_id)
        return Path(os.path.normpath(f"{self.base_dir}{os.sep}{stem}{self.suffix}"))

    def ensure_dir(self) -> None:
        """Create base_dir and missing parents; no-op if it already exists."""
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(e.errno, f"Cannot create log directory {self.base_dir}: {e.strerror}") from e

    @staticmethod
    def serialize(event: Any) -> str:
        """Compact one-line JSON, key order preserved, terminated by a single newline."""
        return json.dumps(event, separators=(',', ':'), ensure_ascii=False, allow_nan=False) + '\n'

    @classmethod
    def encode(cls, event: Any) -> bytes:
        """
        UTF-8 bytes of the serialized record.

        Lone surrogates cannot be encoded; they only occur inside JSON
        strings, where backslashreplace yields the valid \\uXXXX escape.
        """
        return cls.serialize(event).encode('utf-8', 'backslashreplace')

    def append(self, session_id: Any, event: Any) -> Path:
        """
        Append event to the session file.

        Args:
            session_id: Session identifier (file stem, see session_stem)
            event: Parsed JSON value to re-serialize

        Returns:
            Path of the file written

        Raises:
            FilesystemError: Directory creation or append failed
        """
        self.ensure_dir()

        path = self.path_for(session_id)
        data = self.encode(event)

        try:
            with path.open('ab') as f:
                f.write(data)
        except OSError as e:
            raise FilesystemError(e.errno, f"Cannot append to {path}: {e.strerror}") from e
        except ValueError as e:
            # open() rejects paths with NUL bytes or unencodable characters
            raise FilesystemError(f"Invalid log path for session {session_id!r}: {e}") from e

        logger.debug(
            f"Appended {len(data)} bytes to {path}",
            extra={
                'event_type': 'HOOK_EVENT_APPENDED',
                'session_id': session_stem(session_id),
                'path': str(path)
            }
        )
        return path


@dataclass
class SessionLogInfo:
    """Summary of one session log file."""
    session_id: str
    path: Path
    events: int
    size_bytes: int
    modified: float


def _decode_records(numbered_lines: Iterable[Tuple[int, bytes]], source: str) -> list:
    # Blank lines are ignored, corrupt ones reported and skipped
    records = []
    for lineno, raw in numbered_lines:
        if not raw.strip():
            continue
        try:
            records.append(json.loads(raw.decode('utf-8')))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping unreadable record {source}:{lineno}: {e}")
    return records


def read_jsonl(file_path: str, limit: Optional[int] = None) -> list:
    """
    Parse a session log from the top.

    Args:
        file_path: Path to JSONL file
        limit: Stop after this many physical lines (default: all)

    Returns:
        Parsed records; [] when the file does not exist
    """
    path = Path(file_path)
    if not path.is_file():
        return []

    with path.open('rb') as f:
        numbered = enumerate(f, 1)
        if limit:
            numbered = islice(numbered, limit)
        return _decode_records(numbered, file_path)


def read_jsonl_tail(file_path: str, n: int = 300) -> list:
    """Parse only the last n lines of a session log."""
    path = Path(file_path)
    if not path.is_file():
        return []

    with path.open('rb') as f:
        tail = deque(enumerate(f, 1), maxlen=n)
    return _decode_records(tail, file_path)


def list_sessions(base_dir: str = HOOK_DEBUG_DIR, suffix: str = SESSION_LOG_SUFFIX) -> List[SessionLogInfo]:
    """
    List session log files in base_dir, newest first.

    Returns:
        One SessionLogInfo per file; empty list if base_dir does not exist
    """
    base = Path(base_dir)
    if not base.is_dir():
        return []

    sessions = []
    for path in base.glob(f"*{suffix}"):
        if not path.is_file():
            continue

        stat = path.stat()
        with path.open('rb') as f:
            events = sum(1 for line in f if line.strip())

        sessions.append(SessionLogInfo(
            session_id=path.name[:-len(suffix)] if suffix else path.name,
            path=path,
            events=events,
            size_bytes=stat.st_size,
            modified=stat.st_mtime
        ))

    sessions.sort(key=lambda s: s.modified, reverse=True)
    return sessions
