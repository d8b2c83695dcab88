#!/usr/bin/env python3
"""
Session Event Logger Hook

Reads one JSON event from stdin and appends it, as one compact line, to
<base-dir>/<session_id>.jsonl. The base directory defaults to
config.HOOK_DEBUG_DIR and is created when missing.

Usage:
    echo '{"session_id":"abc123","event":"start"}' | python log_hook.py
    echo '{"session_id":"abc123","n":1}' | python log_hook.py --base-dir ./hook-logs

Errors are not handled here: invalid JSON raises ParseError, filesystem
failures raise FilesystemError, and the interpreter exits non-zero with a
traceback. Nothing is written to stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, BinaryIO

from config import HOOK_DEBUG_DIR, INPUT_DECODE_ERRORS, INPUT_ENCODING, MISSING_SESSION_ID
from core.errors import ParseError
from core.logging import setup_logger
from persistence.jsonl import SessionJSONLWriter

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant {name!r}")


def read_event(stream: BinaryIO) -> Any:
    """
    Buffer the whole stream, decode it and parse it as strict JSON.

    Raises:
        ParseError: Input is empty or not valid JSON text
    """
    raw = stream.read()
    text = raw.decode(INPUT_ENCODING, errors=INPUT_DECODE_ERRORS)

    try:
        event = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ParseError(f"Invalid JSON on stdin ({len(raw)} bytes): {e}") from e

    logger.debug(
        f"Received event ({len(raw)} bytes)",
        extra={'event_type': 'HOOK_EVENT_RECEIVED', 'size_bytes': len(raw)}
    )
    return event


def session_id_of(event: Any) -> Any:
    """
    Return event["session_id"] without validation.

    An absent field (or a non-object event) yields MISSING_SESSION_ID; an
    explicit null stays None and is written to null.jsonl.
    """
    if isinstance(event, dict) and "session_id" in event:
        return event["session_id"]
    return MISSING_SESSION_ID


def run(stream: BinaryIO, base_dir: str = HOOK_DEBUG_DIR) -> Path:
    """
    Log one event from stream.

    Returns:
        Path of the session file that received the record
    """
    event = read_event(stream)
    session_id = session_id_of(event)
    return SessionJSONLWriter(base_dir).append(session_id, event)


def main(argv=None) -> None:
    """CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Append a JSON event from stdin to a per-session JSONL log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--base-dir',
        default=HOOK_DEBUG_DIR,
        help=f"Directory for session logs (default: {HOOK_DEBUG_DIR})"
    )

    args = parser.parse_args(argv)

    setup_logger()
    run(sys.stdin.buffer, base_dir=args.base_dir)


if __name__ == "__main__":
    main()
