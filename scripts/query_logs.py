#!/usr/bin/env python3
"""
Log Query Tool for Session Event Logs

Inspect the per-session JSONL files written by log_hook.py. Read-only.

Usage:
    python scripts/query_logs.py
    python scripts/query_logs.py --query events --session abc123 --limit 20
    python scripts/query_logs.py --query summary --session abc123
    python scripts/query_logs.py --base-dir ./hook-logs --query sessions

Query Types:
    sessions     - List all session logs with event count, size, last write
    events       - Show the last events of one session
    summary      - Count events per hook_event_name for one session
"""

import argparse
import json
import sys
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

# Allow running as a plain script from the repository root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import HOOK_DEBUG_DIR, QUERY_DEFAULT_LIMIT, QUERY_PREVIEW_WIDTH, SESSION_LOG_SUFFIX
from persistence.jsonl import SessionJSONLWriter, SessionLogInfo, list_sessions, read_jsonl, read_jsonl_tail


class HookLogQuery:
    """
    Query session event logs.

    Provides listing, tail and per-event-name summaries over one base directory.
    """

    def __init__(self, base_dir: str = HOOK_DEBUG_DIR):
        self.base_dir = Path(base_dir)
        self._writer = SessionJSONLWriter(str(self.base_dir), SESSION_LOG_SUFFIX)

    def sessions(self) -> List[SessionLogInfo]:
        return list_sessions(str(self.base_dir), SESSION_LOG_SUFFIX)

    def has_session(self, session_id: str) -> bool:
        return self._writer.path_for(session_id).is_file()

    def events(self, session_id: str, limit: Optional[int] = None) -> List:
        """
        Get events of a session in write order.

        Args:
            session_id: Session identifier
            limit: Only the last N events (default: all)
        """
        path = self._writer.path_for(session_id)
        if limit:
            return read_jsonl_tail(str(path), n=limit)
        return read_jsonl(str(path))

    def summary(self, session_id: str) -> Dict[str, int]:
        """Count events per hook_event_name, most frequent first."""
        counts = Counter(_field(event, 'hook_event_name') for event in self.events(session_id))
        return dict(counts.most_common())


def _field(event, name: str) -> str:
    if isinstance(event, dict) and event.get(name) is not None:
        return str(event[name])
    return "-"


def _preview(event, width: int = QUERY_PREVIEW_WIDTH) -> str:
    text = json.dumps(event, separators=(',', ':'), ensure_ascii=False)
    if len(text) > width:
        return text[:width - 1] + "…"
    return text


def _format_size(size_bytes: int) -> str:
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def render_sessions_table(sessions: List[SessionLogInfo]) -> Table:
    table = Table(title="Session Logs", title_justify="left", header_style="bold magenta")
    table.add_column("Session", style="cyan", no_wrap=True)
    table.add_column("Events", justify="right")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Last Write (UTC)", style="dim")

    for info in sessions:
        modified = datetime.fromtimestamp(info.modified, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(info.session_id, str(info.events), _format_size(info.size_bytes), modified)

    return table


def render_events_table(session_id: str, events: List) -> Table:
    table = Table(title=f"Events: {session_id}", title_justify="left", header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Hook Event", style="yellow", no_wrap=True)
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Payload")

    for i, event in enumerate(events, 1):
        table.add_row(str(i), _field(event, 'hook_event_name'), _field(event, 'tool_name'), _preview(event))

    return table


def render_summary_table(session_id: str, counts: Dict[str, int]) -> Table:
    table = Table(title=f"Summary: {session_id}", title_justify="left", header_style="bold magenta")
    table.add_column("Hook Event", style="yellow")
    table.add_column("Count", justify="right")

    for name, count in counts.items():
        table.add_row(name, str(count))

    return table


def main(argv=None, console: Optional[Console] = None):
    """CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Query session event logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--base-dir',
        default=HOOK_DEBUG_DIR,
        help=f"Directory holding session logs (default: {HOOK_DEBUG_DIR})"
    )

    parser.add_argument(
        '--query',
        default='sessions',
        choices=['sessions', 'events', 'summary'],
        help="Query type (default: sessions)"
    )

    parser.add_argument(
        '--session',
        help="Session id (required for events and summary)"
    )

    parser.add_argument(
        '--limit',
        type=int,
        default=QUERY_DEFAULT_LIMIT,
        help=f"Show only the last N events (default: {QUERY_DEFAULT_LIMIT})"
    )

    args = parser.parse_args(argv)
    if args.limit < 1:
        parser.error("--limit must be at least 1")

    console = console or Console()
    query = HookLogQuery(args.base_dir)

    if args.query == 'sessions':
        sessions = query.sessions()
        if not sessions:
            console.print(f"No session logs in {query.base_dir}")
            return
        console.print(render_sessions_table(sessions))
        return

    if not args.session:
        parser.error(f"--session is required for --query {args.query}")

    if not query.has_session(args.session):
        console.print(f"❌ Error: Session log not found: {args.session}", style="red", markup=False)
        sessions = query.sessions()
        if sessions:
            console.print("\nAvailable sessions:")
            for info in sessions:
                console.print(f"  - {info.session_id}")
        sys.exit(1)

    if args.query == 'events':
        events = query.events(args.session, limit=args.limit)
        console.print(render_events_table(args.session, events))

    elif args.query == 'summary':
        console.print(render_summary_table(args.session, query.summary(args.session)))


if __name__ == "__main__":
    main()
