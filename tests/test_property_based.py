#!/usr/bin/env python3
"""
Property-Based Tests for the Session Event Logger

Uses Hypothesis to generate randomized events for:
- One compact line per invocation
- Append accumulation in invocation order
- Session routing by session_id only
"""

import io
import json
import string
import tempfile
from pathlib import Path

from hypothesis import given, settings, strategies as st

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from log_hook import run
from persistence.jsonl import SessionJSONLWriter


json_scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2 ** 63), max_value=2 ** 63)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=20)
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=5) | st.dictionaries(st.text(max_size=10), children, max_size=5),
    max_leaves=15
)

session_ids = st.text(alphabet=string.ascii_lowercase + string.digits + "-_", min_size=1, max_size=40)


def _event(session_id, fields):
    event = dict(fields)
    event["session_id"] = session_id
    return event


def _invoke(event, base_dir):
    payload = json.dumps(event, indent=2, ensure_ascii=True).encode("utf-8")
    return run(io.BytesIO(payload), base_dir=base_dir)


class TestAppendProperties:
    """Property-based tests for the hook invariants."""

    @given(session_id=session_ids, fields=st.dictionaries(st.text(max_size=10), json_values, max_size=6))
    @settings(deadline=None, max_examples=75)
    def test_single_invocation_writes_one_compact_line(self, session_id, fields):
        """
        Property: one invocation appends exactly the compact re-serialization plus newline.
        """
        event = _event(session_id, fields)

        with tempfile.TemporaryDirectory() as temp_dir:
            path = _invoke(event, temp_dir)

            content = path.read_text(encoding="utf-8")
            assert path == Path(temp_dir) / f"{session_id}.jsonl"
            assert content == SessionJSONLWriter.serialize(event)
            assert content.count("\n") == 1
            assert json.loads(content) == event

    @given(
        session_id=session_ids,
        events=st.lists(st.dictionaries(st.text(max_size=5), json_scalars, max_size=3), min_size=1, max_size=8)
    )
    @settings(deadline=None, max_examples=40)
    def test_n_invocations_give_n_lines_in_order(self, session_id, events):
        """
        Property: N invocations with one session id give N lines in invocation order.
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            for i, fields in enumerate(events):
                _invoke(_event(session_id, {**fields, "seq": i}), temp_dir)

            lines = (Path(temp_dir) / f"{session_id}.jsonl").read_text(encoding="utf-8").split("\n")[:-1]
            assert len(lines) == len(events)
            assert [json.loads(line)["seq"] for line in lines] == list(range(len(events)))

    @given(ids=st.lists(session_ids, min_size=1, max_size=6))
    @settings(deadline=None, max_examples=40)
    def test_routing_depends_only_on_session_id(self, ids):
        """
        Property: each session file holds exactly the events carrying its id.
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            for i, session_id in enumerate(ids):
                _invoke({"session_id": session_id, "seq": i}, temp_dir)

            for session_id in set(ids):
                lines = (Path(temp_dir) / f"{session_id}.jsonl").read_text(encoding="utf-8").split("\n")[:-1]
                expected = [i for i, sid in enumerate(ids) if sid == session_id]
                assert [json.loads(line)["seq"] for line in lines] == expected

            assert len(list(Path(temp_dir).glob("*.jsonl"))) == len(set(ids))
