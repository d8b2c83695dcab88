#!/usr/bin/env python3
"""
Tests for diagnostic logging setup

JSON formatting via python-json-logger, stderr routing and idempotency.
"""

import json
import logging
from io import StringIO
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logging.logger_setup import HANDLER_NAME, setup_logger


@pytest.fixture
def clean_root():
    """Remove our handler from the root logger before and after each test."""
    root = logging.getLogger()
    old_level = root.level

    def _strip():
        for handler in list(root.handlers):
            if handler.get_name() == HANDLER_NAME:
                root.removeHandler(handler)

    _strip()
    yield root
    _strip()
    root.setLevel(old_level)


class TestSetupLogger:

    def test_json_record_with_event_type(self, clean_root):
        stream = StringIO()
        setup_logger(level="DEBUG", stream=stream)

        logging.getLogger("persistence.jsonl").debug("appended", extra={'event_type': 'HOOK_EVENT_APPENDED'})

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["message"] == "appended"
        assert record["level"] == "DEBUG"
        assert record["event_type"] == "HOOK_EVENT_APPENDED"
        assert record["name"] == "persistence.jsonl"
        assert record["timestamp"].endswith("Z")

    def test_default_event_type(self, clean_root):
        stream = StringIO()
        setup_logger(level="INFO", stream=stream)

        logging.getLogger("log_hook").info("hello")

        record = json.loads(stream.getvalue().strip())
        assert record["event_type"] == "GENERAL"

    def test_default_level_is_quiet(self, clean_root):
        stream = StringIO()
        setup_logger(stream=stream)

        logging.getLogger("log_hook").debug("received")
        logging.getLogger("log_hook").info("received")

        assert stream.getvalue() == ""

    def test_idempotent(self, clean_root):
        setup_logger(stream=StringIO())
        setup_logger(stream=StringIO())

        ours = [h for h in clean_root.handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1
