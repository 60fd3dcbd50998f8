"""Shared fixtures: a recording stand-in for the connection pool and a file sink in tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest

from models.log_record import ProcessIdentity
from tests.fakes import FakePool
from utils.file_sink import open_file_sink


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def identity() -> ProcessIdentity:
    return ProcessIdentity(
        process_id="4242",
        process_name="rivertest",
        created_by="TestUser",
        schema="fotalogs",
    )


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "applogs.log"


@pytest.fixture
def sink(log_path: Path):
    sink = open_file_sink(str(log_path))
    yield sink
    for handler in list(sink.handlers):
        handler.close()
        sink.removeHandler(handler)


@pytest.fixture
def read_lines(log_path: Path):
    def _read() -> list[str]:
        if not log_path.exists():
            return []
        return log_path.read_text(encoding="utf-8").splitlines()

    return _read
