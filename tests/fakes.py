"""Test doubles shared across the suite."""

from __future__ import annotations

DEVICE_ID = "0101FCED8C5C2AE2"
FILE_ID = "00064467DD629E36C838C3E94F20A490A96B4DB084FA300C3DD64D5D45949DE9"


class FakePool:
    """Records every statement instead of talking to PostgreSQL."""

    def __init__(self, fail_with: Exception | None = None, ping_error: Exception | None = None):
        self.executed: list[tuple[object, object, float]] = []
        self.fail_with = fail_with
        self.ping_error = ping_error
        self.pings = 0
        self.close_calls = 0
        self.closed = False

    def execute(self, query, params=None, timeout: float = 30.0) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.executed.append((query, params, timeout))

    def ping(self, timeout: float = 5.0) -> None:
        self.pings += 1
        if self.ping_error is not None:
            raise self.ping_error

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True
