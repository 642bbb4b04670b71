from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest


class MockHost:
    """Host database double whose calls succeed by default.

    Query methods are ``MagicMock`` instances so tests can set return values,
    side effects and assert on the SQL the adapter submitted.
    """

    def __init__(self, **attributes: Any) -> None:
        self.last_error = ""
        self.insert_id = 0
        self.prefix = "wp_"
        self.query = MagicMock(return_value=1)
        self.get_results = MagicMock(return_value=[])
        self.get_row = MagicMock(return_value=None)
        self.get_var = MagicMock(return_value=None)
        self.suppress_errors = MagicMock(return_value=False)
        for name, value in attributes.items():
            setattr(self, name, value)

    def fail_with(self, message: str) -> None:
        """Make every query call record ``message`` as the host error."""

        def _fail(sql: str) -> bool:
            self.last_error = message
            return False

        for method in (self.query, self.get_results, self.get_row, self.get_var):
            method.side_effect = _fail


@pytest.fixture
def mock_host() -> MockHost:
    return MockHost()


@pytest.fixture
def host_factory() -> type[MockHost]:
    return MockHost
