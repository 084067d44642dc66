from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests.stubs import StubConnection

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture
def stub_connection() -> StubConnection:
    return StubConnection()


@pytest.fixture(autouse=True)
def _sqlrecord_log_propagation() -> None:
    """Keep sqlrecord records visible to caplog even when an application turned propagation off."""
    logging.getLogger("sqlrecord").propagate = True
