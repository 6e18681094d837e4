from __future__ import annotations

import pytest

from fieldkit.dispatch import LogicalTimer
from fieldkit.store import InMemoryDocumentStore
from fieldkit.widgets.registry import default_registry


@pytest.fixture
def timer():
    return LogicalTimer()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def registry():
    return default_registry()
