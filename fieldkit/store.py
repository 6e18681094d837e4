# # Document store interface consumed by the dispatcher, plus an in-memory implementation.

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Protocol, Tuple

from .fields import FieldValue, copy_value


class DocumentStore(Protocol):
    def get_value(self, path: str) -> FieldValue: ...

    def commit_value(self, path: str, value: FieldValue) -> None: ...


@dataclasses.dataclass
class InMemoryDocumentStore:
    values: Dict[str, Any] = dataclasses.field(default_factory=dict)
    # # Every commit in arrival order; handy for asserting delivery order
    history: List[Tuple[str, Any]] = dataclasses.field(default_factory=list)

    def get_value(self, path: str) -> FieldValue:
        return copy_value(self.values.get(path))

    def commit_value(self, path: str, value: FieldValue) -> None:
        stored = copy_value(value)
        self.values[path] = stored
        self.history.append((path, stored))
