# # Validation result records. Produced fresh on every pass; never persisted.

from __future__ import annotations

import dataclasses
import enum


class ValidationKind(str, enum.Enum):
    REQUIRED_MISSING = "REQUIRED_MISSING"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    MIN_VIOLATION = "MIN_VIOLATION"
    MAX_VIOLATION = "MAX_VIOLATION"
    CUSTOM = "CUSTOM"


@dataclasses.dataclass(frozen=True)
class ValidationError:
    kind: ValidationKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
