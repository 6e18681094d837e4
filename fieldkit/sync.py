# # Per-field control state: seeds a local buffer from the store once per mount and
# # reconciles later external values (only i18n duplicate targets keep tracking them).

from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Dict, List

from .errors import ControlAlreadyMounted, ControlNotMounted
from .fields import FieldDescriptor, FieldValue, I18nMode, copy_value

log = logging.getLogger(__name__)


class ControlState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    EDITED = "edited"
    UNMOUNTED = "unmounted"


@dataclasses.dataclass
class ControlInstance:
    path: str
    descriptor: FieldDescriptor
    is_duplicate_source: bool = True
    buffered_value: FieldValue = None
    dirty: bool = False
    state: ControlState = ControlState.UNINITIALIZED

    @property
    def mounted(self) -> bool:
        return self.state not in (ControlState.UNINITIALIZED, ControlState.UNMOUNTED)

    @property
    def tracks_external(self) -> bool:
        # # Duplicate-mode copies mirror the source locale and never diverge from it
        return self.descriptor.i18n == I18nMode.DUPLICATE and not self.is_duplicate_source

    def _require_mounted(self) -> None:
        if not self.mounted:
            raise ControlNotMounted(self.path)

    def mount(self, external_value: FieldValue) -> None:
        if self.state != ControlState.UNINITIALIZED:
            raise ControlAlreadyMounted(self.path)
        self.buffered_value = copy_value(external_value)
        self.dirty = False
        self.state = ControlState.SEEDED

    def receive_external(self, value: FieldValue) -> bool:
        """Offer a new external value; returns True when the buffer was overwritten."""
        self._require_mounted()
        if not self.tracks_external:
            return False
        if self.dirty:
            log.debug("Discarding local edit at %s in favour of duplicated value", self.path)
        self.buffered_value = copy_value(value)
        self.dirty = False
        self.state = ControlState.SEEDED
        return True

    def edit(self, value: FieldValue) -> bool:
        """Apply a user edit; returns False when the value is unchanged."""
        self._require_mounted()
        if value == self.buffered_value:
            return False
        self.buffered_value = copy_value(value)
        self.dirty = True
        self.state = ControlState.EDITED
        return True

    def mark_committed(self, value: FieldValue) -> None:
        self._require_mounted()
        if self.buffered_value == value:
            self.dirty = False

    def unmount(self) -> None:
        self.state = ControlState.UNMOUNTED
        self.dirty = False


class ControlArena:
    """Owns every ControlInstance of a session, keyed by field path."""

    def __init__(self) -> None:
        self._controls: Dict[str, ControlInstance] = {}

    def mount(
        self,
        path: str,
        descriptor: FieldDescriptor,
        external_value: FieldValue,
        is_duplicate_source: bool = True,
    ) -> ControlInstance:
        if path in self._controls:
            raise ControlAlreadyMounted(path)
        inst = ControlInstance(path=path, descriptor=descriptor, is_duplicate_source=is_duplicate_source)
        inst.mount(external_value)
        self._controls[path] = inst
        return inst

    def get(self, path: str) -> ControlInstance:
        inst = self._controls.get(path)
        if inst is None:
            raise ControlNotMounted(path)
        return inst

    def unmount(self, path: str) -> ControlInstance:
        inst = self._controls.pop(path, None)
        if inst is None:
            raise ControlNotMounted(path)
        inst.unmount()
        return inst

    def paths(self) -> List[str]:
        return list(self._controls.keys())

    def __contains__(self, path: object) -> bool:
        return path in self._controls

    def __len__(self) -> int:
        return len(self._controls)
