# # Editing session: resolve widgets, mount controls, route edits through the dispatcher,
# # mirror duplicate-mode fields across locales and keep per-field errors current.

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Optional

from .config import Config
from .context import LocaleContext
from .dispatch import ChangeDispatcher, LogicalTimer, Scheduler
from .errors import UnknownWidget
from .fields import FieldDescriptor, FieldValue, I18nMode, copy_value, field_path
from .form import FormSpec, check_field_options
from .store import DocumentStore
from .sync import ControlArena, ControlInstance
from .validation import engine
from .validation.types import ValidationError
from .widgets.base import ControlProps, WidgetDefinition
from .widgets.registry import WidgetRegistry, default_registry

log = logging.getLogger(__name__)


@dataclasses.dataclass
class FieldSlot:
    path: str
    locale: Optional[str]
    descriptor: FieldDescriptor
    widget: WidgetDefinition
    fallback: bool = False
    errors: List[ValidationError] = dataclasses.field(default_factory=list)
    # # Set while an asynchronous validator result is outstanding
    async_pending: bool = False


class EditingSession:
    def __init__(
        self,
        form: FormSpec,
        store: DocumentStore,
        registry: Optional[WidgetRegistry] = None,
        scheduler: Optional[Scheduler] = None,
        config: Optional[Config] = None,
    ):
        self.form = form
        self.store = store
        self.cfg = config or Config()
        self.registry = registry if registry is not None else default_registry()
        self.scheduler = scheduler if scheduler is not None else LogicalTimer()
        self.dispatcher = ChangeDispatcher(store, self.scheduler, self.cfg.debounce_seconds)
        self.dispatcher.add_listener(self._on_commit)
        self.arena = ControlArena()
        self._slots: Dict[str, FieldSlot] = {}
        self._opened = False

    # # Lifecycle

    def open(self) -> "EditingSession":
        if self._opened:
            return self

        # # Resolve and check every field before mounting any, so a config error leaves nothing behind
        resolved = []
        for path, locale, descriptor in self.form.placements():
            widget, fallback = self._resolve(descriptor)
            if not fallback:
                check_field_options(descriptor, widget, self.registry)
            resolved.append((path, locale, descriptor, widget, fallback))

        for path, locale, descriptor, widget, fallback in resolved:
            external = self.store.get_value(path)
            if external is None and descriptor.default is not None:
                self.store.commit_value(path, descriptor.default)
                external = self.store.get_value(path)

            is_source = descriptor.i18n != I18nMode.DUPLICATE or locale == self.form.default_locale
            self.arena.mount(path, descriptor, external, is_duplicate_source=is_source)
            self.dispatcher.track(path, external)
            self._slots[path] = FieldSlot(path, locale, descriptor, widget, fallback)
            self.validate(path)

        self._opened = True
        log.debug("Opened form %s with %d controls", self.form.name, len(self.arena))
        return self

    def close(self) -> None:
        for path in self.arena.paths():
            self.unmount(path)
        self.dispatcher.close()
        self._opened = False

    def __enter__(self) -> "EditingSession":
        return self.open()

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def unmount(self, path: str) -> None:
        # # Pending edits are dropped, not committed
        if self.dispatcher.cancel(path):
            log.debug("Dropped pending edit for %s on unmount", path)
        self.arena.unmount(path)
        self._slots.pop(path, None)

    def _resolve(self, descriptor: FieldDescriptor) -> tuple[WidgetDefinition, bool]:
        try:
            return self.registry.resolve(descriptor.widget), False
        except UnknownWidget as e:
            log.warning("Field %s: %s; using %s", descriptor.name, e, self.cfg.fallback_widget)
            return self.registry.resolve(self.cfg.fallback_widget), True

    # # Editing

    def control(self, path: str) -> ControlInstance:
        return self.arena.get(path)

    def slot(self, path: str) -> FieldSlot:
        self.arena.get(path)
        return self._slots[path]

    def edit(self, path: str, value: FieldValue) -> bool:
        inst = self.arena.get(path)
        if not inst.edit(value):
            return False
        self.dispatcher.enqueue(path, value)
        self.validate(path)
        return True

    def external_update(self, path: str, value: FieldValue) -> bool:
        inst = self.arena.get(path)
        if not inst.receive_external(value):
            return False
        self.dispatcher.cancel(path)
        self.dispatcher.track(path, value)
        self.validate(path)
        return True

    def flush(self, path: Optional[str] = None) -> int:
        return self.dispatcher.flush(path)

    def _on_commit(self, path: str, value: FieldValue) -> None:
        if path not in self.arena:
            return
        inst = self.arena.get(path)
        inst.mark_committed(value)

        d = inst.descriptor
        if d.i18n != I18nMode.DUPLICATE or not inst.is_duplicate_source:
            return
        for locale in self.form.locales:
            target = field_path(d.name, locale)
            if target == path or target not in self.arena:
                continue
            self.dispatcher.cancel(target)
            self.store.commit_value(target, value)
            self.dispatcher.track(target, value)
            self.arena.get(target).receive_external(value)
            self.validate(target)

    # # Rendering

    def props(self, path: str) -> ControlProps:
        inst = self.arena.get(path)
        slot = self._slots[path]
        return ControlProps(
            descriptor=slot.descriptor,
            external_value=self.store.get_value(path),
            value=copy_value(inst.buffered_value),
            on_change=lambda v: self.edit(path, v),
            disabled=self.cfg.disabled,
            is_duplicate_target=inst.tracks_external,
            errors=list(slot.errors),
        )

    def render(self, path: str) -> Any:
        return self._slots[path].widget.control(self.props(path))

    def preview(self, path: str) -> Any:
        inst = self.arena.get(path)
        slot = self._slots[path]
        return slot.widget.preview(slot.descriptor, copy_value(inst.buffered_value))

    # # Validation

    def locale_context(self, locale: Optional[str]) -> LocaleContext:
        return LocaleContext(locale=locale or self.form.default_locale, default_locale=self.form.default_locale)

    def validate(self, path: str) -> List[ValidationError]:
        inst = self.arena.get(path)
        slot = self._slots[path]
        slot.async_pending = False

        def deferred() -> None:
            slot.async_pending = True

        slot.errors = list(
            engine.validate(
                slot.descriptor,
                inst.buffered_value,
                slot.widget,
                self.locale_context(slot.locale),
                on_deferred=deferred,
            )
        )
        return list(slot.errors)

    async def validate_async(self, path: str) -> List[ValidationError]:
        inst = self.arena.get(path)
        slot = self._slots[path]
        value = copy_value(inst.buffered_value)
        errors = await engine.validate_async(slot.descriptor, value, slot.widget, self.locale_context(slot.locale))
        # # Drop the result if the field was unmounted or edited while the validator was suspended
        if path in self.arena and inst.buffered_value == value:
            slot.errors = errors
            slot.async_pending = False
        return list(errors)

    def errors(self, path: str) -> List[ValidationError]:
        return list(self.slot(path).errors)

    def all_errors(self) -> Dict[str, List[ValidationError]]:
        return {p: list(s.errors) for p, s in self._slots.items() if s.errors}

    def can_submit(self) -> bool:
        """No outstanding errors. Fields still waiting on an async validator count as invalid."""
        if any(s.async_pending for s in self._slots.values()):
            return False
        return not self.all_errors()

    async def can_submit_async(self) -> bool:
        for path in self.arena.paths():
            await self.validate_async(path)
        return not self.all_errors()
