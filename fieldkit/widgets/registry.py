# # Widget registry: name -> WidgetDefinition, written at startup then sealed.

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional

from ..errors import DuplicateWidget, RegistrySealed, UnknownWidget
from .base import WidgetDefinition

log = logging.getLogger(__name__)


class WidgetRegistry:
    """
    Lookup table from widget-type name to its definition.

    Registration happens once per name during startup; ``seal()`` ends that
    phase, after which the registry is read-only.
    """

    def __init__(self) -> None:
        self._widgets: Dict[str, WidgetDefinition] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, name: str, definition: WidgetDefinition) -> WidgetDefinition:
        if self._sealed:
            raise RegistrySealed(name)
        if name in self._widgets:
            raise DuplicateWidget(name)
        self._widgets[name] = definition
        log.debug("Registered widget: %s", name)
        return definition

    def resolve(self, name: str) -> WidgetDefinition:
        if name not in self._widgets:
            raise UnknownWidget(name, self._widgets.keys())
        return self._widgets[name]

    def seal(self) -> None:
        self._sealed = True

    def names(self) -> List[str]:
        return sorted(self._widgets.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._widgets

    def __len__(self) -> int:
        return len(self._widgets)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


_WIDGET_FACTORIES: Dict[str, Callable[[], WidgetDefinition]] = {}
_DEFAULT: Optional[WidgetRegistry] = None


def register_widget(key: str) -> Callable[[Callable[[], WidgetDefinition]], Callable[[], WidgetDefinition]]:
    # # Builtin widget modules declare factories; they are instantiated by init_default_registry()
    def deco(factory: Callable[[], WidgetDefinition]) -> Callable[[], WidgetDefinition]:
        if key in _WIDGET_FACTORIES:
            raise DuplicateWidget(key)
        _WIDGET_FACTORIES[key] = factory
        return factory
    return deco


def init_default_registry(extra: Optional[Dict[str, WidgetDefinition]] = None) -> WidgetRegistry:
    """Create, populate and seal the process-wide registry. Idempotent."""
    global _DEFAULT
    if _DEFAULT is not None:
        if extra:
            raise RegistrySealed(next(iter(extra)))
        return _DEFAULT

    # # Importing builtin pulls in every widget module and runs their register_widget decorators
    from . import builtin  # noqa: F401

    reg = WidgetRegistry()
    for key, factory in sorted(_WIDGET_FACTORIES.items()):
        reg.register(key, factory())
    for key, definition in (extra or {}).items():
        reg.register(key, definition)
    reg.seal()
    _DEFAULT = reg
    log.debug("Default widget registry ready: %s", reg.names())
    return reg


def default_registry() -> WidgetRegistry:
    return init_default_registry()


def get_widget(key: str) -> WidgetDefinition:
    return default_registry().resolve(key)
