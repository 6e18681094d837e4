# # Exception hierarchy for registry, control state and form config failures.

from __future__ import annotations

from typing import Iterable, List


class FieldkitError(Exception):
    pass


class WidgetError(FieldkitError):
    pass


class DuplicateWidget(WidgetError):
    def __init__(self, name: str):
        super().__init__(f"Widget already registered: {name}")
        self.name = name


class UnknownWidget(WidgetError):
    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = sorted(available)
        super().__init__(f"Unknown widget: {name}. Available: {self.available}")


class RegistrySealed(WidgetError):
    def __init__(self, name: str):
        super().__init__(f"Registry is sealed; cannot register widget: {name}")
        self.name = name


class ControlStateError(FieldkitError):
    pass


class ControlNotMounted(ControlStateError):
    def __init__(self, path: str):
        super().__init__(f"No control mounted at: {path}")
        self.path = path


class ControlAlreadyMounted(ControlStateError):
    def __init__(self, path: str):
        super().__init__(f"Control already mounted at: {path}")
        self.path = path


class FormConfigError(FieldkitError):
    """Raised when a form definition or a field's widget options are invalid."""

    def __init__(self, message: str, problems: List[str] | None = None):
        self.problems = list(problems or [])
        if self.problems:
            message = message + ": " + "; ".join(self.problems)
        super().__init__(message)
