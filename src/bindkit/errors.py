__all__ = [
    "BindkitError",
    "BindingNotFoundError",
    "DuplicateBindingError",
    "BindingResolutionError",
    "AsyncValueError",
    "CircularDependencyError",
    "ServerLifecycleError",
]


class BindkitError(Exception):
    """Base class for all errors raised by bindkit."""


class BindingNotFoundError(BindkitError, KeyError):
    """Raised when a key is resolved that was never bound."""

    def __init__(self, key: str, context_name: str = None):
        self.key = key
        self.context_name = context_name
        where = f" in context '{context_name}'" if context_name else ""
        super().__init__(f"The key '{key}' is not bound to any value{where}")

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class DuplicateBindingError(BindkitError, ValueError):
    """Raised when a key is added twice to a registry that rejects duplicates."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Cannot add binding '{key}': the key is already bound")


class BindingResolutionError(BindkitError):
    """Raised when a binding exists but cannot produce a value."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Cannot resolve binding '{key}': {reason}")


class AsyncValueError(BindkitError, RuntimeError):
    """Raised by synchronous lookups when the bound value is only available asynchronously."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Cannot get '{key}' synchronously: the value is asynchronous")


class CircularDependencyError(BindkitError):
    """Raised when constructor injection re-enters a key already being resolved."""

    def __init__(self, path: tuple[str, ...]):
        self.path = path
        super().__init__(f"Circular dependency detected: {' --> '.join(path)}")


class ServerLifecycleError(BindkitError):
    """Raised when a single server fails to start or stop."""

    def __init__(self, key: str, phase: str):
        self.key = key
        self.phase = phase
        super().__init__(f"Server '{key}' failed to {phase}")
