from .binding import Binding, BindingScope, BindingType
from .context import Context, DuplicateBindingPolicy
from .inject import Injection, ResolutionSession, inject

__all__ = [
    "Binding",
    "BindingScope",
    "BindingType",
    "Context",
    "DuplicateBindingPolicy",
    "Injection",
    "ResolutionSession",
    "inject",
]
