import fnmatch
import logging
import re
from enum import Enum
from typing import Any, Callable, Optional, Pattern, Union

from .binding import Binding
from .inject import ResolutionSession
from .value import ValueOrAwaitable, discard, is_awaitable
from ..errors import AsyncValueError, BindingNotFoundError, DuplicateBindingError

logger = logging.getLogger(__name__)

BindingFilter = Union[str, Pattern[str], Callable[[Binding], bool], None]


class DuplicateBindingPolicy(str, Enum):
    OVERWRITE = "overwrite"
    REJECT = "reject"


def _compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(pattern, str):
        # "*" matches any run of characters, dots included
        return re.compile(fnmatch.translate(pattern))
    return pattern


class Context:
    """
    Registry of bindings.

    Lookups fall back to the parent context when a key is not bound locally.
    """

    def __init__(
            self,
            name: Optional[str] = None,
            parent: Optional["Context"] = None,
            *,
            duplicate_policy: DuplicateBindingPolicy = DuplicateBindingPolicy.OVERWRITE
    ) -> None:
        self.name = name or f"{type(self).__name__}-{id(self):x}"
        self.parent = parent
        self.duplicate_policy = DuplicateBindingPolicy(duplicate_policy)
        self._registry: dict[str, Binding] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} bindings={len(self._registry)}>"

    def __contains__(self, key: str) -> bool:
        return self.is_bound(key)

    def bind(self, key: str) -> Binding:
        """
        Create a binding for ``key`` and add it to the context.

        :param key: The binding key.
        :return: The new binding, to be configured fluently.
        """
        binding = Binding(key)
        self.add(binding)
        return binding

    def add(self, binding: Binding) -> "Context":
        """
        Add a binding to the context.

        :param binding: The binding to add. Its key and tags are kept as they are.
        :raises DuplicateBindingError: If the key is already bound and duplicates are rejected.
        """
        key = binding.key
        existing = self._registry.get(key)
        if existing is not None and existing is not binding:
            if self.duplicate_policy is DuplicateBindingPolicy.REJECT:
                logger.error("Duplicate binding rejected: '%s' in %s", key, self.name)
                raise DuplicateBindingError(key)
            logger.warning("Overwriting binding '%s' in %s", key, self.name)

        self._registry[key] = binding
        logger.debug("Bound '%s' in %s (tags: %s)", key, self.name, sorted(binding.tag_names))
        return self

    def unbind(self, key: str) -> bool:
        """
        Remove a binding from this context. Parent contexts are not affected.

        :return: True if a binding was removed.
        """
        removed = self._registry.pop(key, None) is not None
        if removed:
            logger.debug("Unbound '%s' from %s", key, self.name)
        return removed

    def contains(self, key: str) -> bool:
        """Check if ``key`` is bound in this context, ignoring parents."""
        return key in self._registry

    def is_bound(self, key: str) -> bool:
        """Check if ``key`` is bound in this context or any parent."""
        if key in self._registry:
            return True
        return self.parent is not None and self.parent.is_bound(key)

    def get_binding(self, key: str, optional: bool = False) -> Optional[Binding]:
        """
        Get the binding for ``key``.

        :param key: The binding key.
        :param optional: Return None instead of raising when the key is not bound.
        :raises BindingNotFoundError: If the key is not bound and not optional.
        """
        binding = self._registry.get(key)
        if binding is not None:
            return binding
        if self.parent is not None:
            return self.parent.get_binding(key, optional=optional)
        if optional:
            return None
        raise BindingNotFoundError(key, self.name)

    def find(self, pattern: BindingFilter = None) -> list[Binding]:
        """
        Find bindings by key.

        :param pattern: None for all bindings, a key pattern where ``*`` is a
                        wildcard, a compiled regular expression, or a predicate
                        receiving the binding.
        :return: Matching bindings. Local bindings shadow parent bindings with
                 the same key.
        """
        if pattern is None:
            matches = lambda binding: True
        elif callable(pattern) and not isinstance(pattern, re.Pattern):
            matches = pattern
        else:
            regex = _compile_pattern(pattern)
            matches = lambda binding: regex.match(binding.key) is not None

        return self._find(matches)

    def find_by_tag(self, tag: Union[str, Pattern[str]]) -> list[Binding]:
        """
        Find bindings by tag name.

        :param tag: A tag name, a tag pattern where ``*`` is a wildcard, or a
                    compiled regular expression.
        """
        regex = _compile_pattern(tag)
        return self._find(
            lambda binding: any(regex.match(name) is not None for name in binding.tag_names)
        )

    def _find(self, matches: Callable[[Binding], bool]) -> list[Binding]:
        found = [binding for binding in self._registry.values() if matches(binding)]
        if self.parent is not None:
            found.extend(
                binding for binding in self.parent._find(matches)
                if binding.key not in self._registry
            )
        return found

    def get_value_or_awaitable(
            self,
            key: str,
            session: Optional[ResolutionSession] = None,
            optional: bool = False
    ) -> ValueOrAwaitable[Any]:
        binding = self.get_binding(key, optional=optional)
        if binding is None:
            return None
        return binding.get_value(self, ResolutionSession.enter(session, key))

    def get_sync(self, key: str, optional: bool = False) -> Any:
        """
        Resolve the value bound to ``key`` synchronously.

        :raises BindingNotFoundError: If the key is not bound and not optional.
        :raises AsyncValueError: If the value can only be produced asynchronously.
        """
        value = self.get_value_or_awaitable(key, optional=optional)
        if is_awaitable(value):
            discard(value)
            raise AsyncValueError(key)
        return value

    async def get(self, key: str, optional: bool = False) -> Any:
        """
        Resolve the value bound to ``key``.

        :raises BindingNotFoundError: If the key is not bound and not optional.
        """
        value = self.get_value_or_awaitable(key, optional=optional)
        if is_awaitable(value):
            value = await value
        return value
