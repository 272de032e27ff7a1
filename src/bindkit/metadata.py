"""
Class metadata store.

Metadata is attached to classes through an explicit registration call, usually
made by a class decorator at definition time, and looked up by a
:class:`MetadataKey`. Classes are held weakly.
"""
import logging
import weakref
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass(frozen=True)
class MetadataKey(Generic[_T]):
    """Identity of one kind of class metadata."""
    name: str

    def __str__(self) -> str:
        return self.name


_CLASS_METADATA: dict[MetadataKey, "weakref.WeakKeyDictionary[type, Any]"] = {}


def define_class_metadata(key: MetadataKey[_T], cls: type, value: _T) -> None:
    """
    Attach metadata to a class.

    :param key: The metadata accessor.
    :param cls: The class to attach the metadata to.
    :param value: The metadata value. Replaces any value already defined on ``cls``.
    :raises TypeError: If ``cls`` is not a class.
    """
    if not isinstance(cls, type):
        raise TypeError(f"Class metadata can only be defined on classes, got: {cls!r}")

    store = _CLASS_METADATA.setdefault(key, weakref.WeakKeyDictionary())
    if cls in store:
        logger.debug("Replacing '%s' metadata on %s", key, cls.__qualname__)
    store[cls] = value
    logger.debug("Defined '%s' metadata on %s", key, cls.__qualname__)


def get_class_metadata(
        key: MetadataKey[_T],
        cls: Any,
        own_only: bool = False
) -> Optional[_T]:
    """
    Look up metadata attached to a class.

    Metadata defined on a base class is inherited by subclasses unless
    ``own_only`` is set. Values that are not classes have no metadata.

    :param key: The metadata accessor.
    :param cls: The class to inspect.
    :param own_only: Only consider metadata defined on ``cls`` itself.
    :return: The metadata value, or None.
    """
    if not isinstance(cls, type):
        return None

    store = _CLASS_METADATA.get(key)
    if not store:
        return None

    if own_only:
        return store.get(cls)

    for klass in cls.__mro__:
        if klass in store:
            return store[klass]
    return None


def clear_class_metadata(key: Optional[MetadataKey] = None) -> None:
    """
    Clear class metadata.

    :param key: If provided, only clear metadata for this key.
                If None, clear all metadata.
    """
    if key is None:
        _CLASS_METADATA.clear()
        logger.debug("Cleared all class metadata")
    elif key in _CLASS_METADATA:
        del _CLASS_METADATA[key]
        logger.debug("Cleared '%s' class metadata", key)
