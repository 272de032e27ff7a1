import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union


def expanded_path(path: Union[str, os.PathLike]) -> Path:
    """Get ``path`` with environment variables and the user tilde expanded."""
    return Path(os.path.expandvars(os.fspath(path))).expanduser()


def merged(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge ``updates`` into a copy of ``base``.

    Mappings present on both sides are merged key by key instead of replaced.
    """
    result = dict(base)
    for key, value in updates.items():
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = merged(current, value)
        else:
            result[key] = value
    return result
