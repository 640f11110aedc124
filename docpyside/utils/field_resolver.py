# field_resolver.py
"""Ordered field lookup for loosely-typed document records.

Records arrive from two producers: database rows (snake_case) and editor
forms (camelCase). Every field is resolved through an explicit priority
list so the order stays auditable:

    camelCase key  ->  snake_case key  ->  hardcoded default

Visibility flags are the exception: a flag is off when any of its keys is
explicitly False, whichever convention carries it.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Iterable, Sequence, Tuple

_MISSING = object()
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    """``signatureSizeMm`` -> ``signature_size_mm``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def field_keys(camel: str, *aliases: str) -> Tuple[str, ...]:
    """
    Build the priority list for one logical field: the camelCase key, its
    snake_case twin, then any aliases (each alias in both conventions).
    """
    keys: list[str] = []
    for name in (camel, *aliases):
        for key in (name, snake_case(name)):
            if key not in keys:
                keys.append(key)
    return tuple(keys)


def _lookup(source: Any, key: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(key, _MISSING)
    return getattr(source, key, _MISSING)


def _present(value: Any, *, allow_blank: bool) -> bool:
    if value is _MISSING or value is None:
        return False
    if not allow_blank and isinstance(value, str) and not value.strip():
        return False
    return True


def resolve_field(
    source: Any,
    keys: Sequence[str] | str,
    default: Any = None,
    *,
    allow_blank: bool = False,
) -> Any:
    """
    Return the first present value among ``keys``, else ``default``.

    ``None`` always counts as absent. Blank strings count as absent unless
    ``allow_blank`` is set.
    """
    if source is None:
        return default
    if isinstance(keys, str):
        keys = field_keys(keys)
    for key in keys:
        value = _lookup(source, key)
        if _present(value, allow_blank=allow_blank):
            return value
    return default


def resolve_flag(source: Any, keys: Sequence[str] | str) -> bool:
    """Visibility flags: true unless any of ``keys`` is explicitly ``False``."""
    if source is None:
        return True
    if isinstance(keys, str):
        keys = field_keys(keys)
    return all(_lookup(source, key) is not False for key in keys)


def resolve_text(source: Any, keys: Sequence[str] | str, default: str = "") -> str:
    value = resolve_field(source, keys, default=default)
    return value if isinstance(value, str) else str(value)


def resolve_sequence(source: Any, keys: Sequence[str] | str) -> Iterable[Any]:
    value = resolve_field(source, keys, default=())
    if isinstance(value, (str, bytes, Mapping)):
        return ()
    try:
        return tuple(value)
    except TypeError:
        return ()
