"""Explicit conversions between stored values and requested Python types.

Purpose
-------
Typed accessors ask for a concrete Python type (``str``, ``int``, ``Path``,
``list[str]`` ...). JSON documents hold a structural tree and the environment
holds text, so each needs one narrow conversion step at the boundary. A failed
conversion raises :class:`~config_sh.domain.errors.TypeMismatch`; callers turn
that into "no value".

Contents
--------
* :func:`coerce_json` – strict conversion of a parsed JSON value.
* :func:`parse_text` – conversion of environment text.
* :func:`to_json_value` – normalisation applied before a typed write is stored.
"""

from __future__ import annotations

import json
import re
import types
from pathlib import Path, PurePath
from typing import Any, TypeVar, Union, get_args, get_origin

from .errors import TypeMismatch

V = TypeVar("V")

_BOOL_TEXT = {"true": True, "false": False}
_INT_TEXT = re.compile(r"[+-]?\d+")
_UNION_ORIGINS = (Union, types.UnionType)


def coerce_json(value: Any, target: type[V]) -> V:
    """Return *value* as an instance of *target* without lossy conversions.

    ``bool`` is never accepted where ``int`` or ``float`` is requested, ``int``
    is widened to ``float``, and strings are turned into :class:`Path` when a
    path is requested. Parameterised ``list``, ``dict`` and union targets are
    checked element by element. Anything else must already be an instance of
    *target*.

    Examples
    --------
    >>> coerce_json(10, int)
    10
    >>> coerce_json(3, float)
    3.0
    >>> coerce_json(["a", "b"], list[str])
    ['a', 'b']
    >>> coerce_json("10", int)
    Traceback (most recent call last):
    ...
    config_sh.domain.errors.TypeMismatch: expected int, got str
    """

    if target is Any or target is object:
        return value
    origin = get_origin(target)
    if origin is not None:
        return _coerce_generic(value, target, origin)
    if target is bool:
        if isinstance(value, bool):
            return value  # type: ignore[return-value]
    elif target is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value  # type: ignore[return-value]
    elif target is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)  # type: ignore[return-value]
    elif isinstance(target, type) and issubclass(target, PurePath):
        if isinstance(value, str):
            return target(value)  # type: ignore[return-value]
    elif isinstance(target, type) and isinstance(value, target):
        return value
    raise TypeMismatch(f"expected {_type_name(target)}, got {type(value).__name__}")


def _coerce_generic(value: Any, target: Any, origin: Any) -> Any:
    args = get_args(target)
    if origin in _UNION_ORIGINS:
        for option in args:
            if option is type(None):
                continue
            try:
                return coerce_json(value, option)
            except TypeMismatch:
                continue
    elif origin is list and isinstance(value, list):
        item = args[0] if args else Any
        return [coerce_json(entry, item) for entry in value]
    elif origin is dict and isinstance(value, dict):
        key, item = args if len(args) == 2 else (Any, Any)
        if key not in (str, Any):
            raise TypeMismatch(f"expected {_type_name(target)}, JSON object keys are str")
        return {name: coerce_json(entry, item) for name, entry in value.items()}
    raise TypeMismatch(f"expected {_type_name(target)}, got {type(value).__name__}")


def parse_text(text: str, target: type[V]) -> V:
    """Parse environment *text* into *target*.

    Numbers must be written plainly: surrounding whitespace and ``_`` digit
    separators are rejected.

    Examples
    --------
    >>> parse_text("8080", int)
    8080
    >>> parse_text("true", bool)
    True
    >>> parse_text('["a", "b"]', list[str])
    ['a', 'b']
    """

    if target is str or target is Any or target is object:
        return text  # type: ignore[return-value]
    if get_origin(target) is None:
        if target is bool:
            if text in _BOOL_TEXT:
                return _BOOL_TEXT[text]  # type: ignore[return-value]
            raise TypeMismatch(f"expected bool, got {text!r}")
        if target is int:
            if _INT_TEXT.fullmatch(text) is None:
                raise TypeMismatch(f"expected int, got {text!r}")
            return int(text)  # type: ignore[return-value]
        if target is float:
            if text != text.strip() or "_" in text:
                raise TypeMismatch(f"expected float, got {text!r}")
            try:
                return float(text)  # type: ignore[return-value]
            except ValueError as exc:
                raise TypeMismatch(f"expected float, got {text!r}") from exc
        if isinstance(target, type) and issubclass(target, PurePath):
            return target(text)  # type: ignore[return-value]
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TypeMismatch(f"expected {_type_name(target)}, got {text!r}") from exc
    return coerce_json(decoded, target)


def to_json_value(value: Any) -> Any:
    """Normalise *value* so it can live in a JSON tree.

    Paths become strings and tuples become lists, recursively inside
    containers. Other values are stored as given.

    Examples
    --------
    >>> to_json_value({"paths": (Path("a"), Path("b"))})
    {'paths': ['a', 'b']}
    """

    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): to_json_value(item) for key, item in value.items()}
    return value


def _type_name(target: Any) -> str:
    if get_origin(target) is not None:
        return repr(target)
    return getattr(target, "__name__", repr(target))
