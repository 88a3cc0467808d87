"""Utility helpers shared by the builder configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import BuilderConfigError


def _resolve_path(value: object, base_dir: Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    path = Path(str(value)).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _as_list(value: object, *, key: str) -> list[str]:
    """Normalize a scalar or list option into a list of non-empty strings."""
    match value:
        case None:
            return []
        case str() as text:
            return [text] if text.strip() else []
        case list() as items:
            return [str(item).strip() for item in items if str(item).strip()]
        case _:
            msg = f"'{key}' must be a string or a list of strings."
            raise BuilderConfigError(msg)


def _parse_namespaces(value: object, base_dir: Path) -> dict[str, Path]:
    """Parse ``"name:path"`` strings or a mapping into namespace paths."""
    namespaces: dict[str, Path] = {}
    match value:
        case None:
            return namespaces
        case dict() as mapping:
            items: list[tuple[str, object]] = [
                (str(name), path) for name, path in mapping.items()
            ]
        case str() | list():
            items = []
            for entry in _as_list(value, key="namespace"):
                name, _, path = entry.partition(":")
                if path:
                    items.append((name, path))
        case _:
            msg = "'namespace' must be a mapping or a list of 'name:path' strings."
            raise BuilderConfigError(msg)
    for name, path in items:
        namespaces[name] = _resolve_path(path, base_dir)
    return namespaces


def _as_bool(value: object, default: bool) -> bool:
    """Return ``value`` as a boolean, keeping ``default`` when unset."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _get(payload: typ.Mapping[str, typ.Any], *keys: str) -> typ.Any:
    """Return the first present key among ``keys`` (for singular/plural aliases)."""
    for key in keys:
        if key in payload:
            return payload[key]
    return None


__all__ = ["_as_bool", "_as_list", "_get", "_parse_namespaces", "_resolve_path"]
