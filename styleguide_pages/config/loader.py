"""Load builder configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import BUILDER_NAMESPACE, DEFAULT_HOMEPAGE, DEFAULT_PLACEHOLDER
from .helpers import _as_bool, _as_list, _get, _parse_namespaces, _resolve_path
from .models import DEFAULT_BUILDER_DIR, BuilderConfig, BuilderConfigError


def load_builder_config(path: Path) -> BuilderConfig:
    """Load the YAML configuration describing a style guide build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``styleguide.yaml``). Relative paths inside the file resolve against
        the file's directory.

    Returns
    -------
    BuilderConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    BuilderConfigError
        If the top-level structure is not a mapping, no source directory is
        configured, or an option has the wrong shape.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_builder_config(Path("styleguide.yaml"))  # doctest: +SKIP
    >>> config.placeholder  # doctest: +SKIP
    '[modifier class]'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise BuilderConfigError(msg)
    return build_builder_config(loaded, base_dir=path.parent)


def build_builder_config(
    raw: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> BuilderConfig:
    """Build a :class:`BuilderConfig` from an already parsed mapping."""
    sources = [
        _resolve_path(entry, base_dir)
        for entry in _as_list(_get(raw, "source", "sources"), key="source")
    ]
    if not sources:
        msg = "Configuration requires at least one 'source' directory."
        raise BuilderConfigError(msg)

    builder_raw = raw.get("builder")
    builder = (
        _resolve_path(builder_raw, base_dir) if builder_raw else DEFAULT_BUILDER_DIR
    )
    namespaces = _parse_namespaces(_get(raw, "namespace", "namespaces"), base_dir)
    if BUILDER_NAMESPACE in namespaces:
        msg = f"The '{BUILDER_NAMESPACE}' namespace is reserved for page templates."
        raise BuilderConfigError(msg)

    return BuilderConfig(
        source=sources,
        destination=_resolve_path(raw.get("destination", "styleguide"), base_dir),
        builder=builder,
        homepage=str(raw.get("homepage") or DEFAULT_HOMEPAGE),
        placeholder=str(raw.get("placeholder", DEFAULT_PLACEHOLDER) or ""),
        namespaces=namespaces,
        css=_as_list(raw.get("css"), key="css"),
        js=_as_list(raw.get("js"), key="js"),
        extend=[
            _resolve_path(entry, base_dir)
            for entry in _as_list(raw.get("extend"), key="extend")
        ],
        title=str(raw.get("title") or "Style guide"),
        item_pages=_as_bool(raw.get("item_pages"), default=True),
        verbose=_as_bool(raw.get("verbose"), default=False),
    )


__all__ = ["build_builder_config", "load_builder_config"]
