"""Load user modules that extend the Jinja environment.

Each directory listed under ``extend`` in the builder configuration is
scanned for ``*.py`` files. Every module that defines a module-level
``extend(env, config)`` function is imported and the function is called
with the builder's :class:`jinja2.Environment` and its
:class:`~styleguide_pages.config.BuilderConfig`. Extensions typically add
filters, tests, or globals:

.. code-block:: python

    def extend(env, config):
        env.filters["shout"] = lambda text: f"{text.upper()}!"

Modules without an ``extend`` function are skipped.
"""

from __future__ import annotations

import importlib.util
import logging
import typing as typ

from .errors import ExtensionError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from .config import BuilderConfig

logger = logging.getLogger(__name__)

EXTENSION_ENTRYPOINT = "extend"
MODULE_PREFIX = "styleguide_extensions"


def load_extensions(env: Environment, config: BuilderConfig) -> list[Path]:
    """Apply every extension module found in ``config.extend``.

    Directories are processed in configured order and files within a
    directory in name order, so later extensions can override earlier ones.

    Returns
    -------
    list[Path]
        Modules whose ``extend`` function was called.

    Raises
    ------
    ExtensionError
        If a directory is missing or a module fails to import or apply.
    """
    applied: list[Path] = []
    for directory in config.extend:
        if not directory.is_dir():
            raise ExtensionError(directory, "directory not found")
        for path in sorted(directory.glob("*.py")):
            hook = _load_hook(path)
            if hook is None:
                logger.debug("Skipping %s: no %s() function", path, EXTENSION_ENTRYPOINT)
                continue
            try:
                hook(env, config)
            except Exception as exc:
                raise ExtensionError(path, str(exc)) from exc
            logger.info(" - extension: %s", path.name)
            applied.append(path)
    return applied


def _load_hook(path: Path) -> typ.Callable[..., object] | None:
    spec = importlib.util.spec_from_file_location(
        f"{MODULE_PREFIX}.{path.stem}", path
    )
    if spec is None or spec.loader is None:
        raise ExtensionError(path, "not an importable module")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ExtensionError(path, str(exc)) from exc
    hook = getattr(module, EXTENSION_ENTRYPOINT, None)
    return hook if callable(hook) else None


__all__ = ["EXTENSION_ENTRYPOINT", "load_extensions"]
