"""Load and validate style guide builder configuration.

This subpackage parses the project's ``styleguide.yaml`` file into a
:class:`BuilderConfig`: the ordered source roots searched for component
templates, the destination directory, the page template directory, and the
presentation options (homepage document, modifier placeholder, stylesheets,
scripts). The primary entry point is :func:`load_builder_config`.

Examples
--------
>>> from pathlib import Path
>>> from styleguide_pages.config import load_builder_config
>>> config = load_builder_config(Path("styleguide.yaml"))  # doctest: +SKIP
>>> config.source  # doctest: +SKIP
[PosixPath('components')]
"""

from .loader import build_builder_config, load_builder_config
from .models import DEFAULT_BUILDER_DIR, BuilderConfig, BuilderConfigError

__all__ = [
    "DEFAULT_BUILDER_DIR",
    "BuilderConfig",
    "BuilderConfigError",
    "build_builder_config",
    "load_builder_config",
]
