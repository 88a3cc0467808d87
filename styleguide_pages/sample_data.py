"""Load sample data that accompanies component templates.

A template such as ``components/button.jinja`` may ship a sibling
``button.json`` (or ``button.yaml``) holding the variables used when the
style guide renders it. Missing or malformed sample data is not an error:
the loader falls back to an empty context so the component still renders.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import copy
import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path
from types import MappingProxyType

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import SAMPLE_DATA_SUFFIXES, TEMPLATE_EXTENSION

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class SampleContext:
    """Read-only sample data; every render works from :meth:`fresh`."""

    data: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def empty(cls) -> SampleContext:
        """Return a context holding no variables."""
        return cls()

    @classmethod
    def of(cls, payload: cabc.Mapping[str, typ.Any]) -> SampleContext:
        """Wrap a private deep copy of ``payload``."""
        return cls(MappingProxyType(copy.deepcopy(dict(payload))))

    def fresh(self) -> dict[str, typ.Any]:
        """Return an independent, mutable deep copy of the sample data."""
        return copy.deepcopy(dict(self.data))

    def __bool__(self) -> bool:
        return bool(self.data)


class SampleContextLoader:
    """Find and parse the sample data file that sits beside a template."""

    def __init__(self, suffixes: cabc.Sequence[str] = SAMPLE_DATA_SUFFIXES) -> None:
        self.suffixes = tuple(suffixes)
        self._yaml = YAML(typ="safe")
        self._yaml.version = (1, 2)

    async def aload(self, template_path: Path, template_name: str) -> SampleContext:
        """Load sample data without blocking the event loop."""
        return await asyncio.to_thread(self.load, template_path, template_name)

    def load(self, template_path: Path, template_name: str) -> SampleContext:
        """Return the sample data for ``template_name`` located at ``template_path``.

        Parameters
        ----------
        template_path : Path
            Location of the template file whose sibling data should be read.
        template_name : str
            Template basename (for example ``"button.jinja"``); the data file
            shares its stem.

        Returns
        -------
        SampleContext
            Parsed sample data, or an empty context when no usable file exists.
        """
        stem = _strip_extension(template_name)
        for suffix in self.suffixes:
            candidate = template_path.parent / f"{stem}{suffix}"
            if not candidate.is_file():
                continue
            payload = self._parse(candidate)
            if payload is None:
                return SampleContext.empty()
            logger.debug("Loaded sample data for %s from %s", template_name, candidate)
            return SampleContext.of(payload)
        logger.debug("No sample data found for %s", template_name)
        return SampleContext.empty()

    def _parse(self, path: Path) -> dict[str, typ.Any] | None:
        try:
            text = path.read_text(encoding="utf-8")
            if path.suffix == ".json":
                loaded = json.loads(text)
            else:
                loaded = self._yaml.load(text)
        except (OSError, ValueError, YAMLError) as exc:
            logger.debug("Ignoring unreadable sample data %s: %s", path, exc)
            return None
        if not isinstance(loaded, dict):
            logger.debug("Ignoring sample data %s: top level is not a mapping", path)
            return None
        return dict(loaded)


def _strip_extension(template_name: str) -> str:
    name = Path(template_name).name
    if name.endswith(TEMPLATE_EXTENSION):
        return name[: -len(TEMPLATE_EXTENSION)]
    return Path(name).stem


__all__ = ["SampleContext", "SampleContextLoader"]
