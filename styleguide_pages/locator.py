"""Locate component templates across an ordered list of source roots.

The locator answers "where does ``button.jinja`` live, and is there a
``kss-example-button.jinja`` override?". Every root is searched
concurrently, but winners are chosen by root rank: the first configured root
holding a match wins, however quickly the other searches finish. The main
template and its example are resolved independently, so an example may come
from a different root than the template it overrides.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import enum
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocateOutcome(enum.Enum):
    """Which of the main and example templates were found."""

    BOTH = "both"
    MAIN_ONLY = "main_only"
    EXAMPLE_ONLY = "example_only"
    NEITHER = "neither"


@dc.dataclass(frozen=True, slots=True)
class LocatedTemplates:
    """Resolved paths for a template and its optional example override."""

    main: Path | None
    example: Path | None

    @property
    def outcome(self) -> LocateOutcome:
        """Classify the search result."""
        match (self.main is not None, self.example is not None):
            case (True, True):
                return LocateOutcome.BOTH
            case (True, False):
                return LocateOutcome.MAIN_ONLY
            case (False, True):
                return LocateOutcome.EXAMPLE_ONLY
            case _:
                return LocateOutcome.NEITHER


class TemplateLocator:
    """Search source roots for template files by name."""

    def __init__(self, source_roots: cabc.Sequence[Path]) -> None:
        self.source_roots = list(source_roots)

    async def locate(self, file_name: str, example_name: str) -> LocatedTemplates:
        """Find the first ``file_name`` and the first ``example_name`` match.

        Parameters
        ----------
        file_name : str
            Markup reference from the section, such as ``"button.jinja"`` or
            ``"forms/button.jinja"``.
        example_name : str
            Basename of the example override, such as
            ``"kss-example-button.jinja"``.

        Returns
        -------
        LocatedTemplates
            The winning path for each name, or ``None`` where no root matched.
        """
        main_matches, example_matches = await asyncio.gather(
            self._search_roots(file_name),
            self._search_roots(example_name),
        )
        return LocatedTemplates(
            main=_first_ranked(main_matches),
            example=_first_ranked(example_matches),
        )

    async def find_first(self, file_name: str) -> Path | None:
        """Return the first match for ``file_name`` in configured root order."""
        return _first_ranked(await self._search_roots(file_name))

    async def _search_roots(self, file_name: str) -> list[list[Path]]:
        # gather keeps results in root order regardless of completion order.
        return list(
            await asyncio.gather(
                *(
                    asyncio.to_thread(_search_root, root, file_name)
                    for root in self.source_roots
                )
            )
        )


def _search_root(root: Path, file_name: str) -> list[Path]:
    """Return every file under ``root`` matching ``file_name``, sorted by path."""
    if not root.is_dir():
        logger.debug("Skipping missing source root %s", root)
        return []
    # Compare path segments so brackets and wildcards in names stay literal.
    wanted = Path(file_name).parts
    matches = [
        path
        for path in root.rglob("*")
        if path.name == wanted[-1]
        and path.relative_to(root).parts[-len(wanted) :] == wanted
        and path.is_file()
    ]
    return sorted(matches)


def _first_ranked(per_root: cabc.Iterable[list[Path]]) -> Path | None:
    for matches in per_root:
        if matches:
            return matches[0]
    return None


__all__ = ["LocateOutcome", "LocatedTemplates", "TemplateLocator"]
