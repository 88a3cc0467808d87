"""Convert homepage prose from Markdown into highlighted HTML.

The homepage document is ordinary Markdown. Fenced code samples are
highlighted with Pygments under the ``kss-code`` class, and each highlighted
block records its language in a ``data-language`` attribute so page
templates can label samples.
"""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

CODE_CLASS = "kss-code"
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists", "toc")

# Opening fence (``` or ~~~), optionally indented by up to three spaces.
FENCE_OPEN = re.compile(r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[\w+#.-]*)", re.M)
INDENTED_FENCE = re.compile(r"^[ ]{1,3}(?=`{3,}|~{3,})", re.M)
HIGHLIGHT_OPEN = re.compile(rf'<div class="{CODE_CLASS}">')


class ProseRenderer:
    """Render Markdown prose for the style guide homepage."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Prepare the Markdown converter and the Pygments formatter.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style for fenced code samples. Defaults to ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CODE_CLASS)
        self._converter = Markdown(
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "css_class": CODE_CLASS,
                    "guess_lang": False,
                    "pygments_style": pygments_style,
                }
            },
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted code samples."""
        return self._formatter.get_style_defs(f".{CODE_CLASS}")

    def markdown(self, text: str) -> str:
        """Render ``text`` as HTML; blank input yields ``""``.

        Examples
        --------
        >>> ProseRenderer().markdown("Hello **world**")
        '<p>Hello <strong>world</strong></p>'
        """
        source = INDENTED_FENCE.sub("", text or "")
        if not source.strip():
            return ""
        html = self._converter.reset().convert(source)
        return _label_code_blocks(html, fence_languages(source))


def fence_languages(source: str) -> list[str]:
    """Return the language of each fenced block in ``source``, in order.

    Unlabelled fences report ``"text"``. Only opening fences are counted: a
    fence line closes the block opened by the previous one.
    """
    languages: list[str] = []
    open_fence: str | None = None
    for match in FENCE_OPEN.finditer(source):
        fence = match.group("fence")
        if open_fence is None:
            languages.append(match.group("lang") or "text")
            open_fence = fence
        elif fence[0] == open_fence[0] and len(fence) >= len(open_fence):
            open_fence = None
    return languages


def _label_code_blocks(html: str, languages: list[str]) -> str:
    if not languages:
        return html
    remaining = iter(languages)

    def _open_tag(_: re.Match[str]) -> str:
        language = escape(next(remaining, "text"), quote=True)
        return f'<div class="{CODE_CLASS}" data-language="{language}">'

    return HIGHLIGHT_OPEN.sub(_open_tag, html, count=len(languages))


__all__ = ["CODE_CLASS", "ProseRenderer", "fence_languages"]
