"""Tests for rendering homepage Markdown."""

from __future__ import annotations

from bs4 import BeautifulSoup

from styleguide_pages.prose import ProseRenderer, fence_languages

SAMPLE = """\
# Patterns

Intro text.

```html
<button>Go</button>
```

  ```
plain
  ```
"""


def test_blank_input_renders_nothing() -> None:
    assert ProseRenderer().markdown("   \n") == ""


def test_code_blocks_are_labelled_by_language() -> None:
    html = ProseRenderer().markdown(SAMPLE)
    soup = BeautifulSoup(html, "html.parser")
    blocks = soup.select("div.kss-code")
    assert [block["data-language"] for block in blocks] == ["html", "text"]
    assert soup.select_one("h1").get_text() == "Patterns"


def test_renderer_is_reusable() -> None:
    renderer = ProseRenderer()
    first = renderer.markdown("# One")
    second = renderer.markdown("# One")
    assert first == second


def test_fence_languages_skips_closing_fences() -> None:
    source = "~~~python\nx = 1\n~~~\n\n```\nraw\n```\n"
    assert fence_languages(source) == ["python", "text"]


def test_stylesheet_targets_code_class() -> None:
    assert ".kss-code" in ProseRenderer().stylesheet
