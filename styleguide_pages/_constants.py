"""Common literal values used across styleguide_pages.

These constants keep file naming conventions centralized so the resolver,
page assembler, and tests agree on template extensions, example prefixes,
and output document names.

Examples
--------
>>> from styleguide_pages import _constants
>>> _constants.EXAMPLE_PREFIX + "button.jinja"
'kss-example-button.jinja'
>>> "card" + _constants.PAGE_EXTENSION
'card.html'
"""

TEMPLATE_EXTENSION = ".jinja"
EXAMPLE_PREFIX = "kss-example-"
PAGE_EXTENSION = ".html"
NOT_FOUND_MARKER = " NOT FOUND!"
EMPTY_TEMPLATE = "{# Cannot be an empty string. #}"
DEFAULT_PLACEHOLDER = "[modifier class]"
DEFAULT_HOMEPAGE = "homepage.md"
BUILDER_NAMESPACE = "builder"
SAMPLE_DATA_SUFFIXES = (".json", ".yaml", ".yml")
