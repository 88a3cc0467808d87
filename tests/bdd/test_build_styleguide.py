"""Behaviour tests for building a style guide using pytest-bdd.

These scenarios drive :class:`~styleguide_pages.builder.StyleGuideBuilder`
end-to-end against a temporary component tree, then inspect the generated
HTML with BeautifulSoup.

Usage
-----
Run ``pytest tests/bdd/test_build_styleguide.py -v`` to execute only these
scenarios.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from styleguide_pages.builder import StyleGuideBuilder
from styleguide_pages.config import BuilderConfig
from styleguide_pages.styleguide import Modifier, Section, StyleGuide

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "build_styleguide.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


@given("a component source with a button template and sample data")
def given_component_source(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write ``button.jinja`` and its sample data into a source root."""
    source = tmp_path / "components"
    source.mkdir()
    (source / "button.jinja").write_text(
        '<button class="{{ modifier_class }}">{{ label }}</button>', encoding="utf-8"
    )
    (source / "button.json").write_text('{"label": "Hi"}', encoding="utf-8")
    scenario_state["config"] = BuilderConfig(
        source=[source], destination=tmp_path / "styleguide"
    )


@given("a style guide documenting the button with a disabled modifier")
def given_button_guide(scenario_state: ScenarioState) -> None:
    """Describe one section whose markup references the button template."""
    scenario_state["styleguide"] = StyleGuide(
        entries=(
            Section(
                "1",
                header="Buttons",
                markup="button.jinja",
                modifiers=(Modifier(".disabled", "Cannot be pressed"),),
            ),
        )
    )


@given("a style guide referencing a component that does not exist")
def given_missing_guide(scenario_state: ScenarioState) -> None:
    """Describe a section whose template is absent from every source root."""
    scenario_state["styleguide"] = StyleGuide(
        entries=(Section("1", header="Ghost", markup="ghost.jinja"),)
    )


@when("I build the style guide")
def when_build(scenario_state: ScenarioState) -> None:
    """Run the builder and parse the first section page."""
    config = typ.cast("BuilderConfig", scenario_state["config"])
    StyleGuideBuilder(config).run(scenario_state["styleguide"])
    html = (config.destination / "section-1.html").read_text(encoding="utf-8")
    scenario_state["soup"] = BeautifulSoup(html, "html.parser")


@then("the section page shows the disabled button")
def then_disabled_button(scenario_state: ScenarioState) -> None:
    """Check the modifier block renders the template with its class."""
    soup = typ.cast("BeautifulSoup", scenario_state["soup"])
    modifier = soup.select_one('[data-modifier="disabled"]')
    assert modifier is not None
    assert modifier.decode_contents().strip() == '<button class="disabled">Hi</button>'


@then("the canonical markup uses the modifier placeholder")
def then_placeholder_markup(scenario_state: ScenarioState) -> None:
    """Check the copyable markup carries the placeholder class."""
    soup = typ.cast("BeautifulSoup", scenario_state["soup"])
    markup = soup.select_one("[data-test=markup]")
    assert markup is not None
    assert markup.get_text() == '<button class="[modifier class]">Hi</button>'


@then("the missing component is flagged as not found")
def then_not_found(scenario_state: ScenarioState) -> None:
    """Check the section keeps the ``NOT FOUND!`` marker in its markup."""
    soup = typ.cast("BeautifulSoup", scenario_state["soup"])
    markup = soup.select_one("[data-test=markup]")
    assert markup is not None
    assert markup.get_text() == "ghost.jinja NOT FOUND!"
