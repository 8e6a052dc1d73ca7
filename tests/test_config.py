from __future__ import annotations

import json
from pathlib import Path

import pytest

from mrmd.core.config import (
    DEFAULT_MERMAID_URL,
    RenderOptions,
    build_options,
    check_referenced_files,
    load_options,
    read_css,
    resolve_browser_config,
    resolve_mermaid_config,
)
from mrmd.core.exceptions import ConfigurationError


def test_defaults_match_original_renderer() -> None:
    options = RenderOptions()

    assert options.theme == "default"
    assert options.width == 800
    assert options.height == 600
    assert options.background_color == "white"
    assert options.backend == "playwright"
    assert options.mermaid_url == DEFAULT_MERMAID_URL
    assert options.transparent is False
    assert options.timeout_ms == 120_000


def test_camel_case_aliases_are_accepted(tmp_path: Path) -> None:
    options = build_options(
        {"backgroundColor": "Transparent", "configFile": tmp_path / "m.json", "maxWorkers": 2}
    )

    assert options.transparent is True
    assert options.config_file == tmp_path / "m.json"
    assert options.max_workers == 2


@pytest.mark.parametrize("payload", [{"width": 0}, {"theme": "  "}, {"unknown": 1}])
def test_invalid_options_raise_configuration_error(payload: dict) -> None:
    with pytest.raises(ConfigurationError):
        build_options(payload)


def test_merged_only_overrides_provided_values() -> None:
    options = RenderOptions(theme="forest", width=1024)

    merged = options.merged(theme=None, height=300, background_color="black")

    assert merged.theme == "forest"
    assert merged.width == 1024
    assert merged.height == 300
    assert merged.background_color == "black"


def test_load_options_from_yaml_resolves_relative_paths(tmp_path: Path) -> None:
    settings = tmp_path / "mrmd.yml"
    settings.write_text(
        "theme: dark\nbackgroundColor: transparent\ncssFile: styles/diagram.css\n"
        "puppeteerConfigFile: /etc/browser.json\n",
        encoding="utf-8",
    )

    options = load_options(settings)

    assert options.theme == "dark"
    assert options.transparent is True
    assert options.css_file == tmp_path / "styles" / "diagram.css"
    assert options.browser_config_file == Path("/etc/browser.json")


def test_load_options_accepts_json_and_empty_files(tmp_path: Path) -> None:
    settings = tmp_path / "mrmd.json"
    settings.write_text(json.dumps({"width": 1200, "max-workers": 3}), encoding="utf-8")
    empty = tmp_path / "empty.yml"
    empty.write_text("", encoding="utf-8")

    assert load_options(settings).width == 1200
    assert load_options(settings).max_workers == 3
    assert load_options(empty) == RenderOptions()


def test_load_options_errors(tmp_path: Path) -> None:
    listing = tmp_path / "list.yml"
    listing.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="doesn't exist"):
        load_options(tmp_path / "missing.yml")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_options(listing)


def test_mermaid_config_merges_file_over_theme(tmp_path: Path) -> None:
    config = tmp_path / "mermaid.json"
    config.write_text(json.dumps({"theme": "neutral", "flowchart": {"curve": "basis"}}), "utf-8")

    assert resolve_mermaid_config(RenderOptions(theme="dark")) == {
        "theme": "dark",
        "startOnLoad": False,
    }
    merged = resolve_mermaid_config(RenderOptions(theme="dark", config_file=config))
    assert merged["theme"] == "neutral"
    assert merged["flowchart"] == {"curve": "basis"}


def test_browser_config_and_css(tmp_path: Path) -> None:
    browser = tmp_path / "browser.json"
    browser.write_text('{"args": ["--no-sandbox"]}', encoding="utf-8")
    css = tmp_path / "style.css"
    css.write_text(".node rect { fill: red; }", encoding="utf-8")
    options = RenderOptions(browser_config_file=browser, css_file=css)

    assert resolve_browser_config(RenderOptions()) == {}
    assert resolve_browser_config(options) == {"args": ["--no-sandbox"]}
    assert read_css(RenderOptions()) is None
    assert read_css(options) == ".node rect { fill: red; }"


def test_missing_or_malformed_referenced_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Unable to parse"):
        resolve_mermaid_config(RenderOptions(config_file=broken))
    with pytest.raises(ConfigurationError, match="CSS file"):
        read_css(RenderOptions(css_file=tmp_path / "none.css"))
    with pytest.raises(ConfigurationError, match="Configuration file"):
        check_referenced_files(RenderOptions(browser_config_file=tmp_path / "none.json"))
