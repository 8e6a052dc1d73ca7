"""Configuration models used by the diagram renderers.

RenderOptions

`theme` (`str`)
: Mermaid theme forwarded to ``mermaid.initialize``. Values from
  `config_file` take precedence.

`width` / `height` (`int`)
: Browser viewport in CSS pixels. The PNG screenshot is clipped to the
  diagram, so these only bound the layout area.

`background_color` (`str`)
: CSS colour painted behind the diagram. ``transparent`` disables background
  compositing for PNG and PDF outputs.

`config_file` (`Path | None`)
: JSON document merged over ``{"theme": theme}`` before Mermaid initialises.

`css_file` (`Path | None`)
: Stylesheet injected verbatim into the rendering page.

`browser_config_file` (`Path | None`)
: JSON document holding browser launch options (``headless``, ``args``,
  ``executablePath``...).

`backend` (`str`)
: Renderer backend, ``playwright`` or ``mmdc``.

`timeout` (`float`)
: Seconds allowed for each browser step, or for the whole ``mmdc`` run.

`max_workers` (`int | None`)
: Thread pool size used to render blocks concurrently. ``None`` starts one
  worker per block.

`mermaid_url` (`str`)
: Script URL the rendering page loads Mermaid from.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
from pathlib import Path
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import ConfigurationError


DEFAULT_MERMAID_URL = "https://unpkg.com/mermaid@11/dist/mermaid.min.js"
TRANSPARENT = "transparent"

_PATH_FIELDS = ("config_file", "css_file", "browser_config_file")


class RenderOptions(BaseModel):
    """Options shared by every render job of a batch."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    theme: str = "default"
    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)
    background_color: str = Field(default="white", alias="backgroundColor")
    config_file: Path | None = Field(default=None, alias="configFile")
    css_file: Path | None = Field(default=None, alias="cssFile")
    browser_config_file: Path | None = Field(default=None, alias="puppeteerConfigFile")
    backend: str = "playwright"
    timeout: float = Field(default=120.0, gt=0)
    max_workers: int | None = Field(default=None, gt=0, alias="maxWorkers")
    mermaid_url: str = Field(default=DEFAULT_MERMAID_URL, alias="mermaidUrl")

    @field_validator("background_color", "theme", "backend")
    @classmethod
    def _strip(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    @property
    def transparent(self) -> bool:
        """Return True when the background should not be painted."""
        return self.background_color.lower() == TRANSPARENT

    @property
    def timeout_ms(self) -> float:
        """Return the timeout expressed in milliseconds for Playwright calls."""
        return self.timeout * 1000

    def merged(self, **overrides: Any) -> RenderOptions:
        """Return a copy where non-``None`` overrides replace current values."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return build_options(data)


def build_options(data: Mapping[str, Any] | None = None) -> RenderOptions:
    """Validate a raw mapping into :class:`RenderOptions`."""
    try:
        return RenderOptions.model_validate(dict(data or {}))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid render options: {exc}") from exc


def load_options(path: Path | str) -> RenderOptions:
    """Load render options from a YAML or JSON settings file.

    Relative file references are resolved against the settings file directory.
    """
    settings_path = Path(path).expanduser()
    if not settings_path.is_file():
        raise ConfigurationError(f"Settings file '{settings_path}' doesn't exist")
    try:
        payload = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read settings file '{settings_path}': {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Settings file '{settings_path}' must contain a mapping")

    data = {snake_case(str(key)): value for key, value in payload.items()}
    if "puppeteer_config_file" in data:
        data["browser_config_file"] = data.pop("puppeteer_config_file")
    base_dir = settings_path.parent
    for key in _PATH_FIELDS:
        value = data.get(key)
        if value:
            candidate = Path(str(value)).expanduser()
            data[key] = candidate if candidate.is_absolute() else base_dir / candidate
    return build_options(data)


def snake_case(name: str) -> str:
    """Convert camelCase or dashed keys to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower().replace("-", "_")


def _read_json(path: Path, *, label: str) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigurationError(f'Configuration file "{path}" doesn\'t exist')
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to parse {label} '{path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{label.capitalize()} '{path}' must contain a JSON object")
    return data


def resolve_mermaid_config(options: RenderOptions) -> dict[str, Any]:
    """Return the Mermaid configuration merged over ``{"theme": ...}``."""
    config: dict[str, Any] = {"theme": options.theme}
    if options.config_file is not None:
        config.update(_read_json(options.config_file, label="Mermaid config"))
    config["startOnLoad"] = False
    return config


def resolve_browser_config(options: RenderOptions) -> dict[str, Any]:
    """Return browser launch options loaded from the optional JSON file."""
    if options.browser_config_file is None:
        return {}
    return _read_json(options.browser_config_file, label="browser config")


def read_css(options: RenderOptions) -> str | None:
    """Return the stylesheet contents referenced by the options, if any."""
    if options.css_file is None:
        return None
    if not options.css_file.is_file():
        raise ConfigurationError(f'CSS file "{options.css_file}" doesn\'t exist')
    return options.css_file.read_text(encoding="utf-8")


def check_referenced_files(options: RenderOptions) -> None:
    """Ensure every file referenced by the options exists."""
    if options.config_file is not None and not options.config_file.is_file():
        raise ConfigurationError(f'Configuration file "{options.config_file}" doesn\'t exist')
    if options.browser_config_file is not None and not options.browser_config_file.is_file():
        raise ConfigurationError(
            f'Configuration file "{options.browser_config_file}" doesn\'t exist'
        )
    if options.css_file is not None and not options.css_file.is_file():
        raise ConfigurationError(f'CSS file "{options.css_file}" doesn\'t exist')


__all__ = [
    "DEFAULT_MERMAID_URL",
    "TRANSPARENT",
    "RenderOptions",
    "build_options",
    "check_referenced_files",
    "load_options",
    "read_css",
    "resolve_browser_config",
    "resolve_mermaid_config",
    "snake_case",
]
