"""Headless Chromium renderer driven through Playwright."""

from __future__ import annotations

from collections.abc import Mapping
import html
import logging
from pathlib import Path
import subprocess
import sys
from threading import Lock
from typing import Any, ClassVar

from mrmd.core.config import (
    RenderOptions,
    read_css,
    resolve_browser_config,
    resolve_mermaid_config,
    snake_case,
)
from mrmd.core.exceptions import RendererExecutionError
from mrmd.core.naming import check_input_path, check_output_path


logger = logging.getLogger(__name__)

_PLAYWRIGHT_APT_PACKAGES: tuple[str, ...] = (
    "libglib2.0-0",
    "libnspr4",
    "libnss3",
    "libatk1.0-0",
    "libatk-bridge2.0-0",
    "libcups2",
    "libxkbcommon0",
    "libxcomposite1",
    "libxdamage1",
    "libxrandr2",
    "libgbm1",
    "libpango-1.0-0",
    "libasound2",
)
_PLAYWRIGHT_BACKEND_HINT = "If Playwright cannot run in this environment, re-run with --backend mmdc."

# Launch option names that do not follow the camelCase -> snake_case rule.
_LAUNCH_KEY_ALIASES = {
    "handleSIGINT": "handle_sigint",
    "handleSIGTERM": "handle_sigterm",
    "handleSIGHUP": "handle_sighup",
}
# Puppeteer-only launch options without a Playwright counterpart.
_UNSUPPORTED_LAUNCH_KEYS = {"product", "defaultViewport", "userDataDir", "pipe", "dumpio"}

_PAGE_TEMPLATE = """<!doctype html>
<html><head><meta charset="utf-8" />
<script src="{script}"></script>
</head><body style="margin:0;"><div id="container"></div></body></html>"""

_RENDER_SCRIPT = """
async ({ definition, config, css, timeoutMs }) => {
  const container = document.getElementById("container");
  window.mermaid.initialize(config);
  if (css) {
    const style = document.createElement("style");
    style.appendChild(document.createTextNode(css));
    document.head.appendChild(style);
  }
  const expired = new Promise((_, reject) =>
    setTimeout(() => reject(new Error(`Mermaid rendering timed out after ${timeoutMs}ms`)), timeoutMs)
  );
  const { svg } = await Promise.race([window.mermaid.render("mrmd-diagram", definition), expired]);
  container.innerHTML = svg;
}
"""


def _playwright_dependency_hint() -> str:
    packages = " ".join(_PLAYWRIGHT_APT_PACKAGES)
    return (
        "Install Playwright browser dependencies with `playwright install-deps` "
        f"(Debian/Ubuntu: `sudo apt-get install {packages}`)."
    )


def _wrap_playwright_error(exc: Exception) -> RendererExecutionError:
    """Return a structured error, adding setup guidance for launch failures."""
    base_message = str(exc).strip() or exc.__class__.__name__
    first_line = base_message.splitlines()[0]
    if "launch" in base_message.lower() or "executable" in base_message.lower():
        hint = f"{_playwright_dependency_hint()} {_PLAYWRIGHT_BACKEND_HINT}"
        return RendererExecutionError(f"Playwright backend failed: {first_line}. {hint}")
    return RendererExecutionError(f"Playwright backend failed: {first_line}")


def launch_options(raw: Mapping[str, Any], *, timeout_ms: float) -> dict[str, Any]:
    """Translate Puppeteer-style launch options into Playwright keyword arguments."""
    options: dict[str, Any] = {}
    for key, value in raw.items():
        if key in _UNSUPPORTED_LAUNCH_KEYS:
            logger.debug("Ignoring unsupported browser launch option '%s'", key)
            continue
        options[_LAUNCH_KEY_ALIASES.get(key) or snake_case(key)] = value
    headless = options.get("headless")
    if headless not in (True, False):
        # Puppeteer accepts "new" / "shell"; Playwright only takes booleans.
        options["headless"] = True
    options.setdefault("timeout", timeout_ms)
    return options


class PlaywrightRenderer:
    """Render Mermaid definitions in headless Chromium.

    Each call starts its own Playwright driver and browser, so calls from
    different worker threads never share Playwright objects.
    """

    _install_lock: ClassVar[Lock] = Lock()
    _install_attempted: ClassVar[bool] = False

    def __init__(self, *, auto_install: bool = True) -> None:
        self.auto_install = auto_install

    def render(self, input_path: Path, output_path: Path, options: RenderOptions) -> None:
        check_input_path(input_path)
        fmt = check_output_path(output_path)
        mermaid_config = resolve_mermaid_config(options)
        browser_options = launch_options(
            resolve_browser_config(options), timeout_ms=options.timeout_ms
        )
        css = read_css(options)
        definition = input_path.read_text(encoding="utf-8")

        from playwright.sync_api import Error as PlaywrightError, sync_playwright

        try:
            with sync_playwright() as playwright:
                browser = self._launch(playwright, browser_options, PlaywrightError)
                try:
                    page = browser.new_page(
                        viewport={"width": options.width, "height": options.height}
                    )
                    page.set_default_timeout(options.timeout_ms)
                    page.set_content(
                        _PAGE_TEMPLATE.format(script=html.escape(options.mermaid_url, quote=True)),
                        wait_until="load",
                    )
                    page.evaluate(
                        "color => { document.body.style.background = color; }",
                        options.background_color,
                    )
                    page.evaluate(
                        _RENDER_SCRIPT,
                        {
                            "definition": definition,
                            "config": mermaid_config,
                            "css": css,
                            "timeoutMs": options.timeout_ms,
                        },
                    )
                    self._capture(page, fmt, output_path, options)
                finally:
                    browser.close()
        except PlaywrightError as exc:
            raise _wrap_playwright_error(exc) from exc
        logger.debug("Rendered %s -> %s", input_path, output_path)

    def _launch(self, playwright: Any, browser_options: dict[str, Any], error_type: type) -> Any:
        try:
            return playwright.chromium.launch(**browser_options)
        except error_type as exc:
            msg = str(exc)
            if not self.auto_install or "Executable doesn't exist" not in msg:
                raise
            self._install_chromium()
            return playwright.chromium.launch(**browser_options)

    @classmethod
    def _install_chromium(cls) -> None:
        with cls._install_lock:
            if cls._install_attempted:
                return
            cls._install_attempted = True
            logger.info("Installing Chromium for Playwright")
            result = subprocess.run(
                [sys.executable, "-m", "playwright", "install", "chromium"],
                check=False,
                capture_output=True,
                text=True,
            )
            if result.returncode != 0:
                detail = (result.stderr or "").strip() or (result.stdout or "").strip()
                raise RendererExecutionError(
                    f"Unable to install Chromium for Playwright: {detail or result.returncode}"
                )

    def _capture(self, page: Any, fmt: str, output_path: Path, options: RenderOptions) -> None:
        if fmt == "svg":
            markup = page.eval_on_selector("#container", "container => container.innerHTML")
            output_path.write_text(markup, encoding="utf-8")
        elif fmt == "png":
            box = page.locator("#container > svg").bounding_box()
            screenshot_kwargs: dict[str, Any] = {
                "path": str(output_path),
                "omit_background": options.transparent,
            }
            if box:
                screenshot_kwargs["clip"] = {
                    "x": box["x"],
                    "y": box["y"],
                    "width": box["width"],
                    "height": box["height"],
                }
            page.screenshot(**screenshot_kwargs)
        else:
            page.pdf(path=str(output_path), print_background=not options.transparent)


__all__ = ["PlaywrightRenderer", "launch_options"]
