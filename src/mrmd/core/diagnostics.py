"""Notification sinks for the batch renderer.

Hosts receive per-job notifications through a :class:`DiagnosticEmitter`.
Successful jobs surface as structured events, failures as errors, and
structural anomalies in the scanned document as warnings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger("mrmd")


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Sink receiving skipped-block warnings, job failures and job events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


@dataclass(slots=True)
class NullEmitter:
    """Emitter discarding every notification, used when a host passes none."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def error(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        pass


class LoggingEmitter:
    """Report notifications on the ``mrmd`` logger.

    Tracebacks of failed jobs are attached only when ``debug_enabled`` is set.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def _exc_info(self, exc: BaseException | None) -> BaseException | None:
        return exc if self.debug_enabled else None

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.warning(message, exc_info=self._exc_info(exc))

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.error(message, exc_info=self._exc_info(exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            self._logger.debug("%s: %s", name, dict(payload))
        else:
            self._logger.info(message)


@dataclass(slots=True)
class RecordingEmitter:
    """Emitter that keeps every diagnostic in memory for later inspection."""

    debug_enabled: bool = False
    warnings: list[str] = field(default_factory=list)
    errors: list[tuple[str, BaseException | None]] = field(default_factory=list)
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    @property
    def messages(self) -> list[str]:
        """Return the human-readable form of every recorded event."""
        rendered: list[str] = []
        for name, payload in self.events:
            message = format_event_message(name, payload)
            if message:
                rendered.append(message)
        return rendered


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "diagram_rendered":
        output = data.get("output") or "<unknown>"
        return f"{output} was successfully generated"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "RecordingEmitter",
    "format_event_message",
]
