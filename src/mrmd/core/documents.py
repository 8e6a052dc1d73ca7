"""Read-only document snapshots consumed by the block scanner."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
import re

from .exceptions import InvalidInvocationError


# Form feeds and Unicode separators stay inside their line.
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split ``text`` on CRLF, CR and LF, ignoring a final terminator."""
    lines = LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered lines of a text document together with its filesystem identity.

    The path drives naming: default outputs use its stem and land in its
    directory. Lines never carry their terminators.
    """

    path: Path
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, path: Path | str, text: str) -> Document:
        """Build a snapshot from in-memory text, e.g. an editor buffer."""
        return cls(path=Path(path), lines=tuple(split_lines(text)))

    @classmethod
    def from_lines(cls, path: Path | str, lines: Iterable[str]) -> Document:
        """Build a snapshot from already split lines."""
        return cls(path=Path(path), lines=tuple(lines))

    @classmethod
    def from_path(cls, path: Path | str) -> Document:
        """Read a UTF-8 document from disk."""
        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise InvalidInvocationError(f'Input file "{source}" doesn\'t exist') from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidInvocationError(f'Unable to read input file "{source}": {exc}') from exc
        return cls.from_text(source, text)

    @property
    def directory(self) -> Path:
        """Directory receiving the rendered diagrams."""
        return self.path.parent

    @property
    def base_name(self) -> str:
        """File name without its extension."""
        return self.path.stem

    def __len__(self) -> int:
        return len(self.lines)


__all__ = ["LINE_BREAK", "Document", "split_lines"]
