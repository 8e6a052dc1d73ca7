from __future__ import annotations

from pathlib import Path

import pytest

from mrmd.core.documents import Document
from mrmd.core.exceptions import InvalidInvocationError
from mrmd.core.naming import (
    check_input_path,
    check_output_path,
    output_format,
    resolve_paths,
)
from mrmd.core.scanner import Block


def _block(index: int, requested: str | None = None) -> Block:
    return Block(index=index, start_line=0, end_line=2, body="A-->B", requested_output=requested)


def test_default_output_uses_document_name_and_index(tmp_path: Path) -> None:
    document = Document.from_lines(tmp_path / "guide.md", [])

    paths = resolve_paths(_block(3), document, tmp_path / "work")

    assert paths.output_path == tmp_path / "guide_mrmd_3.png"
    assert paths.input_path == tmp_path / "work" / "guide_input_3.md"


def test_requested_output_is_joined_with_document_directory(tmp_path: Path) -> None:
    document = Document.from_lines(tmp_path / "docs" / "guide.md", [])

    paths = resolve_paths(_block(7, "foo.svg"), document, tmp_path / "work")

    assert paths.output_path == tmp_path / "docs" / "foo.svg"
    assert paths.input_path == tmp_path / "work" / "guide_input_7.md"


def test_absolute_requested_output_wins(tmp_path: Path) -> None:
    document = Document.from_lines(tmp_path / "docs" / "guide.md", [])
    target = tmp_path / "elsewhere" / "chart.pdf"

    paths = resolve_paths(_block(1, str(target)), document, tmp_path)

    assert paths.output_path == target


def test_colliding_outputs_are_not_disambiguated(tmp_path: Path) -> None:
    document = Document.from_lines(tmp_path / "guide.md", [])

    first = resolve_paths(_block(1, "same.png"), document, tmp_path)
    second = resolve_paths(_block(2, "same.png"), document, tmp_path)

    assert first.output_path == second.output_path
    assert first.input_path != second.input_path


@pytest.mark.parametrize(
    ("name", "expected"),
    [("a.svg", "svg"), ("a.PNG", "png"), ("a.pdf", "pdf"), ("a.txt", None), ("a", None)],
)
def test_output_format(name: str, expected: str | None) -> None:
    assert output_format(Path(name)) == expected


def test_check_output_path_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(InvalidInvocationError, match="must end with"):
        check_output_path(tmp_path / "diagram.txt")


def test_check_output_path_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(InvalidInvocationError, match="Output directory"):
        check_output_path(tmp_path / "missing" / "diagram.png")

    assert check_output_path(tmp_path / "diagram.png") == "png"


def test_check_input_path(tmp_path: Path) -> None:
    with pytest.raises(InvalidInvocationError, match="doesn't exist"):
        check_input_path(tmp_path / "absent.md")
