from __future__ import annotations

import os

from mrmd.core.diagnostics import RecordingEmitter
from mrmd.core.documents import Document
from mrmd.core.scanner import CLOSE_FENCE, OPEN_FENCE, Block, scan_blocks


def test_single_block_with_requested_output() -> None:
    blocks = list(scan_blocks(["```mermaid out.png", "A-->B", "```"]))

    assert blocks == [
        Block(index=1, start_line=0, end_line=2, body="A-->B", requested_output="out.png")
    ]


def test_unterminated_block_yields_nothing() -> None:
    assert list(scan_blocks(["```mermaid", "A-->B"])) == []


def test_unterminated_block_emits_warning() -> None:
    emitter = RecordingEmitter()

    list(scan_blocks(["intro", "```mermaid", "A-->B"], emitter=emitter))

    assert emitter.warnings == ["Mermaid block opened on line 2 is never closed; skipping it"]


def test_body_joins_interior_lines_with_platform_separator() -> None:
    lines = ["```mermaid", "graph TD", "  A-->B", "  B-->C", "```"]

    (block,) = scan_blocks(lines)

    assert block.body == os.linesep.join(["graph TD", "  A-->B", "  B-->C"])
    assert block.requested_output is None


def test_empty_block_is_still_emitted() -> None:
    (block,) = scan_blocks(["```mermaid", "```"])

    assert block.body == ""
    assert block.start_line == 0
    assert block.end_line == 1


def test_indices_follow_discovery_order() -> None:
    lines = [
        "```mermaid",
        "a",
        "```",
        "```python",
        "print('hi')",
        "```",
        "```mermaid second.pdf",
        "b",
        "```",
    ]

    blocks = list(scan_blocks(lines))

    assert [block.index for block in blocks] == [1, 2]
    assert [block.requested_output for block in blocks] == [None, "second.pdf"]
    assert all(block.start_line < block.end_line for block in blocks)


def test_reopening_inside_block_discards_previous_lines() -> None:
    lines = ["```mermaid", "lost", "```mermaid kept.svg", "kept", "```"]

    (block,) = scan_blocks(lines)

    assert block.body == "kept"
    assert block.requested_output == "kept.svg"
    assert block.start_line == 2
    assert block.index == 2


def test_trailing_unterminated_fence_ignored_after_complete_pairs() -> None:
    lines = ["```mermaid", "a", "```", "```mermaid", "b", "```", "```mermaid", "c"]

    assert len(list(scan_blocks(lines))) == 2


def test_stray_closing_fence_outside_block_is_ignored() -> None:
    lines = ["```", "```mermaid", "a", "```", "```"]

    assert [block.body for block in scan_blocks(lines)] == ["a"]


def test_scan_accepts_document_snapshot(tmp_path) -> None:
    document = Document.from_text(tmp_path / "doc.md", "```mermaid\nA-->B\n```\n")

    (block,) = scan_blocks(document)

    assert block.body == "A-->B"


def test_scan_is_lazy_and_single_pass() -> None:
    consumed: list[int] = []

    def lines():
        for number, line in enumerate(["```mermaid", "a", "```", "```mermaid", "b", "```"]):
            consumed.append(number)
            yield line

    iterator = scan_blocks(lines())
    first = next(iterator)

    assert first.body == "a"
    assert consumed == [0, 1, 2]


def test_open_fence_pattern() -> None:
    assert OPEN_FENCE.match("```mermaid")
    assert OPEN_FENCE.match("```MERMAID  ")
    assert OPEN_FENCE.match("```mermaid diagrams/flow.SVG").group(1) == "diagrams/flow.SVG"
    assert OPEN_FENCE.match("```mermaid  out.pdf  ").group(1) == "out.pdf"
    assert OPEN_FENCE.match("```mermaid out.txt") is None
    assert OPEN_FENCE.match("```mermaidx") is None
    assert OPEN_FENCE.match(" ```mermaid") is None


def test_close_fence_pattern() -> None:
    assert CLOSE_FENCE.match("```")
    assert CLOSE_FENCE.match("```   ")
    assert CLOSE_FENCE.match("```mermaid") is None
    assert CLOSE_FENCE.match("  ```") is None


def test_form_feed_inside_label_keeps_block_lines() -> None:
    text = '```mermaid\ngraph TD\n  C["p\x0cq"]-->D\n  D-->E\n```\n'

    (block,) = scan_blocks(Document.from_text("flow.md", text))

    assert block.body == os.linesep.join(["graph TD", '  C["p\x0cq"]-->D', "  D-->E"])
    assert (block.start_line, block.end_line) == (0, 4)
