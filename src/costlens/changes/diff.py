"""Line-based diff between two text snapshots.

Produces ordered segments marked added, removed or unchanged. Unchanged and
added segments concatenate to the new text exactly; unchanged and removed
segments concatenate to the old text. Where a block of lines was replaced,
the removed segment precedes the added one.
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

SegmentState = Literal["added", "removed", "unchanged"]


@dataclass(frozen=True, slots=True)
class DiffSegment:
    """A run of consecutive lines sharing one diff state.

    Attributes:
        value: Concatenated lines, newlines included.
        state: Whether the lines were added, removed or kept.
        count: Number of lines in value.

    """

    value: str
    state: SegmentState
    count: int

    @property
    def added(self) -> bool:
        return self.state == "added"

    @property
    def removed(self) -> bool:
        return self.state == "removed"

    @property
    def changed(self) -> bool:
        """True for added or removed segments."""
        return self.state != "unchanged"


def diff_lines(old_text: str, new_text: str) -> list[DiffSegment]:
    """Compute line diff segments between two texts.

    A line includes its trailing newline, so ``"a"`` and ``"a\\n"`` are
    different lines.

    Args:
        old_text: Previous snapshot.
        new_text: Current snapshot.

    Returns:
        Segments in reading order of the new text.

    """
    old_lines = _split_lines(old_text)
    new_lines = _split_lines(new_text)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    segments: list[DiffSegment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append(segments, "unchanged", new_lines[j1:j2])
            continue
        if tag in ("replace", "delete"):
            _append(segments, "removed", old_lines[i1:i2])
        if tag in ("replace", "insert"):
            _append(segments, "added", new_lines[j1:j2])

    logger.debug(
        "Diffed %d → %d lines into %d segments",
        len(old_lines),
        len(new_lines),
        len(segments),
    )
    return segments


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` keeping line endings; no empty trailing line."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _append(segments: list[DiffSegment], state: SegmentState, lines: list[str]) -> None:
    """Append lines as a segment, merging into a preceding one of the same state."""
    if not lines:
        return
    if segments and segments[-1].state == state:
        last = segments.pop()
        segments.append(
            DiffSegment(last.value + "".join(lines), state, last.count + len(lines))
        )
        return
    segments.append(DiffSegment("".join(lines), state, len(lines)))
