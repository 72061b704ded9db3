from dataclasses import dataclass, field
from typing import List, Union

SEPARATOR = "--"


@dataclass
class PrintedLine:
    """Represents a single line emitted for a file, either a match or its context."""
    line_number: int # 1-based
    content: str
    is_match: bool # True if this line matched the pattern, False if it's context
    numbered: bool = False # Prefix the output with "<line_number>:"

    def __str__(self) -> str:
        if self.numbered:
            return f"{self.line_number}:{self.content}"
        return self.content


@dataclass(frozen=True)
class GroupSeparator:
    """Marks a gap of unprinted lines between two context groups."""

    def __str__(self) -> str:
        return SEPARATOR


@dataclass(frozen=True)
class MatchCount:
    """Summary record emitted instead of line content in count-only mode."""
    count: int

    def __str__(self) -> str:
        return str(self.count)


@dataclass(frozen=True)
class EndOfFile:
    """Blank line terminating the output block of one file."""

    def __str__(self) -> str:
        return ""


OutputRecord = Union[PrintedLine, GroupSeparator, MatchCount, EndOfFile]


@dataclass
class ContextGroup:
    """Represents a contiguous range of lines containing one or more matches."""
    start: int # First 0-based line index in the group (including context)
    end: int   # Last 0-based line index in the group (including context)
    match_indices: List[int] = field(default_factory=list)

    def touches(self, start: int) -> bool:
        """True if a window beginning at `start` overlaps or directly follows this group."""
        return start <= self.end + 1
