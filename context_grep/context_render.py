from typing import List, Sequence

from context_grep.config import GrepConfig
from context_grep.context_block import (
    ContextGroup,
    EndOfFile,
    GroupSeparator,
    MatchCount,
    OutputRecord,
    PrintedLine,
)


def context_groups(match_indices: Sequence[int], before: int, after: int, line_count: int) -> List[ContextGroup]:
    """
    Merges the context windows of the matches into disjoint groups.

    Each match m owns the window [m - before, m + after], clamped to the file.
    A window that overlaps or directly follows the last printed line extends
    the current group; a window separated by at least one unprinted line
    starts a new one.

    Args:
        match_indices: Ascending 0-based indices of the matching lines.
        before: Lines of context preceding each match.
        after: Lines of context following each match.
        line_count: Number of lines in the file.

    Returns:
        The groups in ascending order, pairwise non-adjacent.
    """
    groups: List[ContextGroup] = []
    last_printed = -1
    for match_idx in match_indices:
        start = max(0, match_idx - before)
        end = min(line_count - 1, match_idx + after)

        if last_printed != -1 and groups[-1].touches(start):
            group = groups[-1]
            group.match_indices.append(match_idx)
            # Lines up to last_printed are already emitted; only the tail is new.
            group.end = max(last_printed, end)
        else:
            group = ContextGroup(start=start, end=end, match_indices=[match_idx])
            groups.append(group)

        last_printed = group.end
    return groups


def render(config: GrepConfig, match_indices: Sequence[int], lines: Sequence[str]) -> List[OutputRecord]:
    """
    Turns the matches of one file into output records.

    Count-only mode yields a single MatchCount. Otherwise the records are the
    lines of every context group, a GroupSeparator between consecutive
    groups, and a final EndOfFile, which is present even without matches.
    """
    if config.count_only:
        return [MatchCount(len(match_indices))]

    records: List[OutputRecord] = []
    groups = context_groups(match_indices, config.before, config.after, len(lines))
    for group_num, group in enumerate(groups):
        if group_num > 0:
            records.append(GroupSeparator())
        matched = set(group.match_indices)
        for idx in range(group.start, group.end + 1):
            records.append(PrintedLine(
                line_number=idx + 1,
                content=lines[idx],
                is_match=idx in matched,
                numbered=config.show_line_numbers,
            ))
    records.append(EndOfFile())
    return records
