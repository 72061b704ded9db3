import re
from typing import List, Pattern, Sequence

from context_grep.errors import PatternError


def compile_pattern(pattern: str, ignore_case: bool = False, fixed_string: bool = False) -> Pattern[str]:
    """
    Compiles the search pattern into a regular expression.

    Args:
        pattern: The pattern text from the command line.
        ignore_case: Fold case for the whole pattern.
        fixed_string: Treat the pattern as literal text. Every metacharacter
            is escaped before compilation, so this never fails.

    Returns:
        The compiled pattern.

    Raises:
        PatternError: If the pattern is not a valid regular expression.
    """
    regex_text = re.escape(pattern) if fixed_string else pattern
    regex_flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(regex_text, regex_flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def match_indices(compiled: Pattern[str], lines: Sequence[str], invert: bool = False) -> List[int]:
    """Returns the 0-based indices of the lines selected by the pattern, in ascending order."""
    matches = []
    for i, line in enumerate(lines):
        is_match = compiled.search(line) is not None
        if is_match != invert:
            matches.append(i)
    return matches
