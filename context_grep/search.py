import sys
from typing import List, Optional, Pattern, TextIO

from rich.console import Console
from rich.markup import escape

from context_grep.config import GrepConfig
from context_grep.context_block import MatchCount
from context_grep.context_render import render
from context_grep.errors import FileAccessError
from context_grep.matcher import compile_pattern, match_indices

console = Console(stderr=True, soft_wrap=True)

# --- Helper Functions ---

def read_lines(path: str) -> List[str]:
    """
    Reads a whole file into a list of lines.

    Lines are split on "\\n"; the terminator and one "\\r" preceding it are
    removed. A trailing newline does not produce an extra empty line, so an
    empty file yields no lines at all.

    Raises:
        FileAccessError: If the file cannot be opened or read.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def search_file(
    config: GrepConfig,
    compiled: Pattern[str],
    path: str,
    out: Optional[TextIO] = None,
    log: Optional[Console] = None,
) -> int:
    """
    Searches one file and prints its output block.

    A file with no lines prints nothing, not even a header. In count-only
    mode the block is the single line "<path>:<count>"; otherwise it is the
    header "<path>:", the rendered context groups and a blank line.

    Returns:
        Number of selected lines in the file.
    """
    out = out or sys.stdout
    log = log or console

    lines = read_lines(path)
    if not lines:
        if config.verbose:
            log.print(f"[dim]{escape(path)}: empty file, skipped[/dim]", soft_wrap=True)
        return 0

    matches = match_indices(compiled, lines, invert=config.invert)
    if config.verbose:
        log.print(f"[dim]{escape(path)}: {len(lines)} lines, {len(matches)} matching[/dim]", soft_wrap=True)

    records = render(config, matches, lines)
    if config.count_only:
        count_record: MatchCount = records[0]
        print(f"{path}:{count_record}", file=out)
        return len(matches)

    print(f"{path}:", file=out)
    for record in records:
        print(record, file=out)
    return len(matches)


def search_files(config: GrepConfig, out: Optional[TextIO] = None, log: Optional[Console] = None) -> int:
    """
    Runs the search over every configured file, in order.

    The pattern is compiled once up front. The first error aborts the run;
    blocks already printed for earlier files stay printed.

    Returns:
        Total number of selected lines across all files.

    Raises:
        PatternError: If the pattern does not compile.
        FileAccessError: If any file cannot be read.
    """
    log = log or console
    compiled = compile_pattern(config.pattern, ignore_case=config.ignore_case, fixed_string=config.fixed_string)
    if config.verbose:
        log.print(f"[dim]Searching {len(config.files)} file(s) for {escape(repr(compiled.pattern))} "
                  f"(before={config.before}, after={config.after}, ignore_case={config.ignore_case}, "
                  f"invert={config.invert})[/dim]", soft_wrap=True)

    total = 0
    for path in config.files:
        total += search_file(config, compiled, path, out=out, log=log)
    return total
