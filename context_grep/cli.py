import sys
from typing import Mapping, Optional, Sequence, TextIO

from rich.console import Console
from rich.markup import escape

from context_grep.config import parse_config
from context_grep.errors import ContextGrepError
from context_grep.search import search_files

console = Console(stderr=True, soft_wrap=True)


def run(
    argv: Sequence[str],
    out: Optional[TextIO] = None,
    err_console: Optional[Console] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Parses the arguments and runs the search.

    Args:
        argv: Command-line arguments without the program name.
        out: Stream for search results; defaults to stdout.
        err_console: Console for errors and diagnostics; defaults to stderr.
        environ: Source of option defaults; defaults to .env plus os.environ.

    Returns:
        The process exit code: 0 on success, 1 on any error.
    """
    err_console = err_console or console
    try:
        config = parse_config(argv, environ=environ)
        search_files(config, out=out, log=err_console)
    except ContextGrepError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", soft_wrap=True)
        return 1
    return 0


def main():
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
