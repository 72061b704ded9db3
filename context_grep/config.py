import argparse
import dataclasses
import os
from typing import Mapping, Optional, Sequence, Tuple

import dotenv

from context_grep.errors import ConfigError

# Environment variables (or .env entries) that provide option defaults.
ENV_BEFORE = "CONTEXT_GREP_BEFORE"
ENV_AFTER = "CONTEXT_GREP_AFTER"
ENV_CONTEXT = "CONTEXT_GREP_CONTEXT"
ENV_VERBOSE = "CONTEXT_GREP_VERBOSE"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclasses.dataclass(frozen=True)
class GrepConfig:
    """
    Immutable set of options for one search run.

    A positive `context` overwrites both `before` and `after`, whatever
    values they were given.
    """
    pattern: str = ""
    files: Tuple[str, ...] = ()
    before: int = 0
    after: int = 0
    context: int = 0
    count_only: bool = False
    ignore_case: bool = False
    invert: bool = False
    fixed_string: bool = False
    show_line_numbers: bool = False
    verbose: bool = False

    def __post_init__(self):
        for name in ("before", "after", "context"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {getattr(self, name)}")
        if self.context > 0:
            object.__setattr__(self, "before", self.context)
            object.__setattr__(self, "after", self.context)
        object.__setattr__(self, "files", tuple(self.files))


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigError instead of exiting with status 2."""

    def error(self, message):
        raise ConfigError(message)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: '{value}'")
    return number


def _env_int(environ: Mapping[str, str], name: str) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return 0
    try:
        return _non_negative_int(raw)
    except argparse.ArgumentTypeError as e:
        raise ConfigError(f"{name}: {e}") from e


def load_env_defaults(environ: Optional[Mapping[str, str]] = None) -> dict:
    """
    Reads option defaults from the environment.

    When `environ` is None, a .env file in the working directory is loaded
    first (existing variables win) and os.environ is used.

    Raises:
        ConfigError: If a numeric variable is not a non-negative integer.
    """
    if environ is None:
        dotenv_path = dotenv.find_dotenv(usecwd=True)
        if dotenv_path:
            dotenv.load_dotenv(dotenv_path)
        environ = os.environ
    return {
        "before": _env_int(environ, ENV_BEFORE),
        "after": _env_int(environ, ENV_AFTER),
        "context": _env_int(environ, ENV_CONTEXT),
        "verbose": environ.get(ENV_VERBOSE, "").strip().lower() in _TRUE_VALUES,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="context-grep",
        description="Print lines matching a pattern, with surrounding context.",
    )
    parser.add_argument("pattern", nargs="?", default=None, help="Regular expression (or literal text with -F) to search for.")
    parser.add_argument("files", nargs="*", help="Files to search, in order.")
    # None means "not given": the environment default applies.
    parser.add_argument("-A", dest="after", type=_non_negative_int, metavar="N",
                        default=None, help="Print N lines of context after each match.")
    parser.add_argument("-B", dest="before", type=_non_negative_int, metavar="N",
                        default=None, help="Print N lines of context before each match.")
    parser.add_argument("-C", dest="context", type=_non_negative_int, metavar="N",
                        default=None, help="Print N lines of context around each match; overrides -A and -B.")
    parser.add_argument("-c", dest="count_only", action="store_true", help="Print only the count of matching lines per file.")
    parser.add_argument("-i", dest="ignore_case", action="store_true", help="Ignore case distinctions.")
    parser.add_argument("-v", dest="invert", action="store_true", help="Select non-matching lines.")
    parser.add_argument("-F", dest="fixed_string", action="store_true", help="Treat the pattern as a literal string.")
    parser.add_argument("-n", dest="show_line_numbers", action="store_true", help="Prefix each line with its 1-based line number.")
    parser.add_argument("--verbose", action="store_true", help="Print diagnostics to stderr.")
    return parser


def parse_config(argv: Sequence[str], environ: Optional[Mapping[str, str]] = None) -> GrepConfig:
    """
    Builds the run configuration from command-line arguments.

    Options may appear before, between or after the positional arguments.
    Context sizes given on the command line win over environment defaults;
    an explicit -A or -B also discards an environment-provided context.

    Args:
        argv: Arguments without the program name.
        environ: Source of option defaults; see load_env_defaults.

    Raises:
        ConfigError: On a missing pattern or files, or a malformed option.
    """
    defaults = load_env_defaults(environ)
    args = build_parser().parse_intermixed_args(list(argv))

    if not args.pattern:
        raise ConfigError("pattern is required")
    if not args.files:
        raise ConfigError("no files specified")

    before = defaults["before"] if args.before is None else args.before
    after = defaults["after"] if args.after is None else args.after
    if args.context is not None:
        context = args.context
    elif args.before is not None or args.after is not None:
        context = 0
    else:
        context = defaults["context"]

    return GrepConfig(
        pattern=args.pattern,
        files=tuple(args.files),
        before=before,
        after=after,
        context=context,
        count_only=args.count_only,
        ignore_case=args.ignore_case,
        invert=args.invert,
        fixed_string=args.fixed_string,
        show_line_numbers=args.show_line_numbers,
        verbose=args.verbose or defaults["verbose"],
    )
