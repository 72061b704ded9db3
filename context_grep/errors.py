class ContextGrepError(Exception):
    """Base exception for every failure that aborts a search run."""
    pass


class ConfigError(ContextGrepError):
    """Missing pattern or files, or an unusable option value."""
    pass


class PatternError(ContextGrepError):
    """The pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class FileAccessError(ContextGrepError):
    """A file could not be opened or read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read file {path}: {reason}")
        self.path = path
        self.reason = reason
