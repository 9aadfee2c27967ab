import re
from pathlib import Path

DEFAULT_PATTERN = "Documents|Downloads|Movies|Music|Pictures|Videos"
MATCH_ALL_PATTERN = ".*"

class PathFilter:
    """Regex predicate over full path strings.

    Matching uses search semantics, so the pattern can hit anywhere in the
    path. The compiled pattern is never changed after construction.
    """

    def __init__(self, pattern: str = DEFAULT_PATTERN):
        self.pattern = pattern
        self._regex = re.compile(pattern)

    @classmethod
    def match_all(cls):
        return cls(MATCH_ALL_PATTERN)

    def matches(self, path: str | Path) -> bool:
        return self._regex.search(str(path)) is not None

    def __call__(self, path: str | Path) -> bool:
        return self.matches(path)

    def __repr__(self):
        return f"PathFilter({self.pattern!r})"
