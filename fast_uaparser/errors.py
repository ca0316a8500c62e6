class InitError(Exception):
    """The rule table could not be built."""


class DefinitionError(InitError):
    """The rule definitions could not be read."""


class PatternCompilationError(InitError):
    """A rule's pattern (or flag) is not valid for the ``re`` engine."""

    def __init__(self, facet: str, index: int, pattern: str, reason: str) -> None:
        super().__init__(facet, index, pattern, reason)
        self.facet = facet
        self.index = index
        self.pattern = pattern
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.facet}[{self.index}]: {self.reason} in {self.pattern!r}"
