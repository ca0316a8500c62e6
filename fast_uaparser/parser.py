"""Public parse operations over a lazily compiled rule table."""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from .core import OS, Device, RuleTable, UserAgent
from .errors import DefinitionError
from .gate import InitGate
from .loader import Definitions, load_builtin, load_yaml
from .settings import DEFAULT_MAX_LENGTH, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    string: str
    user_agent: UserAgent
    os: OS
    device: Device


class Parser:
    """Parses user agent strings against one rule table.

    ``load`` is called at most once, on :meth:`init` or on the first parse,
    whichever comes first. An unrecognised user agent is never an error:
    the facet comes back with family ``"Other"`` and everything else unset.
    The only exceptions raised are :class:`~fast_uaparser.errors.InitError`
    subclasses, from building the table.
    """

    def __init__(
        self,
        load: Callable[[], Definitions],
        *,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self.max_length = max_length
        self._load = load
        self._gate = InitGate(self._compile)

    @classmethod
    def from_definitions(cls, definitions: Definitions, **kwargs) -> "Parser":
        return cls(lambda: definitions, **kwargs)

    @classmethod
    def from_yaml(cls, path: str | os.PathLike[str], **kwargs) -> "Parser":
        return cls(lambda: load_yaml(path), **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Parser":
        if settings.regexes_path:
            return cls.from_yaml(settings.regexes_path, max_length=settings.max_length)
        return cls(load_builtin, max_length=settings.max_length)

    @classmethod
    def from_env(cls) -> "Parser":
        """A parser that reads its :class:`Settings` when it is initialized.

        An invalid setting fails initialization with a
        :class:`~fast_uaparser.errors.DefinitionError` rather than at import.
        """

        def load() -> Definitions:
            try:
                settings = Settings.from_env()
            except ValueError as e:
                raise DefinitionError(f"invalid settings: {e}") from e
            parser.max_length = settings.max_length
            if settings.regexes_path:
                return load_yaml(settings.regexes_path)
            return load_builtin()

        parser = cls(load)
        return parser

    def _compile(self) -> RuleTable:
        table = RuleTable.compile(*self._load())
        logger.info(
            "compiled %d user agent, %d os and %d device rules",
            len(table.user_agent),
            len(table.os),
            len(table.device),
        )
        return table

    @property
    def gate(self) -> InitGate[RuleTable]:
        return self._gate

    def init(self, timeout: float | None = None) -> bool:
        """Compile the rule table now rather than on first use.

        Returns ``True`` if this call did the compilation, ``False`` if the
        table was already compiled.
        """
        return self._gate.ensure(timeout)

    def _bound(self, s: str) -> str:
        if self.max_length and len(s) > self.max_length:
            return s[: self.max_length]
        return s

    def parse_client(self, s: str) -> UserAgent:
        table = self._gate.get()
        return table.user_agent.extract(self._bound(s)) or UserAgent()

    def parse_os(self, s: str) -> OS:
        table = self._gate.get()
        return table.os.extract(self._bound(s)) or OS()

    def parse_device(self, s: str) -> Device:
        table = self._gate.get()
        return table.device.extract(self._bound(s)) or Device()

    def parse(self, s: str) -> Result:
        return Result(s, self.parse_client(s), self.parse_os(s), self.parse_device(s))
