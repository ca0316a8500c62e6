"""Parse User-Agent strings into client, operating system and device.

The rules follow the uap-core ``regexes.yaml`` format. A curated set ships
with the package; set ``FAST_UAPARSER_REGEXES`` to the path of a full
upstream file to use that instead.

Compiling the rules is a one-off cost paid by :func:`init`, or by the first
parse call if :func:`init` was never called::

    import fast_uaparser

    fast_uaparser.init()
    ua = fast_uaparser.parse_client(
        "Mozilla/5.0 (X11; Linux i686; rv:70.0) Gecko/20100101 Firefox/70.0"
    )
    assert ua.family == "Firefox"
    assert (ua.version.major, ua.version.minor) == ("70", "0")
"""

from .core import (
    OS,
    OTHER,
    Device,
    DeviceExtractor,
    OSExtractor,
    RuleTable,
    UserAgent,
    UserAgentExtractor,
    Version,
)
from .errors import DefinitionError, InitError, PatternCompilationError
from .loader import Definitions
from .parser import Parser, Result
from .settings import Settings

__all__ = [
    "OS",
    "OTHER",
    "Definitions",
    "DefinitionError",
    "Device",
    "DeviceExtractor",
    "InitError",
    "OSExtractor",
    "Parser",
    "PatternCompilationError",
    "Result",
    "RuleTable",
    "Settings",
    "UserAgent",
    "UserAgentExtractor",
    "Version",
    "init",
    "parse",
    "parse_client",
    "parse_device",
    "parse_os",
]

_parser = Parser.from_env()


def init(timeout: float | None = None) -> bool:
    return _parser.init(timeout)


def parse_client(s: str) -> UserAgent:
    return _parser.parse_client(s)


def parse_os(s: str) -> OS:
    return _parser.parse_os(s)


def parse_device(s: str) -> Device:
    return _parser.parse_device(s)


def parse(s: str) -> Result:
    return _parser.parse(s)
