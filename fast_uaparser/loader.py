"""Read uap-core style ``regexes.yaml`` definitions into rule tuples."""

import os
from collections.abc import Mapping
from importlib import resources
from typing import Any, NamedTuple

try:
    from yaml import CSafeLoader as SafeLoader, YAMLError, load
except ImportError:
    from yaml import SafeLoader, YAMLError, load  # type: ignore

from .core import DeviceParser, OSParser, UAParser
from .errors import DefinitionError


class Definitions(NamedTuple):
    user_agent_parsers: list[UAParser]
    os_parsers: list[OSParser]
    device_parsers: list[DeviceParser]


def _opt(entry: Mapping[str, Any], key: str) -> str | None:
    # unquoted replacements such as ``v1_replacement: 10`` load as ints
    value = entry.get(key)
    return None if value is None else str(value)


def _regex(entry: Mapping[str, Any]) -> str:
    # client and os rules carry their flags inline
    regex = entry["regex"]
    flag = entry.get("regex_flag")
    return f"(?{flag}){regex}" if flag else regex


def _entries(contents: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    try:
        entries = contents[key]
    except KeyError:
        raise DefinitionError(f"missing {key!r} section") from None
    if not isinstance(entries, list):
        raise DefinitionError(f"{key!r} must be a list, not {type(entries).__name__}")
    for i, entry in enumerate(entries):
        if not isinstance(entry, Mapping) or "regex" not in entry:
            raise DefinitionError(f"{key}[{i}]: expected a mapping with a 'regex' key")
    return entries


def from_mapping(contents: Any) -> Definitions:
    """Convert a parsed ``regexes.yaml`` document into definition tuples."""
    if not isinstance(contents, Mapping):
        raise DefinitionError("rule definitions must be a mapping")

    return Definitions(
        [
            (
                _regex(t),
                _opt(t, "family_replacement"),
                _opt(t, "v1_replacement"),
                _opt(t, "v2_replacement"),
                _opt(t, "v3_replacement"),
                _opt(t, "v4_replacement"),
            )
            for t in _entries(contents, "user_agent_parsers")
        ],
        [
            (
                _regex(t),
                _opt(t, "os_replacement"),
                _opt(t, "os_v1_replacement"),
                _opt(t, "os_v2_replacement"),
                _opt(t, "os_v3_replacement"),
                _opt(t, "os_v4_replacement"),
            )
            for t in _entries(contents, "os_parsers")
        ],
        [
            (
                t["regex"],
                t.get("regex_flag"),
                _opt(t, "device_replacement"),
                _opt(t, "brand_replacement"),
                _opt(t, "model_replacement"),
            )
            for t in _entries(contents, "device_parsers")
        ],
    )


def load_yaml(path: str | os.PathLike[str]) -> Definitions:
    try:
        with open(path, "rb") as f:
            contents = load(f, Loader=SafeLoader)
    except OSError as e:
        raise DefinitionError(f"cannot read rule definitions: {e}") from e
    except YAMLError as e:
        raise DefinitionError(f"malformed rule definitions in {path}: {e}") from e
    return from_mapping(contents)


def load_builtin() -> Definitions:
    """The definitions bundled with the package."""
    source = resources.files(__package__) / "data" / "regexes.yaml"
    with resources.as_file(source) as path:
        return load_yaml(path)
