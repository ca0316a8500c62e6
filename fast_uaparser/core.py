"""Rules, templates and the first-match-wins matcher.

A rule is a compiled pattern plus one field spec per output field. A field
spec is either a :class:`Template` (the ``*_replacement`` of the
definitions), an ``int`` naming the capture group used when no template is
given, or ``None`` when the field has no default at all.
"""

import itertools
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Union

from .errors import DefinitionError, PatternCompilationError

OTHER = "Other"

UAParser = tuple[
    str,
    str | None,
    str | None,
    str | None,
    str | None,
    str | None,
]

OSParser = tuple[
    str,
    str | None,
    str | None,
    str | None,
    str | None,
    str | None,
]

DeviceParser = tuple[
    str,
    str | None,
    str | None,
    str | None,
    str | None,
]

_PLACEHOLDER = re.compile(r"\$(\d)")

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


@dataclass(frozen=True)
class Template:
    """Literal text interleaved with ``$N`` capture group references."""

    segments: tuple[Union[str, int], ...]

    @classmethod
    def parse(cls, source: str) -> "Template":
        segments: list[Union[str, int]] = []
        # split() alternates literal text and the captured group digit
        for i, part in enumerate(_PLACEHOLDER.split(source)):
            if i % 2:
                segments.append(int(part))
            elif part:
                segments.append(part)
        return cls(tuple(segments))

    def render(self, m: re.Match[str]) -> str | None:
        groups = m.re.groups
        out = "".join(
            seg if isinstance(seg, str) else ((m.group(seg) or "") if seg <= groups else "")
            for seg in self.segments
        )
        return out.strip() or None


FieldSpec = Union[Template, int, None]


def _group(m: re.Match[str], index: int) -> str | None:
    if index > m.re.groups:
        return None
    return m.group(index) or None


def _resolve(spec: FieldSpec, m: re.Match[str]) -> str | None:
    if spec is None:
        return None
    if isinstance(spec, Template):
        return spec.render(m)
    return _group(m, spec)


@dataclass(frozen=True)
class Rule:
    """A compiled pattern; ``fields[0]`` is the name (family or device)."""

    pattern: re.Pattern[str]
    fields: tuple[FieldSpec, ...]

    def extract(self, m: re.Match[str]) -> tuple[str | None, ...]:
        name_spec, *rest = self.fields
        if name_spec is None:
            name = _group(m, 1) or m.group(0) or None
        else:
            name = _resolve(name_spec, m)
        return (name, *(_resolve(spec, m) for spec in rest))


def _template(source: str | None, default: int | None) -> FieldSpec:
    if source is None:
        return default
    return Template.parse(source)


def compile_rule(
    facet: str,
    index: int,
    regex: str,
    flags: str | None,
    templates: Sequence[str | None],
    defaults: Sequence[FieldSpec],
) -> Rule:
    """Compile one definition, raising :class:`PatternCompilationError`."""
    if len(templates) != len(defaults):
        raise DefinitionError(
            f"{facet}[{index}]: expected {len(defaults)} templates, got {len(templates)}"
        )
    re_flags = 0
    for flag in flags or "":
        try:
            re_flags |= _FLAGS[flag]
        except KeyError:
            raise PatternCompilationError(
                facet, index, regex, f"unsupported flag {flag!r}"
            ) from None
    try:
        pattern = re.compile(regex, re_flags)
    except (re.error, TypeError) as e:
        raise PatternCompilationError(facet, index, regex, str(e)) from e

    return Rule(
        pattern,
        tuple(_template(t, d) for t, d in zip(templates, defaults)),
    )


def match(s: str, rules: Sequence[Rule]) -> tuple[str | None, ...] | None:
    """Apply the first rule of ``rules`` whose pattern is found in ``s``."""
    if not s:
        return None
    for rule in rules:
        m = rule.pattern.search(s)
        if m:
            return rule.extract(m)
    return None


@dataclass(frozen=True)
class Version:
    major: str | None = None
    minor: str | None = None
    patch: str | None = None
    patch_minor: str | None = None

    @classmethod
    def from_parts(cls, *parts: str | None) -> "Version":
        """Build a version, dropping every part after the first unset one."""
        return cls(*itertools.takewhile(lambda p: p is not None, parts))

    def __str__(self) -> str:
        return ".".join(
            p
            for p in (self.major, self.minor, self.patch, self.patch_minor)
            if p is not None
        )


@dataclass(frozen=True)
class UserAgent:
    family: str = OTHER
    version: Version = field(default_factory=Version)


@dataclass(frozen=True)
class OS:
    family: str = OTHER
    version: Version = field(default_factory=Version)


@dataclass(frozen=True)
class Device:
    family: str = OTHER
    brand: str | None = None
    model: str | None = None


class UserAgentExtractor:
    facet = "user_agent_parsers"

    def __init__(self, it: Iterable[UAParser], /) -> None:
        self.rules = tuple(
            compile_rule(self.facet, i, regex, None, templates, (None, 2, 3, 4, 5))
            for i, (regex, *templates) in enumerate(it)
        )

    def __len__(self) -> int:
        return len(self.rules)

    def extract(self, s: str, /) -> UserAgent | None:
        fields = match(s, self.rules)
        if fields is None:
            return None
        family, *version = fields
        return UserAgent(family or OTHER, Version.from_parts(*version))


class OSExtractor:
    facet = "os_parsers"

    def __init__(self, it: Iterable[OSParser], /) -> None:
        self.rules = tuple(
            compile_rule(self.facet, i, regex, None, templates, (None, 2, 3, 4, 5))
            for i, (regex, *templates) in enumerate(it)
        )

    def __len__(self) -> int:
        return len(self.rules)

    def extract(self, s: str, /) -> OS | None:
        fields = match(s, self.rules)
        if fields is None:
            return None
        family, *version = fields
        return OS(family or OTHER, Version.from_parts(*version))


class DeviceExtractor:
    facet = "device_parsers"

    def __init__(self, it: Iterable[DeviceParser], /) -> None:
        # brand has no default, model falls back to the first group
        self.rules = tuple(
            compile_rule(self.facet, i, regex, flags, templates, (None, None, 1))
            for i, (regex, flags, *templates) in enumerate(it)
        )

    def __len__(self) -> int:
        return len(self.rules)

    def extract(self, s: str, /) -> Device | None:
        fields = match(s, self.rules)
        if fields is None:
            return None
        family, brand, model = fields
        return Device(family or OTHER, brand, model)


@dataclass(frozen=True)
class RuleTable:
    user_agent: UserAgentExtractor
    os: OSExtractor
    device: DeviceExtractor

    @classmethod
    def compile(
        cls,
        user_agent_parsers: Iterable[UAParser],
        os_parsers: Iterable[OSParser],
        device_parsers: Iterable[DeviceParser],
    ) -> "RuleTable":
        return cls(
            UserAgentExtractor(user_agent_parsers),
            OSExtractor(os_parsers),
            DeviceExtractor(device_parsers),
        )
