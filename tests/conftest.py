import os
import pathlib

import pytest

try:
    from yaml import CSafeLoader as SafeLoader, load
except ImportError:
    from yaml import SafeLoader, load  # type: ignore

import fast_uaparser
from fast_uaparser.loader import load_builtin

# checkout of https://github.com/ua-parser/uap-core, for the conformance suites
CORE_DIR = pathlib.Path(os.getenv("UAP_CORE_DIR", "uap-core")).resolve()

requires_core = pytest.mark.skipif(
    not (CORE_DIR / "regexes.yaml").is_file(),
    reason="UAP_CORE_DIR does not point to a uap-core checkout",
)


def load_test_cases(path: pathlib.Path) -> list[dict]:
    with path.open("rb") as f:
        return load(f, Loader=SafeLoader)["test_cases"]


@pytest.fixture(scope="session")
def parser() -> fast_uaparser.Parser:
    """A parser over the bundled definitions."""
    p = fast_uaparser.Parser(load_builtin)
    p.init()
    return p


@pytest.fixture(scope="session")
def core_parser() -> fast_uaparser.Parser:
    p = fast_uaparser.Parser.from_yaml(CORE_DIR / "regexes.yaml")
    p.init()
    return p

