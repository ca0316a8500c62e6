import pathlib
import operator

import pytest

import fast_uaparser
from conftest import CORE_DIR, load_test_cases, requires_core


MISSING_UA = {
    "family": "Other",
    "major": None,
    "minor": None,
    "patch": None,
    "patch_minor": None,
}
get_reference = operator.itemgetter(*MISSING_UA)
get_result = operator.attrgetter(
    "family",
    "version.major",
    "version.minor",
    "version.patch",
    "version.patch_minor",
)


@requires_core
@pytest.mark.parametrize(
    "test_file",
    [
        CORE_DIR / "tests" / "test_os.yaml",
        CORE_DIR / "test_resources" / "additional_os_tests.yaml",
    ],
    ids=operator.attrgetter("name"),
)
def test_os(core_parser: fast_uaparser.Parser, test_file: pathlib.Path) -> None:
    for test_case in load_test_cases(test_file):
        result = get_result(core_parser.parse_os(test_case["user_agent_string"]))

        assert result == get_reference(test_case), test_case["user_agent_string"]


@pytest.mark.parametrize(
    "ua,expected",
    [
        (
            "Mozilla/5.0 (iPad; CPU OS 12_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/12.1 Mobile/15E148 Safari/604.1",
            ("iOS", "12", "2", None, None),
        ),
        (
            "Mozilla/5.0 (iPhone; CPU iPhone OS 12_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/12.1 Mobile/15E148 Safari/604.1",
            ("iOS", "12", "2", None, None),
        ),
        (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.14.0; rv:70.0) Gecko/20100101 Firefox/70.0",
            ("Mac OS X", "10", "14", "0", None),
        ),
        (
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/76.0.3809.100 Safari/537.36",
            ("Linux", None, None, None, None),
        ),
        (
            "Mozilla/5.0 (Windows Mobile 10; Android 8.0.0; Microsoft; Lumia 950XL) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/76.0.3809.89 Mobile Safari/537.36 Edge/40.15254.369",
            ("Android", "8", "0", "0", None),
        ),
        (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/76.0.3809.100 Safari/537.36",
            ("Windows", "10", None, None, None),
        ),
        (
            "Mozilla/5.0 (Windows NT 6.3; Win64; x64; rv:70.0) Gecko/20100101 Firefox/70.0",
            ("Windows", "8", "1", None, None),
        ),
        ("Roku/DVP-42.42", ("Roku", "42", "42", None, None)),
        ("Googlebot/2.1 (+http://www.google.com/bot.html)", ("Other", None, None, None, None)),
    ],
)
def test_bundled(parser: fast_uaparser.Parser, ua: str, expected: tuple) -> None:
    assert get_result(parser.parse_os(ua)) == expected
