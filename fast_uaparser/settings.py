import os
from dataclasses import dataclass

DEFAULT_MAX_LENGTH = 4096


@dataclass(frozen=True)
class Settings:
    # path to a uap-core regexes.yaml, None for the bundled definitions
    regexes_path: str | None = None
    # inputs are cut to this many characters before matching, 0 disables
    max_length: int = DEFAULT_MAX_LENGTH

    @classmethod
    def from_env(cls) -> "Settings":
        max_length = int(os.getenv("FAST_UAPARSER_MAX_LENGTH", str(DEFAULT_MAX_LENGTH)))
        if max_length < 0:
            raise ValueError(f"FAST_UAPARSER_MAX_LENGTH must be >= 0, got {max_length}")
        return cls(
            regexes_path=os.getenv("FAST_UAPARSER_REGEXES") or None,
            max_length=max_length,
        )
