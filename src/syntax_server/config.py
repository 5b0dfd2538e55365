import os
from dataclasses import dataclass


def _flag(name: str) -> bool:
    return os.getenv(name, "") == "true"


@dataclass(frozen=True)
class Settings:
    quiet: bool = False
    allow_origin_star: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment.

        ``QUIET=true`` suppresses the feature listing printed at startup and
        ``SYNTAX_SERVER_ALLOW_ORIGIN_STAR=true`` allows requests from any origin.
        """
        return cls(
            quiet=_flag("QUIET"),
            allow_origin_star=_flag("SYNTAX_SERVER_ALLOW_ORIGIN_STAR"),
            host=os.getenv("SYNTAX_SERVER_HOST", "0.0.0.0"),
            port=int(os.getenv("SYNTAX_SERVER_PORT", "8000")),
        )
