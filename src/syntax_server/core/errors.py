from __future__ import annotations

from typing import Any

PANIC_MESSAGE = "panic while highlighting code"
PANIC_CODE = "panic"


class HighlightError(Exception):
    """A terminal, expected failure of one highlight request."""

    message = "highlight failed"
    code: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.code is not None:
            payload["code"] = self.code
        return payload


class InvalidExtensionError(HighlightError):
    # Older clients depend on this error carrying no code.
    message = "invalid extension"


class InvalidThemeError(HighlightError):
    message = "invalid theme"
    code = "invalid_theme"


def panic_payload() -> dict[str, Any]:
    return {"error": PANIC_MESSAGE, "code": PANIC_CODE}
