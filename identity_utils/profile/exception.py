from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class ProfileParseError(ValueError):
    """Base exception for user profile parsing failures."""


class MalformedProfileError(ProfileParseError):
    """Raised when the profile document is not a usable JSON object."""

    def __init__(self, reason: str, validation_error: ValidationError | None = None) -> None:
        self.reason = reason
        self.validation_error = validation_error

        if validation_error is None:
            super().__init__(f"Malformed user profile: {reason}")
            return

        error_messages: list[str] = []
        for error in validation_error.errors():
            location = ".".join(map(str, error["loc"])) or "<document>"
            message = error["msg"]
            input_value = error.get("input")
            if isinstance(input_value, (str, bytes, bytearray)) and len(input_value) > 80:
                input_value = input_value[:80]
            error_messages.append(f"  - At `{location}`: {message}. Received: {repr(input_value)}")

        super().__init__(f"Malformed user profile: {reason}:\n" + "\n".join(error_messages))


class InvalidDateError(ProfileParseError):
    """Raised when `created_at` does not match the profile timestamp pattern."""

    def __init__(self, value: Any, pattern: str) -> None:
        self.value = value
        self.pattern = pattern
        super().__init__(f"Invalid profile date {repr(value)}: expected format `{pattern}`")
