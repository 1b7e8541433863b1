"""Input text contract shared by single-block and workflow execution."""

from __future__ import annotations

from dataclasses import dataclass

from block_workflows.config import MAX_INPUT_LENGTH
from block_workflows.errors import ValidationError

EMPTY_INPUT_MESSAGE = "Please enter some text to transform."


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    text: str | None = None
    error: str | None = None

    def unwrap(self) -> str:
        """Return the trimmed text or raise ``ValidationError`` with the message."""

        if not self.valid or self.text is None:
            raise ValidationError(self.error)
        return self.text


def too_long_message(max_length: int) -> str:
    return f"Input text exceeds maximum length ({max_length:,} characters)."


def validate_input(text: object, max_length: int = MAX_INPUT_LENGTH) -> ValidationResult:
    if not isinstance(text, str):
        return ValidationResult(valid=False, error=EMPTY_INPUT_MESSAGE)

    trimmed = text.strip()
    if not trimmed:
        return ValidationResult(valid=False, error=EMPTY_INPUT_MESSAGE)

    if len(trimmed) > max_length:
        return ValidationResult(valid=False, error=too_long_message(max_length))

    return ValidationResult(valid=True, text=trimmed)
