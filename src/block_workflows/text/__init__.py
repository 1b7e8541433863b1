"""Pure text helpers: input validation and model-output sanitisation."""

from block_workflows.text.sanitizer import sanitize_output
from block_workflows.text.validation import ValidationResult, validate_input

__all__ = [
    "ValidationResult",
    "sanitize_output",
    "validate_input",
]
