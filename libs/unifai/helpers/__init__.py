from unifai.helpers.factory import create_message, parse_message, parse_payload
from unifai.helpers.validation import format_validation_error, validate_message

__all__ = [
    "create_message",
    "format_validation_error",
    "parse_message",
    "parse_payload",
    "validate_message",
]
