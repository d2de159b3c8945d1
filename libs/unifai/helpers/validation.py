"""Message validation utilities."""

from pydantic import ValidationError

from unifai.models.envelope import Envelope
from unifai.models.messages import PAYLOAD_REGISTRY, MessageType


def format_validation_error(error: ValidationError, prefix: str = "") -> list[str]:
    """Flatten a pydantic ValidationError into `field: message` strings."""
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in (prefix, *err["loc"]) if x != "")
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


def validate_message(envelope: Envelope) -> list[str]:
    """Validate an envelope for correctness.

    Returns a list of error strings. Empty list means valid.
    """
    errors: list[str] = []

    try:
        msg_type = MessageType(envelope.type)
    except ValueError:
        errors.append(f"Unknown message type: {envelope.type}")
        return errors

    model_class = PAYLOAD_REGISTRY.get(msg_type)
    if model_class is None:
        errors.append(f"No data schema registered for type: {msg_type}")
        return errors

    try:
        model_class.model_validate(envelope.data)
    except ValidationError as e:
        errors.extend(format_validation_error(e, prefix="data"))

    return errors
