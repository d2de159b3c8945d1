"""Factory functions for creating and parsing toolkit messages."""

import json
from typing import Any

from pydantic import BaseModel

from unifai.models.envelope import Envelope
from unifai.models.messages import PAYLOAD_REGISTRY, MessageType


def create_message(
    *,
    msg_type: MessageType,
    data: BaseModel | dict[str, Any],
) -> Envelope:
    """Create an Envelope with a typed or dict data section.

    Args:
        msg_type: The message type.
        data: A Pydantic model instance or a plain dict.

    Returns:
        A fully constructed Envelope.
    """
    if isinstance(data, BaseModel):
        data_dict = data.model_dump(mode="json", by_alias=True)
    else:
        data_dict = data

    return Envelope(type=msg_type, data=data_dict)


def parse_message(data: str | bytes | dict[str, Any]) -> Envelope:
    """Parse raw data into an Envelope.

    Args:
        data: JSON string, bytes, or dict.

    Returns:
        A validated Envelope instance.

    Raises:
        ValueError: If the data cannot be parsed.
        ValidationError: If the data doesn't match the Envelope schema.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    if isinstance(data, str):
        data = json.loads(data)
    return Envelope.model_validate(data)


def parse_payload(envelope: Envelope) -> BaseModel:
    """Parse an envelope's data dict into its typed Pydantic model.

    Raises:
        ValueError: If the message type is unknown.
    """
    msg_type = MessageType(envelope.type)
    model_class = PAYLOAD_REGISTRY.get(msg_type)
    if model_class is None:
        raise ValueError(f"Unknown message type: {msg_type}")
    return model_class.model_validate(envelope.data)
