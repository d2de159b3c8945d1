"""Envelope model — the wire format for all toolkit websocket messages."""

from typing import Any

from pydantic import BaseModel, Field

from unifai.models.messages import MessageType


class Envelope(BaseModel):
    """A tagged toolkit message: `{"type": ..., "data": {...}}`.

    Always serialize with `model_dump_json(by_alias=True)` for wire format.
    """

    type: MessageType
    data: dict[str, Any] = Field(default_factory=dict)
