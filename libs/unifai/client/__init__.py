from unifai.client.api import build_api_client, request_json, send_request
from unifai.client.connection import ToolkitConnection

__all__ = [
    "ToolkitConnection",
    "build_api_client",
    "request_json",
    "send_request",
]
