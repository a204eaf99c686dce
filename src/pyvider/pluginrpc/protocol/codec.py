"""
JSON encoding of protocol messages.

All protocol output is single-line JSON with enums written as integers, so
that a plugin's stdout stays one message per line.
"""

from google.protobuf import json_format
from google.protobuf.message import Message


def marshal_json(message: Message) -> bytes:
    """Encodes a message as compact JSON with integer enums."""
    return json_format.MessageToJson(
        message,
        use_integers_for_enums=True,
        indent=None,
    ).encode("utf-8")

# 🐍🏗️🔌
