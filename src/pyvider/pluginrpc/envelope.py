"""
Request and response envelopes.

Both envelopes are JSON-encoded protobuf messages exchanged over the standard
streams of a plugin process:

    Request:  {"body": <Any>}
    Response: {"body": <Any>, "error": {"code": <int>, "message": <str>}}

`body` is a `google.protobuf.Any`, so the payload carries its own type URL.
An empty input decodes to nothing at all, which leaves the target message at
its default value.
"""

from google.protobuf import any_pb2, json_format
from google.protobuf.message import Message

from pyvider.telemetry import logger

from pyvider.pluginrpc.error import Error, wrap_error
from pyvider.pluginrpc.exception import ProtocolError
from pyvider.pluginrpc.protocol import pluginrpc_pb2
from pyvider.pluginrpc.protocol.codec import marshal_json


def _pack(message: Message | None) -> any_pb2.Any | None:
    if message is None:
        return None
    body = any_pb2.Any()
    body.Pack(message)
    return body


def _unpack(body: any_pb2.Any, target: Message) -> None:
    if not body.Unpack(target):
        logger.error(
            f"✉️❌ Envelope body type mismatch: got {body.type_url}, "
            f"expected {target.DESCRIPTOR.full_name}"
        )
        raise ProtocolError(
            f"envelope body has type {body.type_url!r}, expected {target.DESCRIPTOR.full_name!r}"
        )


def _parse(data: bytes, envelope: Message) -> None:
    try:
        json_format.Parse(data, envelope)
    except (json_format.ParseError, TypeError, ValueError) as e:
        logger.error(f"✉️❌ Failed to parse {envelope.DESCRIPTOR.name} envelope", extra={"error": str(e)})
        raise ProtocolError(f"invalid {envelope.DESCRIPTOR.name.lower()} envelope: {e}") from e


def marshal_request(request: Message | None) -> bytes:
    """Encodes a request envelope. A None request produces an envelope without a body."""
    envelope = pluginrpc_pb2.Request()
    body = _pack(request)
    if body is not None:
        envelope.body.CopyFrom(body)
    return marshal_json(envelope)


def unmarshal_request(data: bytes, request: Message) -> None:
    """
    Decodes a request envelope into `request` in place.

    Empty data, or an envelope without a body, leaves `request` untouched.

    Raises:
        ProtocolError: If the envelope is malformed or the body has another type.
    """
    if not data.strip():
        return
    envelope = pluginrpc_pb2.Request()
    _parse(data, envelope)
    if envelope.HasField("body"):
        _unpack(envelope.body, request)


def marshal_response(response: Message | None, exc: BaseException | None = None) -> bytes:
    """
    Encodes a response envelope carrying a body, an error, or neither.

    Any exception is carried as an Error; exceptions that are not Errors are
    sent with the UNKNOWN code.
    """
    envelope = pluginrpc_pb2.Response()
    body = _pack(response)
    if body is not None:
        envelope.body.CopyFrom(body)
    error = wrap_error(exc)
    if error is not None:
        envelope.error.CopyFrom(error.to_proto())
    return marshal_json(envelope)


def unmarshal_response(data: bytes, response: Message) -> None:
    """
    Decodes a response envelope into `response` in place.

    Raises:
        Error: If the envelope carries an error. The body, if any, is still
            decoded into `response` first.
        ProtocolError: If the envelope is malformed or the body has another type.
    """
    if not data.strip():
        return
    envelope = pluginrpc_pb2.Response()
    _parse(data, envelope)
    if envelope.HasField("body"):
        _unpack(envelope.body, response)
    if envelope.HasField("error"):
        error = Error.from_proto(envelope.error)
        logger.debug(f"✉️🚨 Response envelope carries an error: {error!r}")
        raise error


def response_error(data: bytes) -> Error | None:
    """
    Returns the Error carried by a response envelope without decoding its body.

    Returns None for empty data, envelopes without an error, and data that is
    not a response envelope at all.
    """
    if not data.strip():
        return None
    envelope = pluginrpc_pb2.Response()
    try:
        json_format.Parse(data, envelope, ignore_unknown_fields=True)
    except (json_format.ParseError, TypeError, ValueError):
        return None
    if not envelope.HasField("error"):
        return None
    return Error.from_proto(envelope.error)

# 🐍🏗️🔌
