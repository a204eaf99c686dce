"""
The error taxonomy of the plugin RPC protocol.

An `Error` pairs a `Code` with the underlying cause. Errors raised by a
procedure implementation travel to the client inside the response envelope
as `{code, message}` and are rebuilt there with a synthetic cause holding the
original message.

`new_error` and `wrap_error` return None for a None cause, so call sites can
wrap whatever they have without checking it first.
"""

from typing import final

from pyvider.telemetry import logger

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.protocol import pluginrpc_pb2


class RemoteError(Exception):
    """The cause of an `Error` decoded from a response envelope."""


@final
class Error(Exception):
    """
    A plugin RPC error with a status code.

    Attributes:
        code: The status code, never `Code.UNSPECIFIED`.
        cause: The wrapped exception, also available as `__cause__`.
    """

    def __init__(self, code: Code, cause: BaseException) -> None:
        if code == Code.UNSPECIFIED:
            code = Code.UNKNOWN
        super().__init__(str(cause))
        self.code = Code(code)
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        message = str(self.cause)
        if not message:
            return str(self.code)
        return f"{self.code}: {message}"

    def __repr__(self) -> str:
        return f"Error(code={self.code.name}, cause={self.cause!r})"

    def unwrap(self) -> BaseException:
        return self.cause

    @property
    def message(self) -> str:
        return str(self.cause)

    def to_proto(self) -> pluginrpc_pb2.Error:
        """Converts to the wire form, carrying the code and the cause's message."""
        return pluginrpc_pb2.Error(code=self.code.to_proto(), message=self.message)

    @classmethod
    def from_proto(cls, proto_error: pluginrpc_pb2.Error | None) -> "Error | None":
        """Rebuilds an Error from its wire form. Returns None for a missing error."""
        if proto_error is None:
            return None
        code = Code.from_proto(proto_error.code)
        return cls(code, RemoteError(proto_error.message))


def new_error(code: Code, cause: BaseException | None) -> Error | None:
    """Returns a new Error, or None when there is no cause."""
    if cause is None:
        return None
    return Error(code, cause)


def new_errorf(code: Code, message: str) -> Error:
    """Returns a new Error whose cause is a plain exception with the given message."""
    return Error(code, RemoteError(message))


def wrap_error(exc: BaseException | None) -> Error | None:
    """
    Wraps any exception as an Error.

    Errors are returned as-is. Anything else becomes an UNKNOWN Error whose
    cause is the original exception.
    """
    if exc is None:
        return None
    if isinstance(exc, Error):
        return exc
    logger.debug(f"🚨🔄 Wrapping {type(exc).__name__} as an unknown error")
    return Error(Code.UNKNOWN, exc)

# 🐍🏗️🔌
