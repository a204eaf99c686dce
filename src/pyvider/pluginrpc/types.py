"""Type definitions for the Pyvider Plugin RPC system.

This module provides the TypeVars, type aliases and Protocol classes that
describe the seams of the pyvider.pluginrpc package: serve functions
registered with a ServerRegistrar, the business callbacks a Handler invokes,
and the minimal stream interfaces an Env relies on.

For most users these types only appear in annotations. Code standing in for
generated stubs uses `ServeFunc` and `HandleFunc` directly.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeGuard, TypeVar, runtime_checkable

from google.protobuf.message import Message

from pyvider.telemetry import logger

if TYPE_CHECKING:
    from pyvider.pluginrpc.env import Env


# Core TypeVars for generic type parameters
RequestT = TypeVar("RequestT", bound=Message)
ResponseT = TypeVar("ResponseT", bound=Message)

# A serve function handles one invocation of one procedure against an Env.
ServeFunc = Callable[["Env"], Awaitable[None]]

# The business callback wrapped by a Handler.
HandleFunc = Callable[[Any], Awaitable[Message | None]]


@runtime_checkable
class ReadableStream(Protocol):
    """The part of a binary stream a Handler reads requests from."""

    def read(self, size: int = -1) -> bytes:
        ...


@runtime_checkable
class TerminalAware(Protocol):
    """Streams that can tell whether they are attached to a terminal."""

    def isatty(self) -> bool:
        ...


@runtime_checkable
class WritableStream(Protocol):
    """The part of a binary stream responses are written to."""

    def write(self, data: bytes) -> int:
        ...

    def flush(self) -> None:
        ...


def is_terminal(stream: Any) -> TypeGuard[TerminalAware]:
    """
    True if the stream is attached to an interactive terminal.

    Streams that cannot tell, or that fail while telling (for example because
    they are closed), are treated as non-terminals.
    """
    if not isinstance(stream, TerminalAware):
        return False
    try:
        result = bool(stream.isatty())
    except (OSError, ValueError):
        return False
    if result:
        logger.debug("🧰🖥️ Input stream is a terminal")
    return result

# 🐍🏗️🔌
