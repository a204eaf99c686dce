"""
Status codes shared by plugin servers and clients.

The values mirror the `buf.pluginrpc.v1beta1.Code` wire enum, which in turn
follows the usual RPC status semantics. `UNSPECIFIED` is never a valid code
for an actual error.
"""

from enum import IntEnum

from pyvider.pluginrpc.protocol import pluginrpc_pb2


class Code(IntEnum):
    """A status code carried by an `Error`."""

    UNSPECIFIED = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    def __str__(self) -> str:
        return self.name.lower()

    def to_proto(self) -> int:
        return int(self)

    @classmethod
    def from_proto(cls, value: int) -> "Code":
        """
        Returns the Code for a wire value.

        Values outside the enumeration are treated as UNKNOWN, so a newer peer
        cannot make an older one fail while decoding an error.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_name(cls, name: str) -> "Code":
        """Accepts `deadline_exceeded`, `DEADLINE_EXCEEDED` or the wire name `CODE_DEADLINE_EXCEEDED`."""
        normalized = name.strip().upper()
        if normalized.startswith("CODE_"):
            normalized = normalized[len("CODE_"):]
        return cls[normalized]


# Keep the Python enum and the wire enum in lockstep.
assert [f"CODE_{code.name}" for code in Code] == list(pluginrpc_pb2.CODE_NAMES)

# 🐍🏗️🔌
