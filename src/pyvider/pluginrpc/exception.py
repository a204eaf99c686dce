"""
Custom Exceptions for Pyvider Plugin RPC.

This module defines the hierarchy of exceptions raised by the framework
itself: configuration problems, invalid specs and procedures, misused server
registrars, server construction failures, unrecognized invocations, protocol
violations and transport failures.

Application errors travelling over the wire are not part of this hierarchy;
they are represented by `pyvider.pluginrpc.error.Error`.
"""

from collections.abc import Sequence


class PluginRPCError(Exception):
    """Base class for all plugin RPC framework errors."""
    def __init__(self, message: str, code: int | None = None, hint: str | None = None) -> None:
        """
        Initialize PluginRPCError.

        Args:
            message: The error message.
            code: An optional error code.
            hint: An optional hint for resolving the error.
        """
        super().__init__(message)
        self.code = code
        self.hint = hint

    def __str__(self) -> str:
        """Return a string representation of the error, including the hint if available."""
        base_message = super().__str__()
        if self.hint:
            return f"{base_message} (Hint: {self.hint})"
        return base_message


class ConfigError(PluginRPCError):
    """Configuration-related errors."""


class SpecError(PluginRPCError):
    """Errors raised while building or validating a Spec."""


class InvalidProcedureError(SpecError):
    """A Procedure has an invalid path or invalid args."""


class DuplicatePathError(SpecError):
    """Two Procedures in a Spec share a path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"duplicate procedure path: {path!r}")
        self.path = path


class DuplicateArgsError(SpecError):
    """Two Procedures in a Spec share the same argument signature."""

    def __init__(self, args: Sequence[str]) -> None:
        joined = " ".join(args)
        super().__init__(f"duplicate procedure args: {joined!r}")
        self.args_list = list(args)


class RegistrarError(PluginRPCError):
    """Errors accumulated by a ServerRegistrar, surfaced when it is read."""

    def __init__(self, errors: Sequence[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class ServerError(PluginRPCError):
    """The Spec and the registered serve functions do not match."""


class UnrecognizedArgsError(PluginRPCError):
    """An invocation did not match any flag or Procedure."""

    def __init__(self, args: Sequence[str]) -> None:
        super().__init__(f"args not recognized: {list(args)}")
        self.args_list = list(args)


class ProtocolError(PluginRPCError):
    """Malformed envelopes or an incompatible plugin protocol version."""


class TransportError(PluginRPCError):
    """A Runner failed to execute a call."""

# 🐍🏗️🔌
