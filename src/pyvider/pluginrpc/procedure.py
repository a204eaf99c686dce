"""
Procedures: the addressable units of a plugin.

A Procedure is identified by its path, usually `/<package>.<Service>/<Method>`.
It may also declare an argument signature, the exact argument vector that
selects it on the command line, e.g. `["echo", "request"]`. A Procedure
without args can only be invoked with its path as the single argument.
"""

import re
from collections.abc import Iterable
from typing import final

from attrs import field, frozen

from pyvider.telemetry import logger

from pyvider.pluginrpc.exception import InvalidProcedureError
from pyvider.pluginrpc.protocol import pluginrpc_pb2

# Args cannot contain whitespace, so a space-joined signature identifies them uniquely.
_ARG_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$")
_WHITESPACE_PATTERN = re.compile(r"\s")


def _validate_path(instance: "Procedure", attribute: object, path: str) -> None:
    if not path:
        raise InvalidProcedureError("procedure path is empty")
    if _WHITESPACE_PATTERN.search(path):
        raise InvalidProcedureError(f"procedure path contains whitespace: {path!r}")
    if path.startswith("-"):
        raise InvalidProcedureError(
            f"procedure path must not begin with '-': {path!r}",
            hint="paths beginning with '-' would be read as flags",
        )


def _validate_args(instance: "Procedure", attribute: object, args: tuple[str, ...]) -> None:
    for arg in args:
        if not _ARG_PATTERN.match(arg):
            raise InvalidProcedureError(
                f"invalid procedure arg {arg!r} for path {instance.path!r}",
                hint="args must start with a letter or digit and contain only letters, digits, '_' and '-'",
            )


@final
@frozen
class Procedure:
    """
    An immutable, validated procedure.

    Attributes:
        path: The unique path of the procedure.
        args: The argument signature selecting the procedure, possibly empty.
    """

    path: str = field(validator=_validate_path)
    args: tuple[str, ...] = field(default=(), converter=tuple, validator=_validate_args)

    @property
    def invocation(self) -> list[str]:
        """The argument vector a client uses to call this procedure."""
        if self.args:
            return list(self.args)
        return [self.path]

    def matches(self, args: Iterable[str]) -> bool:
        """True if the argument vector is exactly `[path]` or exactly the argument signature."""
        args = list(args)
        if args == [self.path]:
            return True
        return bool(self.args) and args == list(self.args)

    def to_proto(self) -> pluginrpc_pb2.Procedure:
        return pluginrpc_pb2.Procedure(path=self.path, args=list(self.args))

    @classmethod
    def from_proto(cls, proto_procedure: pluginrpc_pb2.Procedure) -> "Procedure":
        return cls(path=proto_procedure.path, args=tuple(proto_procedure.args))


def new_procedure(path: str, *args: str) -> Procedure:
    """
    Returns a new validated Procedure.

    Raises:
        InvalidProcedureError: If the path or any arg is invalid.
    """
    try:
        return Procedure(path=path, args=args)
    except InvalidProcedureError as e:
        logger.error(f"📜❌ Invalid procedure {path!r}", extra={"error": str(e)})
        raise

# 🐍🏗️🔌
