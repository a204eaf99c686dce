"""
Specs: the validated catalogue of a plugin's Procedures.

A Spec describes the shape of a plugin to its clients. Servers print it as
JSON when invoked with `--plugin-spec` (or `--<prefix>-plugin-spec`), and
clients read it to find out which arguments select which procedure.

A valid Spec never contains two Procedures with the same path, nor two
Procedures with the same non-empty argument signature.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import final

from attrs import field, frozen
from google.protobuf import json_format

from pyvider.telemetry import logger

from pyvider.pluginrpc.exception import DuplicateArgsError, DuplicatePathError, ProtocolError
from pyvider.pluginrpc.procedure import Procedure
from pyvider.pluginrpc.protocol import pluginrpc_pb2
from pyvider.pluginrpc.protocol.codec import marshal_json


def validate_procedures(procedures: Sequence[Procedure]) -> None:
    """
    Checks that paths and non-empty argument signatures are unique.

    The first conflict in input order is reported.

    Raises:
        DuplicatePathError: If two procedures share a path.
        DuplicateArgsError: If two procedures share a non-empty argument signature.
    """
    used_paths: set[str] = set()
    used_args: set[str] = set()
    for procedure in procedures:
        if procedure.path in used_paths:
            logger.error(f"📜🔍❌ Duplicate procedure path: {procedure.path}")
            raise DuplicatePathError(procedure.path)
        used_paths.add(procedure.path)
        if procedure.args:
            joined_args = " ".join(procedure.args)
            if joined_args in used_args:
                logger.error(f"📜🔍❌ Duplicate procedure args: {joined_args}")
                raise DuplicateArgsError(procedure.args)
            used_args.add(joined_args)


@final
@frozen
class Spec:
    """
    An immutable, validated set of Procedures.

    Build instances with `new_spec`, `combine_specs` or `Spec.from_proto`.
    """

    procedures: tuple[Procedure, ...] = field(converter=tuple)
    _path_to_procedure: Mapping[str, Procedure] = field(init=False, eq=False, repr=False)

    def __attrs_post_init__(self) -> None:
        validate_procedures(self.procedures)
        object.__setattr__(
            self,
            "_path_to_procedure",
            MappingProxyType({procedure.path: procedure for procedure in self.procedures}),
        )

    def procedure_for_path(self, path: str) -> Procedure | None:
        """Returns the Procedure for the given path, or None if there is no such Procedure."""
        return self._path_to_procedure.get(path)

    def __len__(self) -> int:
        return len(self.procedures)

    def __iter__(self):
        return iter(self.procedures)

    def to_proto(self) -> pluginrpc_pb2.Spec:
        return pluginrpc_pb2.Spec(procedures=[procedure.to_proto() for procedure in self.procedures])

    @classmethod
    def from_proto(cls, proto_spec: pluginrpc_pb2.Spec) -> "Spec":
        return new_spec(Procedure.from_proto(proto_procedure) for proto_procedure in proto_spec.procedures)

    def to_json(self) -> bytes:
        """Encodes the Spec as single-line JSON, the form printed by `--plugin-spec`."""
        return marshal_json(self.to_proto())


def new_spec(procedures: Iterable[Procedure]) -> Spec:
    """
    Returns a new validated Spec for the given Procedures.

    Raises:
        DuplicatePathError: If two procedures share a path.
        DuplicateArgsError: If two procedures share a non-empty argument signature.
    """
    spec = Spec(procedures=tuple(procedures))
    logger.debug(f"📜✅ Built spec with {len(spec)} procedures")
    return spec


def combine_specs(*specs: Spec) -> Spec:
    """
    Returns a new validated Spec containing the Procedures of all given Specs.

    The combined Procedures must still be unique by path and by args.
    """
    procedures: list[Procedure] = []
    for spec in specs:
        procedures.extend(spec.procedures)
    logger.debug(f"📜🔗 Combining {len(specs)} specs")
    return new_spec(procedures)


def spec_from_json(data: bytes | str) -> Spec:
    """
    Decodes and validates a JSON-encoded Spec, as printed by `--plugin-spec`.

    Raises:
        ProtocolError: If the data is not a valid Spec message.
    """
    proto_spec = pluginrpc_pb2.Spec()
    try:
        json_format.Parse(data, proto_spec)
    except (json_format.ParseError, ValueError) as e:
        logger.error("📜❌ Failed to parse spec JSON", extra={"error": str(e)})
        raise ProtocolError(f"invalid spec: {e}") from e
    return Spec.from_proto(proto_spec)

# 🐍🏗️🔌
