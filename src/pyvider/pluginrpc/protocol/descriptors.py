"""
Descriptor helpers for message modules.

Message modules describe their proto file as a `FileDescriptorProto`, register
it with the default descriptor pool (exactly as generated `_pb2` modules do
with their serialized descriptors) and then resolve concrete message and enum
classes from the pool. Registering with the default pool keeps the messages
resolvable by `google.protobuf.json_format` when they are packed into `Any`.
"""

from google.protobuf import descriptor_pb2, descriptor_pool
from google.protobuf.descriptor import FileDescriptor
from google.protobuf.internal import enum_type_wrapper
from google.protobuf.message import Message
from google.protobuf.message_factory import GetMessageClass

from pyvider.telemetry import logger

FieldProto = descriptor_pb2.FieldDescriptorProto


def scalar_field(name: str, number: int, field_type: int, repeated: bool = False) -> FieldProto:
    """Builds a scalar field such as a string or int32."""
    return FieldProto(
        name=name,
        number=number,
        type=field_type,
        label=FieldProto.LABEL_REPEATED if repeated else FieldProto.LABEL_OPTIONAL,
    )


def message_field(name: str, number: int, type_name: str, repeated: bool = False) -> FieldProto:
    """Builds a message-typed field. `type_name` must be fully qualified, e.g. `.google.protobuf.Any`."""
    return FieldProto(
        name=name,
        number=number,
        type=FieldProto.TYPE_MESSAGE,
        type_name=type_name,
        label=FieldProto.LABEL_REPEATED if repeated else FieldProto.LABEL_OPTIONAL,
    )


def enum_field(name: str, number: int, type_name: str) -> FieldProto:
    return FieldProto(
        name=name,
        number=number,
        type=FieldProto.TYPE_ENUM,
        type_name=type_name,
        label=FieldProto.LABEL_OPTIONAL,
    )


def register_file(file_proto: descriptor_pb2.FileDescriptorProto) -> FileDescriptor:
    """
    Adds a file to the default descriptor pool and returns its descriptor.

    Dependencies named in `file_proto.dependency` must already be present in
    the pool, which in practice means their `_pb2` modules must be imported first.
    """
    pool = descriptor_pool.Default()
    pool.AddSerializedFile(file_proto.SerializeToString())
    logger.debug(f"📦🧩✅ Registered proto file {file_proto.name}")
    return pool.FindFileByName(file_proto.name)


def message_class(full_name: str) -> type[Message]:
    """Resolves a registered message by its fully qualified name."""
    descriptor = descriptor_pool.Default().FindMessageTypeByName(full_name)
    return GetMessageClass(descriptor)


def enum_wrapper(full_name: str) -> enum_type_wrapper.EnumTypeWrapper:
    """Resolves a registered enum by its fully qualified name."""
    descriptor = descriptor_pool.Default().FindEnumTypeByName(full_name)
    return enum_type_wrapper.EnumTypeWrapper(descriptor)

# 🐍🏗️🔌
