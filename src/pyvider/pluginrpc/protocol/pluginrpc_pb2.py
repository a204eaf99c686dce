"""
Envelope messages of the plugin RPC protocol (`buf.pluginrpc.v1beta1`).

Equivalent proto source:

    syntax = "proto3";
    package buf.pluginrpc.v1beta1;
    import "google/protobuf/any.proto";

    message Spec { repeated Procedure procedures = 1; }
    message Procedure { string path = 1; repeated string args = 2; }
    message Request { google.protobuf.Any body = 1; }
    message Response { google.protobuf.Any body = 1; Error error = 2; }
    message Error { Code code = 1; string message = 2; }
    enum Code { CODE_UNSPECIFIED = 0; CODE_CANCELED = 1; ... CODE_UNAUTHENTICATED = 16; }
"""

from google.protobuf import any_pb2  # noqa: F401  registers google/protobuf/any.proto
from google.protobuf import descriptor_pb2

from pyvider.pluginrpc.protocol.descriptors import (
    FieldProto,
    enum_field,
    enum_wrapper,
    message_class,
    message_field,
    register_file,
    scalar_field,
)

PACKAGE = "buf.pluginrpc.v1beta1"

CODE_NAMES = (
    "CODE_UNSPECIFIED",
    "CODE_CANCELED",
    "CODE_UNKNOWN",
    "CODE_INVALID_ARGUMENT",
    "CODE_DEADLINE_EXCEEDED",
    "CODE_NOT_FOUND",
    "CODE_ALREADY_EXISTS",
    "CODE_PERMISSION_DENIED",
    "CODE_RESOURCE_EXHAUSTED",
    "CODE_FAILED_PRECONDITION",
    "CODE_ABORTED",
    "CODE_OUT_OF_RANGE",
    "CODE_UNIMPLEMENTED",
    "CODE_INTERNAL",
    "CODE_UNAVAILABLE",
    "CODE_DATA_LOSS",
    "CODE_UNAUTHENTICATED",
)

_FILE = descriptor_pb2.FileDescriptorProto(
    name="buf/pluginrpc/v1beta1/pluginrpc.proto",
    package=PACKAGE,
    syntax="proto3",
    dependency=["google/protobuf/any.proto"],
    enum_type=[
        descriptor_pb2.EnumDescriptorProto(
            name="Code",
            value=[
                descriptor_pb2.EnumValueDescriptorProto(name=name, number=number)
                for number, name in enumerate(CODE_NAMES)
            ],
        ),
    ],
    message_type=[
        descriptor_pb2.DescriptorProto(
            name="Spec",
            field=[message_field("procedures", 1, f".{PACKAGE}.Procedure", repeated=True)],
        ),
        descriptor_pb2.DescriptorProto(
            name="Procedure",
            field=[
                scalar_field("path", 1, FieldProto.TYPE_STRING),
                scalar_field("args", 2, FieldProto.TYPE_STRING, repeated=True),
            ],
        ),
        descriptor_pb2.DescriptorProto(
            name="Request",
            field=[message_field("body", 1, ".google.protobuf.Any")],
        ),
        descriptor_pb2.DescriptorProto(
            name="Response",
            field=[
                message_field("body", 1, ".google.protobuf.Any"),
                message_field("error", 2, f".{PACKAGE}.Error"),
            ],
        ),
        descriptor_pb2.DescriptorProto(
            name="Error",
            field=[
                enum_field("code", 1, f".{PACKAGE}.Code"),
                scalar_field("message", 2, FieldProto.TYPE_STRING),
            ],
        ),
    ],
)

DESCRIPTOR = register_file(_FILE)

Code = enum_wrapper(f"{PACKAGE}.Code")
Spec = message_class(f"{PACKAGE}.Spec")
Procedure = message_class(f"{PACKAGE}.Procedure")
Request = message_class(f"{PACKAGE}.Request")
Response = message_class(f"{PACKAGE}.Response")
Error = message_class(f"{PACKAGE}.Error")

# 🐍🏗️🔌
