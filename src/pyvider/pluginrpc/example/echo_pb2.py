"""
Messages of the example Echo service (`buf.pluginrpc.example.v1`).

Equivalent proto source:

    syntax = "proto3";
    package buf.pluginrpc.example.v1;
    import "buf/pluginrpc/v1beta1/pluginrpc.proto";

    message EchoRequestRequest { string message = 1; }
    message EchoRequestResponse { string message = 1; }
    message EchoListRequest {}
    message EchoListResponse { repeated string list = 1; }
    message EchoErrorRequest { buf.pluginrpc.v1beta1.Code code = 1; string message = 2; }
    message EchoErrorResponse {}
"""

from google.protobuf import descriptor_pb2

from pyvider.pluginrpc.protocol import pluginrpc_pb2
from pyvider.pluginrpc.protocol.descriptors import (
    FieldProto,
    enum_field,
    message_class,
    register_file,
    scalar_field,
)

PACKAGE = "buf.pluginrpc.example.v1"

_FILE = descriptor_pb2.FileDescriptorProto(
    name="buf/pluginrpc/example/v1/echo.proto",
    package=PACKAGE,
    syntax="proto3",
    dependency=[pluginrpc_pb2.DESCRIPTOR.name],
    message_type=[
        descriptor_pb2.DescriptorProto(
            name="EchoRequestRequest",
            field=[scalar_field("message", 1, FieldProto.TYPE_STRING)],
        ),
        descriptor_pb2.DescriptorProto(
            name="EchoRequestResponse",
            field=[scalar_field("message", 1, FieldProto.TYPE_STRING)],
        ),
        descriptor_pb2.DescriptorProto(name="EchoListRequest"),
        descriptor_pb2.DescriptorProto(
            name="EchoListResponse",
            field=[scalar_field("list", 1, FieldProto.TYPE_STRING, repeated=True)],
        ),
        descriptor_pb2.DescriptorProto(
            name="EchoErrorRequest",
            field=[
                enum_field("code", 1, f".{pluginrpc_pb2.PACKAGE}.Code"),
                scalar_field("message", 2, FieldProto.TYPE_STRING),
            ],
        ),
        descriptor_pb2.DescriptorProto(name="EchoErrorResponse"),
    ],
)

DESCRIPTOR = register_file(_FILE)

EchoRequestRequest = message_class(f"{PACKAGE}.EchoRequestRequest")
EchoRequestResponse = message_class(f"{PACKAGE}.EchoRequestResponse")
EchoListRequest = message_class(f"{PACKAGE}.EchoListRequest")
EchoListResponse = message_class(f"{PACKAGE}.EchoListResponse")
EchoErrorRequest = message_class(f"{PACKAGE}.EchoErrorRequest")
EchoErrorResponse = message_class(f"{PACKAGE}.EchoErrorResponse")

# 🐍🏗️🔌
