"""
Plugin RPC bindings for the example Echo service.

This module has the shape of generated stub code: procedure paths, a Spec
builder that lets a plugin choose the argument signature of each procedure, a
service server that adapts business handlers through a `Handler`, its
registration function, and a typed service client.
"""

from collections.abc import Sequence
from typing import Protocol, final

from attrs import define, field

from pyvider.pluginrpc.client.types import CallerT
from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.example.echo_pb2 import (
    EchoErrorRequest,
    EchoErrorResponse,
    EchoListRequest,
    EchoListResponse,
    EchoRequestRequest,
    EchoRequestResponse,
)
from pyvider.pluginrpc.handler import Handler
from pyvider.pluginrpc.procedure import new_procedure
from pyvider.pluginrpc.registrar import ServerRegistrar
from pyvider.pluginrpc.spec import Spec, new_spec

ECHO_SERVICE_ECHO_REQUEST_PATH = "/buf.pluginrpc.example.v1.EchoService/EchoRequest"
ECHO_SERVICE_ECHO_LIST_PATH = "/buf.pluginrpc.example.v1.EchoService/EchoList"
ECHO_SERVICE_ECHO_ERROR_PATH = "/buf.pluginrpc.example.v1.EchoService/EchoError"


@define
class EchoServiceSpecBuilder:
    """
    Builds the Spec of the Echo service.

    Each attribute is the argument signature of one procedure. An empty
    signature leaves the path as the only way to invoke the procedure.
    """

    echo_request: Sequence[str] = field(default=(), converter=tuple)
    echo_list: Sequence[str] = field(default=(), converter=tuple)
    echo_error: Sequence[str] = field(default=(), converter=tuple)

    def build(self) -> Spec:
        return new_spec(
            [
                new_procedure(ECHO_SERVICE_ECHO_REQUEST_PATH, *self.echo_request),
                new_procedure(ECHO_SERVICE_ECHO_LIST_PATH, *self.echo_list),
                new_procedure(ECHO_SERVICE_ECHO_ERROR_PATH, *self.echo_error),
            ]
        )


class EchoServiceHandler(Protocol):
    """The business logic of the Echo service."""

    async def echo_request(self, request: EchoRequestRequest) -> EchoRequestResponse: ...

    async def echo_list(self, request: EchoListRequest) -> EchoListResponse: ...

    async def echo_error(self, request: EchoErrorRequest) -> EchoErrorResponse: ...


@final
class EchoServiceServer:
    """Serves Echo service procedures against an Env."""

    def __init__(self, handler: Handler, echo_service_handler: EchoServiceHandler) -> None:
        self._handler = handler
        self._echo_service_handler = echo_service_handler

    async def echo_request(self, env: Env) -> None:
        await self._handler.handle(env, EchoRequestRequest, self._echo_service_handler.echo_request)

    async def echo_list(self, env: Env) -> None:
        await self._handler.handle(env, EchoListRequest, self._echo_service_handler.echo_list)

    async def echo_error(self, env: Env) -> None:
        await self._handler.handle(env, EchoErrorRequest, self._echo_service_handler.echo_error)


def register_echo_service_server(server_registrar: ServerRegistrar, echo_service_server: EchoServiceServer) -> None:
    server_registrar.register(ECHO_SERVICE_ECHO_REQUEST_PATH, echo_service_server.echo_request)
    server_registrar.register(ECHO_SERVICE_ECHO_LIST_PATH, echo_service_server.echo_list)
    server_registrar.register(ECHO_SERVICE_ECHO_ERROR_PATH, echo_service_server.echo_error)


@final
class EchoServiceClient:
    """Calls Echo service procedures of a plugin."""

    def __init__(self, client: CallerT) -> None:
        self._client = client

    async def echo_request(self, request: EchoRequestRequest | None) -> EchoRequestResponse:
        return await self._client.call(ECHO_SERVICE_ECHO_REQUEST_PATH, request, EchoRequestResponse)

    async def echo_list(self, request: EchoListRequest | None) -> EchoListResponse:
        return await self._client.call(ECHO_SERVICE_ECHO_LIST_PATH, request, EchoListResponse)

    async def echo_error(self, request: EchoErrorRequest | None) -> EchoErrorResponse:
        return await self._client.call(ECHO_SERVICE_ECHO_ERROR_PATH, request, EchoErrorResponse)

# 🐍🏗️🔌
