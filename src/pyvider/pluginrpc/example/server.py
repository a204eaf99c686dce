#!/usr/bin/env python3
"""
The example Echo plugin, installed as `pluginrpc-example-server`.

EchoRequest and EchoError are invoked with `echo request` and `echo error`.
EchoList declares no args, so it is invoked with its path.

    $ echo '{}' | pluginrpc-example-server /buf.pluginrpc.example.v1.EchoService/EchoList
"""

from typing import NoReturn

from pyvider.telemetry import logger

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.error import Error
from pyvider.pluginrpc.example.echo_pb2 import (
    EchoErrorRequest,
    EchoErrorResponse,
    EchoListRequest,
    EchoListResponse,
    EchoRequestRequest,
    EchoRequestResponse,
)
from pyvider.pluginrpc.example.echo_pluginrpc import (
    EchoServiceServer,
    EchoServiceSpecBuilder,
    register_echo_service_server,
)
from pyvider.pluginrpc.handler import Handler
from pyvider.pluginrpc.main import serve_main
from pyvider.pluginrpc.registrar import ServerRegistrar
from pyvider.pluginrpc.server import Server, ServerOptions


class EchoHandler:
    async def echo_request(self, request: EchoRequestRequest) -> EchoRequestResponse:
        logger.debug(f"🔊 Echoing '{request.message}'")
        return EchoRequestResponse(message=request.message)

    async def echo_list(self, request: EchoListRequest) -> EchoListResponse:
        return EchoListResponse(list=["foo", "bar"])

    async def echo_error(self, request: EchoErrorRequest) -> EchoErrorResponse:
        raise Error(Code.from_proto(request.code), Exception(request.message))


def new_echo_server(flag_prefix: str | None = None) -> Server:
    spec = EchoServiceSpecBuilder(
        echo_request=["echo", "request"],
        echo_error=["echo", "error"],
    ).build()
    server_registrar = ServerRegistrar()
    register_echo_service_server(server_registrar, EchoServiceServer(Handler(), EchoHandler()))
    return Server(spec, server_registrar, ServerOptions(flag_prefix=flag_prefix))


def main() -> NoReturn:
    serve_main(new_echo_server)


if __name__ == "__main__":
    main()

# 🐍🏗️🔌
