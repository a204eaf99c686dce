#!/usr/bin/env python3
"""
Calls EchoError on `pluginrpc-example-server`, installed as
`pluginrpc-example-client-error`.

    $ pluginrpc-example-client-error 4 hello
    deadline_exceeded: hello
    $ echo $?
    4

The first argument is the code, the rest is joined into the message. The
Error the plugin returns is printed and turned into the exit status.
"""

import asyncio
import sys
from collections.abc import Sequence
from typing import NoReturn

from pyvider.pluginrpc.client import Client
from pyvider.pluginrpc.example.echo_pb2 import EchoErrorRequest
from pyvider.pluginrpc.example.echo_pluginrpc import EchoServiceClient
from pyvider.pluginrpc.exit_error import wrap_exit_error
from pyvider.pluginrpc.runner import ExecRunner

SERVER_PROGRAM = "pluginrpc-example-server"


async def run(args: Sequence[str]) -> None:
    if not args:
        raise ValueError("usage: pluginrpc-example-client-error <code> [message...]")
    code = int(args[0])
    echo_service_client = EchoServiceClient(Client(ExecRunner(SERVER_PROGRAM)))
    await echo_service_client.echo_error(EchoErrorRequest(code=code, message=" ".join(args[1:])))


def main() -> NoReturn:
    try:
        asyncio.run(run(sys.argv[1:]))
    except Exception as e:
        if message := str(e):
            sys.stderr.write(message + "\n")
        sys.exit(wrap_exit_error(e).exit_code)
    sys.exit(0)


if __name__ == "__main__":
    main()

# 🐍🏗️🔌
