"""
Server-side envelope handling.

A `Handler` turns one procedure invocation into a call of a business
callback: it reads the request envelope from stdin, decodes the request,
awaits the callback and writes the response envelope to stdout. Service
servers shaped like generated stubs use one Handler for all their methods.

If anything fails, only an error envelope is written and the original
exception is re-raised so that the process exit status can be derived from
it. A callback that fails never has its response written, even if it
produced one.
"""

import asyncio
from typing import final

from attrs import frozen
from google.protobuf.message import Message

from pyvider.telemetry import logger

from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.envelope import marshal_response, unmarshal_request
from pyvider.pluginrpc.exception import TransportError
from pyvider.pluginrpc.types import HandleFunc, RequestT, is_terminal


@final
@frozen
class Handler:
    """Handles requests on the server side."""

    async def handle(self, env: Env, request_type: type[RequestT], handle: HandleFunc) -> None:
        """
        Decodes a `request_type` request from the Env, awaits `handle` with it
        and writes the response.

        Raises:
            Exception: Whatever failed, after its error envelope was written.
        """
        try:
            data = await read_stdin(env)
            request = request_type()
            unmarshal_request(data, request)
            logger.debug(f"🧑‍🍳📥 Handling {request_type.DESCRIPTOR.full_name}")
            response = await handle(request)
            output = marshal_response(response)
        except Exception as e:
            logger.debug(f"🧑‍🍳🚨 Request failed: {e}")
            self._write_error(env, e)
            raise

        # The trailing newline keeps the output tidy when the plugin is run from a terminal.
        try:
            env.write_stdout(output + b"\n")
        except OSError as e:
            logger.error("🧑‍🍳❌ Failed to write response to stdout", extra={"error": str(e)})
            raise TransportError(f"failed to write response to stdout: {e}") from e
        logger.debug("🧑‍🍳✅ Response written")

    def _write_error(self, env: Env, exc: Exception) -> None:
        data = marshal_response(None, exc)
        try:
            env.write_stdout(data)
        except OSError as e:
            logger.error("🧑‍🍳❌ Failed to write error to stdout", extra={"error": str(e)})
            raise TransportError(f"failed to write error to stdout: {e}") from e


async def read_stdin(env: Env) -> bytes:
    """
    Reads all of stdin.

    A terminal on stdin means nobody is piping a request in, so it is treated
    as empty instead of blocking. This lets a plugin be run by hand as
    `plugin /pkg.Service/Method` without `echo '{}' |` in front.
    """
    if is_terminal(env.stdin):
        return b""
    loop = asyncio.get_running_loop()
    data = await loop.run_in_executor(None, env.stdin.read)
    return data or b""


def new_handler() -> Handler:
    return Handler()

# 🐍🏗️🔌
