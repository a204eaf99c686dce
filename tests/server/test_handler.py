# tests/server/test_handler.py

import io
import json
from unittest.mock import AsyncMock

import pytest

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.envelope import marshal_request, marshal_response
from pyvider.pluginrpc.error import Error
from pyvider.pluginrpc.example.echo_pb2 import EchoRequestRequest, EchoRequestResponse
from pyvider.pluginrpc.exception import ProtocolError, TransportError
from pyvider.pluginrpc.handler import Handler, new_handler, read_stdin
from tests.fixtures.streams import BrokenPipeBytesIO, TerminalBytesIO


async def echo(request: EchoRequestRequest) -> EchoRequestResponse:
    return EchoRequestResponse(message=request.message)


@pytest.mark.asyncio
async def test_handle_writes_response_with_newline(make_env):
    env = make_env(stdin=marshal_request(EchoRequestRequest(message="hello")))
    await new_handler().handle(env, EchoRequestRequest, echo)
    assert env.stdout.getvalue() == marshal_response(EchoRequestResponse(message="hello")) + b"\n"


@pytest.mark.asyncio
async def test_handle_empty_stdin_uses_default_request(make_env):
    handle = AsyncMock(return_value=None)
    env = make_env()
    await Handler().handle(env, EchoRequestRequest, handle)
    handle.assert_awaited_once_with(EchoRequestRequest())
    assert env.stdout.getvalue() == b"{}\n"


@pytest.mark.asyncio
async def test_handle_terminal_stdin_is_not_read():
    stdin = TerminalBytesIO(b"this would not parse")
    env = Env(stdin=stdin)
    handle = AsyncMock(return_value=EchoRequestResponse())
    await Handler().handle(env, EchoRequestRequest, handle)
    handle.assert_awaited_once_with(EchoRequestRequest())
    assert stdin.tell() == 0


@pytest.mark.asyncio
async def test_handle_error_writes_error_envelope_and_reraises(make_env):
    error = Error(Code.DEADLINE_EXCEEDED, ValueError("hello"))
    handle = AsyncMock(side_effect=error)
    env = make_env()

    with pytest.raises(Error) as excinfo:
        await Handler().handle(env, EchoRequestRequest, handle)

    assert excinfo.value is error
    output = env.stdout.getvalue()
    assert not output.endswith(b"\n")
    assert json.loads(output) == {"error": {"code": 4, "message": "hello"}}


@pytest.mark.asyncio
async def test_handle_plain_exception_is_unknown(make_env):
    env = make_env()
    with pytest.raises(RuntimeError, match="boom"):
        await Handler().handle(env, EchoRequestRequest, AsyncMock(side_effect=RuntimeError("boom")))
    assert json.loads(env.stdout.getvalue()) == {"error": {"code": 2, "message": "boom"}}


@pytest.mark.asyncio
async def test_handle_bad_request_never_calls_handler(make_env):
    handle = AsyncMock()
    env = make_env(stdin=b"{not json")
    with pytest.raises(ProtocolError):
        await Handler().handle(env, EchoRequestRequest, handle)
    handle.assert_not_awaited()
    assert json.loads(env.stdout.getvalue())["error"]["code"] == 2


@pytest.mark.asyncio
async def test_handle_write_failure():
    env = Env(stdin=io.BytesIO(b""), stdout=BrokenPipeBytesIO())
    with pytest.raises(TransportError, match="failed to write response"):
        await Handler().handle(env, EchoRequestRequest, echo)


@pytest.mark.asyncio
async def test_handle_error_write_failure():
    env = Env(stdin=io.BytesIO(b""), stdout=BrokenPipeBytesIO())
    with pytest.raises(TransportError, match="failed to write error"):
        await Handler().handle(env, EchoRequestRequest, AsyncMock(side_effect=RuntimeError("boom")))


@pytest.mark.asyncio
async def test_read_stdin():
    assert await read_stdin(Env(stdin=io.BytesIO(b"data"))) == b"data"
    assert await read_stdin(Env(stdin=TerminalBytesIO(b"data"))) == b""
