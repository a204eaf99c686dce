# tests/client/test_runner.py

import asyncio
import sys
import time

import pytest

from pyvider.pluginrpc.client import Client
from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.envelope import marshal_request, response_error
from pyvider.pluginrpc.error import Error
from pyvider.pluginrpc.example.echo_pb2 import EchoErrorRequest, EchoRequestRequest
from pyvider.pluginrpc.example.echo_pluginrpc import EchoServiceClient
from pyvider.pluginrpc.exception import TransportError, UnrecognizedArgsError
from pyvider.pluginrpc.exit_error import ExitError
from pyvider.pluginrpc.runner import ExecRunner, ServerRunner, new_exec_runner, new_server_runner

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="plugin scripts are POSIX shell scripts")


@pytest.mark.asyncio
async def test_server_runner_protocol_flag(echo_server):
    assert await new_server_runner(echo_server).run(["--plugin-protocol"]) == b"1\n"


@pytest.mark.asyncio
async def test_server_runner_unrecognized_args(echo_server):
    with pytest.raises(ExitError) as excinfo:
        await ServerRunner(echo_server).run(["nope"])

    exit_error = excinfo.value
    assert exit_error.exit_code == int(Code.UNKNOWN)
    assert isinstance(exit_error.__cause__, UnrecognizedArgsError)
    assert exit_error.stdout == b""
    assert exit_error.stderr == b"args not recognized: ['nope']\n"


@pytest.mark.asyncio
async def test_server_runner_error_keeps_envelope(echo_server):
    stdin = marshal_request(EchoErrorRequest(code=Code.NOT_FOUND.to_proto(), message="gone"))
    with pytest.raises(ExitError) as excinfo:
        await ServerRunner(echo_server).run(["echo", "error"], stdin)

    exit_error = excinfo.value
    assert exit_error.exit_code == int(Code.NOT_FOUND)
    assert str(exit_error) == "not_found: gone"
    error = response_error(exit_error.stdout)
    assert error is not None
    assert error.code is Code.NOT_FOUND


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_echo_plugin(echo_plugin_path):
    echo_client = EchoServiceClient(Client(ExecRunner(echo_plugin_path)))
    response = await echo_client.echo_request(EchoRequestRequest(message="hello"))
    assert response.message == "hello"

    response = await echo_client.echo_list(None)
    assert list(response.list) == ["foo", "bar"]


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_echo_error(echo_plugin_path):
    echo_client = EchoServiceClient(Client(ExecRunner(echo_plugin_path, inherit_stderr=False)))
    with pytest.raises(Error) as excinfo:
        await echo_client.echo_error(
            EchoErrorRequest(code=Code.DEADLINE_EXCEEDED.to_proto(), message="hello")
        )
    assert excinfo.value.code is Code.DEADLINE_EXCEEDED
    assert str(excinfo.value.unwrap()) == "hello"


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_raw_request(echo_plugin_path):
    runner = new_exec_runner(echo_plugin_path)
    output = await runner.run(["echo", "request"], marshal_request(EchoRequestRequest(message="raw")))
    assert output.endswith(b"\n")
    assert b'"message": "raw"' in output


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_nonzero_exit(failing_plugin_path):
    runner = ExecRunner(failing_plugin_path, inherit_stderr=False)
    with pytest.raises(ExitError) as excinfo:
        await runner.run([])

    exit_error = excinfo.value
    assert exit_error.exit_code == 3
    assert exit_error.stdout == b"partial"
    assert exit_error.stderr == b"boom\n"
    assert str(exit_error) == "boom"


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_inherit_stderr_from_config(failing_plugin_path, monkeypatch):
    monkeypatch.setenv("PLUGIN_EXEC_INHERIT_STDERR", "false")
    with pytest.raises(ExitError) as excinfo:
        await ExecRunner(failing_plugin_path).run([])
    assert excinfo.value.stderr == b"boom\n"


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_extra_env(env_plugin_path):
    runner = ExecRunner(env_plugin_path, env={"PLUGIN_TEST_VALUE": "forwarded"})
    assert await runner.run([]) == b"forwarded"


@pytest.mark.asyncio
async def test_exec_runner_missing_program(tmp_path):
    runner = ExecRunner(str(tmp_path / "does-not-exist"))
    with pytest.raises(TransportError, match="failed to launch plugin"):
        await runner.run([])


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_cancellation_stops_plugin(sleeping_plugin_path):
    runner = ExecRunner(sleeping_plugin_path, kill_grace=0.5)
    started = time.monotonic()
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(runner.run([]), timeout=0.2)
    assert time.monotonic() - started < 10


@posix_only
@pytest.mark.asyncio
async def test_exec_runner_cancellation_reraises(sleeping_plugin_path):
    task = asyncio.create_task(ExecRunner(sleeping_plugin_path, kill_grace=0.5).run([]))
    await asyncio.sleep(0.2)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
