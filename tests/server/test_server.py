# tests/server/test_server.py

import pytest

from pyvider.pluginrpc.config import configure
from pyvider.pluginrpc.envelope import marshal_request, unmarshal_response
from pyvider.pluginrpc.example.echo_pb2 import EchoRequestRequest, EchoRequestResponse
from pyvider.pluginrpc.exception import RegistrarError, ServerError, UnrecognizedArgsError
from pyvider.pluginrpc.procedure import new_procedure
from pyvider.pluginrpc.registrar import ServerRegistrar
from pyvider.pluginrpc.server import Server, ServerOptions, new_server
from pyvider.pluginrpc.spec import new_spec, spec_from_json


def recording_serve_func(calls: list, name: str):
    async def serve(env) -> None:
        calls.append(name)

    return serve


def registrar_for(paths, calls=None) -> ServerRegistrar:
    calls = [] if calls is None else calls
    registrar = ServerRegistrar()
    for path in paths:
        registrar.register(path, recording_serve_func(calls, path))
    return registrar


def test_server_requires_registered_paths_in_spec():
    spec = new_spec([new_procedure("/a")])
    with pytest.raises(ServerError, match="path '/b' not contained within spec"):
        Server(spec, registrar_for(["/a", "/b"]))


def test_server_requires_every_procedure_registered():
    spec = new_spec([new_procedure("/a"), new_procedure("/b")])
    with pytest.raises(ServerError, match="path '/b' not registered"):
        Server(spec, registrar_for(["/a"]))


def test_server_surfaces_registrar_errors():
    spec = new_spec([new_procedure("/a")])
    registrar = registrar_for(["/a"])
    registrar.register("/a", recording_serve_func([], "dup"))
    with pytest.raises(RegistrarError):
        Server(spec, registrar)


def test_server_freezes_registrar():
    spec = new_spec([new_procedure("/a")])
    registrar = registrar_for(["/a"])
    Server(spec, registrar)
    assert registrar.frozen


def test_server_defaults_from_config():
    configure(protocol_version=2, flag_prefix="bar")
    server = Server(new_spec([]), ServerRegistrar())
    assert server.protocol_version == 2
    assert server.flag_prefix == "bar"


def test_server_options_override_config():
    configure(flag_prefix="bar")
    server = Server(new_spec([]), ServerRegistrar(), ServerOptions(flag_prefix="foo", protocol_version=3))
    assert server.flag_prefix == "foo"
    assert server.protocol_version == 3


@pytest.mark.asyncio
async def test_serve_protocol_flag(echo_server, make_env):
    env = make_env(["--plugin-protocol"])
    await echo_server.serve(env)
    assert env.stdout.getvalue() == b"1\n"


@pytest.mark.asyncio
async def test_serve_protocol_flag_custom_version(make_env):
    server = Server(new_spec([]), ServerRegistrar(), ServerOptions(protocol_version=7))
    env = make_env(["--plugin-protocol"])
    await server.serve(env)
    assert env.stdout.getvalue() == b"7\n"


@pytest.mark.asyncio
async def test_serve_spec_flag(echo_server, echo_spec, make_env):
    env = make_env(["--plugin-spec"])
    await echo_server.serve(env)
    output = env.stdout.getvalue()
    assert output.endswith(b"\n")
    assert output.count(b"\n") == 1
    assert spec_from_json(output) == echo_spec


@pytest.mark.asyncio
async def test_serve_prefixed_flags(make_env):
    server = new_server(new_spec([]), ServerRegistrar(), flag_prefix="foo")

    env = make_env(["--foo-plugin-protocol"])
    await server.serve(env)
    assert env.stdout.getvalue() == b"1\n"

    env = make_env(["--foo-plugin-spec"])
    await server.serve(env)
    assert env.stdout.getvalue() == b"{}\n"

    with pytest.raises(UnrecognizedArgsError):
        await server.serve(make_env(["--plugin-protocol"]))


@pytest.mark.asyncio
async def test_flag_with_extra_args_is_not_a_flag(echo_server, make_env):
    with pytest.raises(UnrecognizedArgsError):
        await echo_server.serve(make_env(["--plugin-protocol", "extra"]))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "args",
    [
        ["echo", "request"],
        ["/buf.pluginrpc.example.v1.EchoService/EchoRequest"],
    ],
)
async def test_serve_dispatches_by_args_or_path(echo_server, make_env, args):
    env = make_env(args, stdin=marshal_request(EchoRequestRequest(message="hello")))
    await echo_server.serve(env)
    response = EchoRequestResponse()
    unmarshal_response(env.stdout.getvalue(), response)
    assert response.message == "hello"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "args",
    [
        [],
        ["echo"],
        ["echo", "request", "extra"],
        ["echo", "list"],
        ["/buf.pluginrpc.example.v1.EchoService/Unknown"],
    ],
)
async def test_serve_unrecognized_args(echo_server, make_env, args):
    env = make_env(args)
    with pytest.raises(UnrecognizedArgsError) as excinfo:
        await echo_server.serve(env)
    assert excinfo.value.args_list == args
    assert env.stdout.getvalue() == b""


@pytest.mark.asyncio
async def test_first_matching_procedure_wins(make_env):
    # ["run"] is both the args of "/a" and the path of "run".
    procedures = [new_procedure("/a", "run"), new_procedure("run")]

    calls: list[str] = []
    server = Server(new_spec(procedures), registrar_for(["/a", "run"], calls))
    await server.serve(make_env(["run"]))
    assert calls == ["/a"]

    calls.clear()
    server = Server(new_spec(reversed(procedures)), registrar_for(["/a", "run"], calls))
    await server.serve(make_env(["run"]))
    assert calls == ["run"]
