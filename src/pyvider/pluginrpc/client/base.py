#
# pyvider/pluginrpc/client/base.py
#

"""
Client module for calling procedures of a plugin.

A `Client` talks to one plugin through a Runner. Before the first call it
discovers the plugin: it checks the protocol version printed for
`--plugin-protocol` and reads the Spec printed for `--plugin-spec`. Every
call then looks up the Procedure for the requested path, runs the plugin
with that Procedure's arguments and decodes the response envelope.

Example usage:
    ```python
    from pyvider.pluginrpc import Client, ExecRunner

    client = Client(ExecRunner("pluginrpc-example-server"))
    response = await client.call(
        "/buf.pluginrpc.example.v1.EchoService/EchoRequest",
        EchoRequestRequest(message="hello"),
        EchoRequestResponse,
    )
    ```
"""

import asyncio
from typing import final

from attrs import field, frozen
from google.protobuf.message import Message

from pyvider.telemetry import logger

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.config import pluginrpc_config
from pyvider.pluginrpc.envelope import marshal_request, response_error, unmarshal_response
from pyvider.pluginrpc.error import new_errorf
from pyvider.pluginrpc.exception import ProtocolError
from pyvider.pluginrpc.exit_error import ExitError
from pyvider.pluginrpc.protocol.flags import protocol_flag, spec_flag
from pyvider.pluginrpc.runner import Runner
from pyvider.pluginrpc.spec import Spec, spec_from_json
from pyvider.pluginrpc.types import ResponseT


@frozen
class ClientOptions:
    """
    Options for a new Client.

    Attributes:
        flag_prefix: The prefix the plugin uses for its introspection flags.
            Defaults to the `PLUGIN_FLAG_PREFIX` configuration value.
        protocol_version: The protocol version the plugin must report.
            Defaults to the `PLUGIN_PROTOCOL_VERSION` configuration value.
    """

    flag_prefix: str | None = field(default=None)
    protocol_version: int | None = field(default=None)


@final
class Client:
    """
    Calls procedures of a single plugin.

    The plugin's Spec is fetched once, on first use, and cached for the
    lifetime of the Client.
    """

    def __init__(self, runner: Runner, options: ClientOptions | None = None) -> None:
        options = options or ClientOptions()
        config = pluginrpc_config()
        self._runner = runner
        self._flag_prefix = options.flag_prefix if options.flag_prefix is not None else config.flag_prefix()
        self._protocol_version = (
            options.protocol_version if options.protocol_version is not None else config.protocol_version()
        )
        self._spec: Spec | None = None
        self._spec_lock = asyncio.Lock()
        logger.debug(f"🔌 Client created with runner {type(runner).__name__}")

    @property
    def runner(self) -> Runner:
        return self._runner

    async def spec(self) -> Spec:
        """
        Returns the Spec of the plugin, discovering it on first use.

        Raises:
            ProtocolError: If the plugin reports another protocol version or an invalid Spec.
            ExitError: If the plugin does not understand the introspection flags.
        """
        if self._spec is not None:
            return self._spec
        async with self._spec_lock:
            if self._spec is None:
                self._spec = await self._discover_spec()
        return self._spec

    async def call(
        self,
        path: str,
        request: Message | None,
        response_type: type[ResponseT],
    ) -> ResponseT:
        """
        Calls the procedure with the given path.

        A None request is sent without a body, so the plugin sees a request
        with default values.

        Raises:
            Error: If the plugin answered with an error, or the path is not in its Spec.
            ExitError: If the plugin failed without writing an error.
            ProtocolError: If the plugin's output is not a valid response envelope.
        """
        spec = await self.spec()
        procedure = spec.procedure_for_path(path)
        if procedure is None:
            logger.error(f"🔌❌ Procedure {path!r} is not in the plugin spec")
            raise new_errorf(Code.UNIMPLEMENTED, f"procedure {path!r} not found in plugin spec")

        args = procedure.invocation
        logger.debug(f"🔌📤 Calling {path} with args {args}")
        output = await self._run_call(args, marshal_request(request))

        response = response_type()
        unmarshal_response(output, response)
        logger.debug(f"🔌📥 Call to {path} succeeded")
        return response

    async def _run_call(self, args: list[str], data: bytes) -> bytes:
        try:
            return await self._runner.run(args, data)
        except ExitError as e:
            # A failing procedure writes its error envelope before exiting nonzero.
            if response_error(e.stdout) is None:
                raise
            logger.debug(f"🔌🚨 Plugin exited with code {e.exit_code} and an error envelope")
            return e.stdout

    async def _discover_spec(self) -> Spec:
        logger.debug("🔌🔍 Discovering plugin protocol version")
        output = await self._runner.run([protocol_flag(self._flag_prefix)])
        try:
            protocol_version = int(output.decode("utf-8").strip())
        except ValueError as e:
            logger.error(f"🔌❌ Invalid protocol version output: {output!r}")
            raise ProtocolError(f"invalid plugin protocol version: {output!r}") from e
        if protocol_version != self._protocol_version:
            logger.error(
                f"🔌❌ Unsupported plugin protocol version {protocol_version}",
                extra={"expected": self._protocol_version},
            )
            raise ProtocolError(
                f"unsupported plugin protocol version {protocol_version}, expected {self._protocol_version}"
            )

        logger.debug("🔌🔍 Discovering plugin spec")
        output = await self._runner.run([spec_flag(self._flag_prefix)])
        spec = spec_from_json(output)
        logger.info(f"🔌✅ Discovered plugin spec with {len(spec)} procedures")
        return spec


def new_client(runner: Runner, flag_prefix: str | None = None) -> Client:
    """Returns a new Client, optionally for a plugin with a flag prefix."""
    return Client(runner, ClientOptions(flag_prefix=flag_prefix))

# 🐍🏗️🔌
