"""
Plugin RPC Server Implementation.

This module defines `Server`, which routes one invocation of a plugin process
to the procedure it addresses. A Server is built from a Spec and a
ServerRegistrar; construction checks that every Procedure has a registered
serve function and that every registered path belongs to the Spec.

Dispatch rules for `Server.serve`:

1. `--[prefix-]plugin-protocol` alone prints the protocol version.
2. `--[prefix-]plugin-spec` alone prints the JSON-encoded Spec.
3. Otherwise the first Procedure whose path, or whose argument signature,
   equals the argument vector is served.
4. Anything else raises `UnrecognizedArgsError`.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import final

from attrs import field, frozen

from pyvider.telemetry import logger

from pyvider.pluginrpc.config import pluginrpc_config
from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.exception import ServerError, UnrecognizedArgsError
from pyvider.pluginrpc.protocol.flags import protocol_flag, spec_flag
from pyvider.pluginrpc.registrar import ServerRegistrar
from pyvider.pluginrpc.spec import Spec
from pyvider.pluginrpc.types import ServeFunc


@frozen
class ServerOptions:
    """
    Options for a new Server.

    Attributes:
        flag_prefix: Inserted into the introspection flags, e.g. `foo` gives
            `--foo-plugin-protocol` and `--foo-plugin-spec`. Defaults to the
            `PLUGIN_FLAG_PREFIX` configuration value.
        protocol_version: The version printed for `--plugin-protocol`.
            Defaults to the `PLUGIN_PROTOCOL_VERSION` configuration value.
    """

    flag_prefix: str | None = field(default=None)
    protocol_version: int | None = field(default=None)


@final
class Server:
    """
    The server side of a plugin.

    Immutable once constructed. Constructing a Server consumes its registrar:
    any later registration is recorded as an error on the registrar.

    Raises:
        RegistrarError: If the registrar recorded errors.
        ServerError: If the Spec and the registered paths do not match one to one.
    """

    def __init__(
        self,
        spec: Spec,
        server_registrar: ServerRegistrar,
        options: ServerOptions | None = None,
    ) -> None:
        options = options or ServerOptions()
        config = pluginrpc_config()

        path_to_serve_func = server_registrar.path_to_serve_func()
        for path in path_to_serve_func:
            if spec.procedure_for_path(path) is None:
                logger.error(f"🛎️❌ Registered path {path!r} is not contained within spec")
                raise ServerError(f"path {path!r} not contained within spec")
        for procedure in spec.procedures:
            if procedure.path not in path_to_serve_func:
                logger.error(f"🛎️❌ Procedure {procedure.path!r} has no registered serve function")
                raise ServerError(f"path {procedure.path!r} not registered")

        self._spec = spec
        self._flag_prefix = options.flag_prefix if options.flag_prefix is not None else config.flag_prefix()
        self._protocol_version = (
            options.protocol_version if options.protocol_version is not None else config.protocol_version()
        )
        self._path_to_serve_func: Mapping[str, ServeFunc] = MappingProxyType(dict(path_to_serve_func))
        logger.debug(
            f"🛎️✅ Server built with {len(spec)} procedures",
            extra={"flag_prefix": self._flag_prefix},
        )

    @property
    def spec(self) -> Spec:
        return self._spec

    @property
    def flag_prefix(self) -> str | None:
        return self._flag_prefix

    @property
    def protocol_version(self) -> int:
        return self._protocol_version

    async def serve(self, env: Env) -> None:
        """
        Serves one invocation described by the Env.

        Raises:
            UnrecognizedArgsError: If the arguments select neither a flag nor a procedure.
        """
        args = list(env.args)
        logger.debug(f"🛎️🔍 Serving invocation {args}")

        if len(args) == 1:
            if args[0] == protocol_flag(self._flag_prefix):
                logger.debug(f"🛎️📤 Writing protocol version {self._protocol_version}")
                env.write_stdout(f"{self._protocol_version}\n".encode("utf-8"))
                return
            if args[0] == spec_flag(self._flag_prefix):
                logger.debug("🛎️📤 Writing spec")
                env.write_stdout(self._spec.to_json() + b"\n")
                return

        for procedure in self._spec.procedures:
            if procedure.matches(args):
                logger.debug(f"🛎️🚀 Dispatching to {procedure.path}")
                serve_func = self._path_to_serve_func[procedure.path]
                await serve_func(env)
                return

        logger.error(f"🛎️❌ Args not recognized: {args}")
        raise UnrecognizedArgsError(args)


def new_server(
    spec: Spec,
    server_registrar: ServerRegistrar,
    flag_prefix: str | None = None,
) -> Server:
    """Returns a new Server, optionally with a flag prefix."""
    return Server(spec, server_registrar, ServerOptions(flag_prefix=flag_prefix))

# 🐍🏗️🔌
