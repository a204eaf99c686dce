"""Factory Functions for Pyvider Plugin RPC
=========================================

This module provides simple factory functions that serve as the primary entry
points for the plugin RPC system. They assemble Servers and Clients from their
parts with sensible defaults, simplifying the most common use cases:

- `plugin_server` builds a Server from a Spec and a registration callback.
- `plugin_client` builds a Client that runs a plugin executable per call.
- `in_process_client` builds a Client that serves calls with a Server in memory.
"""

import os
import shutil
from collections.abc import Callable, Iterable

from pyvider.telemetry import logger

from pyvider.pluginrpc.client import Client, ClientOptions
from pyvider.pluginrpc.exception import TransportError
from pyvider.pluginrpc.procedure import Procedure
from pyvider.pluginrpc.registrar import ServerRegistrar
from pyvider.pluginrpc.runner import ExecRunner, ServerRunner
from pyvider.pluginrpc.server import Server, ServerOptions
from pyvider.pluginrpc.spec import Spec, new_spec


def plugin_server(
    spec: Spec | Iterable[Procedure],
    register: Callable[[ServerRegistrar], None],
    flag_prefix: str | None = None,
    protocol_version: int | None = None,
) -> Server:
    """
    Create a new plugin server.

    Args:
        spec: The Spec, or the Procedures to build it from
        register: Called once with a fresh ServerRegistrar to register serve functions
        flag_prefix: Prefix for the introspection flags
        protocol_version: Version printed for the protocol flag

    Returns:
        A Server ready to serve invocations

    Raises:
        SpecError: If the Procedures do not form a valid Spec
        RegistrarError: If registration recorded errors
        ServerError: If the Spec and the registered paths do not match
    """
    if not isinstance(spec, Spec):
        spec = new_spec(spec)
    logger.debug(f"🧰🚀🔍 Creating plugin server for {len(spec)} procedures")

    server_registrar = ServerRegistrar()
    register(server_registrar)

    server = Server(
        spec,
        server_registrar,
        ServerOptions(flag_prefix=flag_prefix, protocol_version=protocol_version),
    )
    logger.debug("🧰🚀✅ Created plugin server")
    return server


def plugin_client(
    program: str,
    env: dict[str, str] | None = None,
    flag_prefix: str | None = None,
    inherit_stderr: bool | None = None,
) -> Client:
    """
    Create a new client for a plugin executable.

    Args:
        program: Name or path of the plugin executable
        env: Extra environment variables passed to the plugin process
        flag_prefix: Prefix the plugin uses for its introspection flags
        inherit_stderr: Forward the plugin's stderr, defaults to configuration

    Returns:
        A Client that runs `program` once per call

    Raises:
        TransportError: If the executable cannot be found or is not executable
    """
    logger.debug(f"🧰🚀🔍 Creating plugin client for {program}")

    resolved = shutil.which(program)
    if resolved is None:
        if os.path.exists(program) and not os.access(program, os.X_OK):
            logger.error(f"🧰🚀❌ Plugin executable not executable: {program}")
            raise TransportError(f"plugin executable not executable: {program}")
        logger.error(f"🧰🚀❌ Plugin executable not found: {program}")
        raise TransportError(
            f"plugin executable not found: {program}",
            hint="pass an absolute path or add the plugin's directory to PATH",
        )

    runner = ExecRunner(program=resolved, env=env, inherit_stderr=inherit_stderr)
    logger.debug(f"🧰🚀✅ Created plugin client for {resolved}")
    return Client(runner, ClientOptions(flag_prefix=flag_prefix))


def in_process_client(server: Server) -> Client:
    """
    Create a new client that serves calls in-process with the given Server.

    The client uses the Server's flag prefix and protocol version.
    """
    logger.debug("🧰🚀🔍 Creating in-process plugin client")
    return Client(
        ServerRunner(server=server),
        ClientOptions(flag_prefix=server.flag_prefix, protocol_version=server.protocol_version),
    )

# 🐍🏗️🔌
