"""
Pyvider Plugin RPC Package.

This package exports the main classes, functions and exceptions of the Pyvider
plugin RPC system, making them available for direct import from
`pyvider.pluginrpc`.
"""

from pyvider.pluginrpc.config import (
    PluginRPCConfig,
    pluginrpc_config,
    configure,
)
from pyvider.pluginrpc.exception import (
    ConfigError,
    DuplicateArgsError,
    DuplicatePathError,
    InvalidProcedureError,
    PluginRPCError,
    ProtocolError,
    RegistrarError,
    ServerError,
    SpecError,
    TransportError,
    UnrecognizedArgsError,
)

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.error import Error, new_error, new_errorf, wrap_error
from pyvider.pluginrpc.exit_error import ExitError, wrap_exit_error
from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.procedure import Procedure, new_procedure
from pyvider.pluginrpc.spec import Spec, combine_specs, new_spec, spec_from_json
from pyvider.pluginrpc.registrar import ServerRegistrar, new_server_registrar
from pyvider.pluginrpc.server import Server, ServerOptions, new_server
from pyvider.pluginrpc.handler import Handler, new_handler
from pyvider.pluginrpc.runner import (
    ExecRunner,
    Runner,
    ServerRunner,
    new_exec_runner,
    new_server_runner,
)
from pyvider.pluginrpc.client import Client, ClientOptions, new_client
from pyvider.pluginrpc.main import serve_main

from pyvider.pluginrpc.factories import (
    plugin_server,
    plugin_client,
    in_process_client,
)

__all__ = [
    "PluginRPCConfig",
    "pluginrpc_config",
    "configure",
    "PluginRPCError",
    "ConfigError",
    "SpecError",
    "InvalidProcedureError",
    "DuplicatePathError",
    "DuplicateArgsError",
    "RegistrarError",
    "ServerError",
    "UnrecognizedArgsError",
    "ProtocolError",
    "TransportError",
    "Code",
    "Error",
    "new_error",
    "new_errorf",
    "wrap_error",
    "ExitError",
    "wrap_exit_error",
    "Env",
    "Procedure",
    "new_procedure",
    "Spec",
    "new_spec",
    "combine_specs",
    "spec_from_json",
    "ServerRegistrar",
    "new_server_registrar",
    "Server",
    "ServerOptions",
    "new_server",
    "Handler",
    "new_handler",
    "Runner",
    "ExecRunner",
    "ServerRunner",
    "new_exec_runner",
    "new_server_runner",
    "Client",
    "ClientOptions",
    "new_client",
    "serve_main",
    "plugin_server",
    "plugin_client",
    "in_process_client",
]

# 🐍🏗️🔌
