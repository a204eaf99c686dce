"""
Example Echo plugin.

`pluginrpc-example-server` serves the Echo service as a plugin, and
`pluginrpc-example-client-error` calls its EchoError procedure to show how
errors travel back to the client and into its exit status.
"""

from pyvider.pluginrpc.example.echo_pluginrpc import (
    ECHO_SERVICE_ECHO_ERROR_PATH,
    ECHO_SERVICE_ECHO_LIST_PATH,
    ECHO_SERVICE_ECHO_REQUEST_PATH,
    EchoServiceClient,
    EchoServiceHandler,
    EchoServiceServer,
    EchoServiceSpecBuilder,
    register_echo_service_server,
)

__all__ = [
    "ECHO_SERVICE_ECHO_ERROR_PATH",
    "ECHO_SERVICE_ECHO_LIST_PATH",
    "ECHO_SERVICE_ECHO_REQUEST_PATH",
    "EchoServiceClient",
    "EchoServiceHandler",
    "EchoServiceServer",
    "EchoServiceSpecBuilder",
    "register_echo_service_server",
]

# 🐍🏗️🔌
