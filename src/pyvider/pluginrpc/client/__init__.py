"""
Pyvider Plugin RPC Client Package.

Exports the Client used to call procedures of a plugin, along with its options.
"""

from pyvider.pluginrpc.client.base import Client, ClientOptions, new_client
from pyvider.pluginrpc.client.types import CallerT, ClientT

__all__ = [
    "CallerT",
    "Client",
    "ClientOptions",
    "ClientT",
    "new_client",
]

# 🐍🏗️🔌
