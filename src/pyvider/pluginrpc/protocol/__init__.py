"""
Pyvider Plugin RPC Protocol Package.

This package holds the wire-level pieces of the protocol: the envelope
message classes and the names of the protocol introspection flags.
"""

from pyvider.pluginrpc.protocol import pluginrpc_pb2
from pyvider.pluginrpc.protocol.flags import (
    PROTOCOL_FLAG_SUFFIX,
    SPEC_FLAG_SUFFIX,
    full_flag,
    protocol_flag,
    spec_flag,
)

__all__ = [
    "pluginrpc_pb2",
    "PROTOCOL_FLAG_SUFFIX",
    "SPEC_FLAG_SUFFIX",
    "full_flag",
    "protocol_flag",
    "spec_flag",
]

# 🐍🏗️🔌
