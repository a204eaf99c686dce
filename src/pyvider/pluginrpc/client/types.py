"""
Type Definitions for Pyvider Plugin RPC Client.

This module contains the TypeVars and Protocols used by client components
and by service clients shaped like generated stubs.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

from google.protobuf.message import Message

from pyvider.pluginrpc.types import ResponseT

if TYPE_CHECKING:
    from pyvider.pluginrpc.client.base import Client
    from pyvider.pluginrpc.spec import Spec

# Generic TypeVars
ClientT = TypeVar("ClientT", bound="Client")  # Represents a Client instance type


class CallerT(Protocol):
    """The part of a Client that service clients depend on."""

    async def spec(self) -> Spec: ...

    async def call(
        self,
        path: str,
        request: Message | None,
        response_type: type[ResponseT],
    ) -> ResponseT: ...

# 🐍🏗️🔌
