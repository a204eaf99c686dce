"""
Server registration.

A `ServerRegistrar` collects the serve function of every procedure before a
Server is built. Registration is split from the Server so that the Server
itself can be immutable.

`register` never raises. Problems such as a duplicate path, or registering
after the registrar has been handed to a Server, are recorded and reported
together when the Server reads the registrar. This lets registration code,
typically `register_*_server` functions shaped like generated stubs, run
unconditionally.
"""

import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import final

from pyvider.telemetry import logger

from pyvider.pluginrpc.exception import RegistrarError
from pyvider.pluginrpc.types import ServeFunc


@final
class ServerRegistrar:
    """
    A write-once collector of path to serve function mappings.

    Safe to call `register` from several threads during setup. The first call
    to `path_to_serve_func`, made by Server construction, freezes the registrar.
    """

    def __init__(self) -> None:
        self._path_to_serve_func: dict[str, ServeFunc] = {}
        self._errors: list[str] = []
        self._frozen = False
        self._lock = threading.Lock()

    @property
    def frozen(self) -> bool:
        with self._lock:
            return self._frozen

    def register(self, path: str, serve_func: ServeFunc) -> None:
        """
        Registers the serve function for the given path.

        Paths must be unique. Errors are recorded and surfaced by
        `path_to_serve_func`, not raised here.
        """
        with self._lock:
            if self._frozen:
                logger.warning(f"🗂️⚠️ Registration of {path!r} after the registrar was used")
                self._errors.append("server registrar already used")
                return
            if path in self._path_to_serve_func:
                logger.warning(f"🗂️⚠️ Duplicate registration of {path!r}")
                self._errors.append(f"path {path!r} already registered")
                return
            self._path_to_serve_func[path] = serve_func
            logger.debug(f"🗂️✅ Registered serve function for {path!r}")

    def path_to_serve_func(self) -> Mapping[str, ServeFunc]:
        """
        Freezes the registrar and returns the registered serve functions.

        Raises:
            RegistrarError: Joining every error recorded so far.
        """
        with self._lock:
            self._frozen = True
            if self._errors:
                logger.error(
                    f"🗂️❌ Server registrar has {len(self._errors)} error(s)",
                    extra={"errors": list(self._errors)},
                )
                raise RegistrarError(self._errors)
            return MappingProxyType(dict(self._path_to_serve_func))


def new_server_registrar() -> ServerRegistrar:
    return ServerRegistrar()

# 🐍🏗️🔌
