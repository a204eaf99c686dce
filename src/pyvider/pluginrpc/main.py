"""
Process entry point for plugins.

`serve_main` is what a plugin's `main` calls: it builds the Server, serves
the current process invocation and exits. On failure the error message goes
to stderr and the exit status is derived from the error's code; the error
envelope, if any, has already been written to stdout by the Handler.
"""

import asyncio
import sys
from collections.abc import Callable
from typing import NoReturn

from pyvider.telemetry import logger

from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.exit_error import wrap_exit_error
from pyvider.pluginrpc.server import Server


async def run_server(new_server: Callable[[], Server], env: Env) -> None:
    """Builds a Server with `new_server` and serves one invocation."""
    server = new_server()
    await server.serve(env)


def serve_main(new_server: Callable[[], Server], env: Env | None = None) -> NoReturn:
    """
    Serves the current process invocation and exits.

    Args:
        new_server: Builds the Server. Called once.
        env: The invocation to serve. Defaults to the current process.
    """
    if env is None:
        env = Env.from_os()
    try:
        asyncio.run(run_server(new_server, env))
    except Exception as e:
        exit_error = wrap_exit_error(e)
        logger.debug(f"🚪❌ Plugin failed with exit code {exit_error.exit_code}")
        if message := str(e):
            env.write_stderr(message.encode("utf-8") + b"\n")
        sys.exit(exit_error.exit_code)
    sys.exit(0)

# 🐍🏗️🔌
