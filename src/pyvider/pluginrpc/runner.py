"""
Runners: how a Client gets a call executed.

A Runner takes the argument vector and the request bytes of one call and
returns what the plugin wrote to stdout. Two runners exist:

- `ExecRunner` starts the plugin executable as a subprocess per call.
- `ServerRunner` serves the call in-process with a `Server`, which is useful
  in tests and for composing several plugins into one program.

A run that fails raises `ExitError`, carrying the plugin's stdout so that a
structured error envelope can still be decoded by the Client.

Cancellation: cancelling a call that runs through `ExecRunner` terminates the
plugin process, waits up to the configured grace period, kills it if it is
still alive and re-raises `asyncio.CancelledError`.
"""

import asyncio
import io
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence

from attrs import define, field

from pyvider.telemetry import logger

from pyvider.pluginrpc.config import pluginrpc_config
from pyvider.pluginrpc.env import Env
from pyvider.pluginrpc.exception import TransportError
from pyvider.pluginrpc.exit_error import ExitError, wrap_exit_error
from pyvider.pluginrpc.server import Server


class Runner(ABC):
    """Executes one plugin call."""

    @abstractmethod
    async def run(self, args: Sequence[str], stdin: bytes = b"") -> bytes:
        """
        Runs the plugin with the given arguments and request bytes.

        Returns:
            Everything the plugin wrote to stdout.

        Raises:
            ExitError: If the plugin failed.
            TransportError: If the plugin could not be run at all.
        """


@define
class ExecRunner(Runner):
    """
    Runs a plugin executable as a subprocess.

    Attributes:
        program: Name or path of the plugin executable, resolved through PATH.
        env: Extra environment variables for the plugin, on top of ours.
        inherit_stderr: Forward the plugin's stderr instead of capturing it.
            Defaults to `PLUGIN_EXEC_INHERIT_STDERR`.
        kill_grace: Seconds between terminate and kill on cancellation.
            Defaults to `PLUGIN_EXEC_KILL_GRACE`.
    """

    program: str = field()
    env: dict[str, str] | None = field(default=None)
    inherit_stderr: bool | None = field(default=None)
    kill_grace: float | None = field(default=None)

    async def run(self, args: Sequence[str], stdin: bytes = b"") -> bytes:
        config = pluginrpc_config()
        inherit_stderr = self.inherit_stderr if self.inherit_stderr is not None else config.inherit_stderr()

        process_env = None
        if self.env:
            process_env = os.environ.copy()
            process_env.update(self.env)

        logger.debug(f"🏃🚀 Launching plugin: {[self.program, *args]}")
        try:
            process = await asyncio.create_subprocess_exec(
                self.program,
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=None if inherit_stderr else asyncio.subprocess.PIPE,
                env=process_env,
            )
        except OSError as e:
            logger.error(f"🏃❌ Failed to launch plugin {self.program}: {e}")
            raise TransportError(f"failed to launch plugin {self.program!r}: {e}") from e

        try:
            stdout, stderr = await process.communicate(stdin)
        except asyncio.CancelledError:
            logger.warning(f"🏃🛑 Call to {self.program} cancelled, stopping plugin process {process.pid}")
            await self._stop(process, config.kill_grace())
            raise

        stdout = stdout or b""
        stderr = stderr or b""
        if process.returncode != 0:
            logger.debug(f"🏃⚠️ Plugin {self.program} exited with code {process.returncode}")
            message = stderr.decode("utf-8", errors="replace").strip() or None
            raise ExitError(process.returncode, message, stdout=stdout, stderr=stderr)

        logger.debug(f"🏃✅ Plugin {self.program} completed")
        return stdout

    async def _stop(self, process: asyncio.subprocess.Process, default_grace: float) -> None:
        grace = self.kill_grace if self.kill_grace is not None else default_grace
        if process.returncode is not None:
            return
        try:
            process.terminate()
            await asyncio.wait_for(process.wait(), timeout=grace)
        except ProcessLookupError:
            return
        except asyncio.TimeoutError:
            logger.warning(f"🏃🔪 Plugin process {process.pid} ignored terminate, killing it")
            try:
                process.kill()
            except ProcessLookupError:
                return
            await process.wait()


@define
class ServerRunner(Runner):
    """
    Serves calls in-process with a Server, without starting a process.

    Failures are reported exactly like a process would report them: as an
    ExitError with the exit status derived from the exception, the output the
    server wrote so far, and the error message on stderr.
    """

    server: Server = field()

    async def run(self, args: Sequence[str], stdin: bytes = b"") -> bytes:
        stdout = io.BytesIO()
        stderr = io.BytesIO()
        env = Env(args=list(args), stdin=io.BytesIO(stdin), stdout=stdout, stderr=stderr)
        logger.debug(f"🏃🧪 Serving in-process call {list(args)}")
        try:
            await self.server.serve(env)
        except Exception as e:
            exit_error = wrap_exit_error(e)
            message = str(e)
            if message:
                env.write_stderr(message.encode("utf-8") + b"\n")
            raise ExitError(
                exit_error.exit_code,
                message or None,
                stdout=stdout.getvalue(),
                stderr=stderr.getvalue(),
            ) from e
        return stdout.getvalue()


def new_exec_runner(program: str, env: dict[str, str] | None = None) -> ExecRunner:
    return ExecRunner(program=program, env=env)


def new_server_runner(server: Server) -> ServerRunner:
    return ServerRunner(server=server)

# 🐍🏗️🔌
