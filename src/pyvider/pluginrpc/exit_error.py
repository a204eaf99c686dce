"""
Process exit status for plugin RPC failures.

A plugin process communicates failure in two ways: the error envelope on
stdout, and its exit status. `wrap_exit_error` derives the exit status from
any exception using a fixed code table, and Runners raise `ExitError` when a
plugin exits nonzero so that the client can still inspect what it wrote.
"""

from types import MappingProxyType

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.error import Error
from pyvider.pluginrpc.exception import PluginRPCError

# Exit status for each code; a successful run always exits 0.
EXIT_CODES = MappingProxyType({code: int(code) for code in Code if code != Code.UNSPECIFIED})


def exit_code_for(code: Code | None) -> int:
    if code is None or code == Code.UNSPECIFIED:
        return 0
    return EXIT_CODES[Code(code)]


class ExitError(PluginRPCError):
    """
    A plugin run that ended with a nonzero exit status.

    Attributes:
        exit_code: The process exit status, always nonzero.
        stdout: What the plugin wrote to stdout, which may hold an error envelope.
        stderr: Captured stderr, empty when stderr was forwarded.
    """

    def __init__(
        self,
        exit_code: int,
        message: str | None = None,
        stdout: bytes = b"",
        stderr: bytes = b"",
    ) -> None:
        if exit_code == 0:
            raise ValueError("ExitError requires a nonzero exit code")
        super().__init__(message or f"plugin exited with code {exit_code}", code=exit_code)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


def wrap_exit_error(exc: BaseException | None) -> ExitError | None:
    """
    Converts an exception into an ExitError.

    Returns None for None. ExitErrors are returned unchanged, Errors exit with
    the status mapped from their code, and any other exception exits as UNKNOWN.
    """
    if exc is None:
        return None
    if isinstance(exc, ExitError):
        return exc
    if isinstance(exc, Error):
        code = exc.code
    else:
        code = Code.UNKNOWN
    exit_error = ExitError(exit_code_for(code), str(exc))
    exit_error.__cause__ = exc
    return exit_error

# 🐍🏗️🔌
