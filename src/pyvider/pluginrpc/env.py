"""
The process boundary seen by servers and handlers.

An `Env` bundles the argument vector and the standard streams of one
invocation. Servers never read `sys.argv` or the process streams directly,
which lets the same server run as a real process or in memory.
"""

import io
import sys
from typing import BinaryIO

from attrs import define, field


@define
class Env:
    """
    Arguments and streams for a single invocation.

    Attributes:
        args: The arguments following the program name.
        stdin: Binary stream the request envelope is read from.
        stdout: Binary stream the response envelope is written to.
        stderr: Binary stream for diagnostics.
    """

    args: list[str] = field(factory=list, converter=list)
    stdin: BinaryIO = field(factory=io.BytesIO)
    stdout: BinaryIO = field(factory=io.BytesIO)
    stderr: BinaryIO = field(factory=io.BytesIO)

    @classmethod
    def from_os(cls) -> "Env":
        """Returns the Env of the current process."""
        return cls(
            args=sys.argv[1:],
            stdin=sys.stdin.buffer,
            stdout=sys.stdout.buffer,
            stderr=sys.stderr.buffer,
        )

    def write_stdout(self, data: bytes) -> None:
        self.stdout.write(data)
        self.stdout.flush()

    def write_stderr(self, data: bytes) -> None:
        self.stderr.write(data)
        self.stderr.flush()

# 🐍🏗️🔌
