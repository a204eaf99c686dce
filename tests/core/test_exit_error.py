# tests/core/test_exit_error.py

import pytest

from pyvider.pluginrpc.code import Code
from pyvider.pluginrpc.error import Error
from pyvider.pluginrpc.exception import PluginRPCError, UnrecognizedArgsError
from pyvider.pluginrpc.exit_error import EXIT_CODES, ExitError, exit_code_for, wrap_exit_error


@pytest.mark.parametrize("code", [code for code in Code if code != Code.UNSPECIFIED])
def test_exit_code_for_every_code(code):
    assert exit_code_for(code) == int(code)
    assert EXIT_CODES[code] == int(code)


def test_exit_code_for_no_error():
    assert exit_code_for(None) == 0
    assert exit_code_for(Code.UNSPECIFIED) == 0
    assert Code.UNSPECIFIED not in EXIT_CODES


def test_exit_error_requires_nonzero_code():
    with pytest.raises(ValueError):
        ExitError(0)


def test_exit_error_defaults():
    exit_error = ExitError(3)
    assert isinstance(exit_error, PluginRPCError)
    assert exit_error.exit_code == 3
    assert exit_error.code == 3
    assert str(exit_error) == "plugin exited with code 3"
    assert exit_error.stdout == b""
    assert exit_error.stderr == b""


def test_wrap_exit_error_none():
    assert wrap_exit_error(None) is None


def test_wrap_exit_error_from_error():
    error = Error(Code.DEADLINE_EXCEEDED, ValueError("hello"))
    exit_error = wrap_exit_error(error)
    assert exit_error.exit_code == 4
    assert str(exit_error) == "deadline_exceeded: hello"
    assert exit_error.__cause__ is error


def test_wrap_exit_error_from_other_exception():
    cause = UnrecognizedArgsError(["nope"])
    exit_error = wrap_exit_error(cause)
    assert exit_error.exit_code == int(Code.UNKNOWN)
    assert exit_error.__cause__ is cause


def test_wrap_exit_error_passes_exit_errors_through():
    exit_error = ExitError(9, "failed", stdout=b"out")
    assert wrap_exit_error(exit_error) is exit_error
