# tests/fixtures/__init__.py

from tests.fixtures.streams import (
    TerminalBytesIO,
    BrokenPipeBytesIO,
    make_env,
)
from tests.fixtures.echo import (
    CountingRunner,
    echo_spec,
    echo_server,
    echo_client,
    counting_runner,
)
from tests.fixtures.plugins import (
    write_plugin_script,
    echo_plugin_path,
    failing_plugin_path,
    sleeping_plugin_path,
    env_plugin_path,
)

__all__ = [
    # streams
    "TerminalBytesIO",
    "BrokenPipeBytesIO",
    "make_env",
    # echo
    "CountingRunner",
    "echo_spec",
    "echo_server",
    "echo_client",
    "counting_runner",
    # plugins
    "write_plugin_script",
    "echo_plugin_path",
    "failing_plugin_path",
    "sleeping_plugin_path",
    "env_plugin_path",
]
