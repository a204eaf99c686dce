"""
Protocol introspection flags.

Every plugin answers two flags besides its procedures:

    --plugin-protocol   prints the protocol version
    --plugin-spec       prints the JSON-encoded Spec

A flag prefix namespaces both flags, e.g. prefix `foo` gives
`--foo-plugin-protocol` and `--foo-plugin-spec`, so that they cannot collide
with flags a plugin already uses for other purposes.
"""

PROTOCOL_FLAG_SUFFIX = "plugin-protocol"
SPEC_FLAG_SUFFIX = "plugin-spec"


def full_flag(flag_prefix: str | None, suffix: str) -> str:
    """Returns the complete flag for a suffix, with the prefix inserted when one is set."""
    if flag_prefix:
        return f"--{flag_prefix}-{suffix}"
    return f"--{suffix}"


def protocol_flag(flag_prefix: str | None = None) -> str:
    return full_flag(flag_prefix, PROTOCOL_FLAG_SUFFIX)


def spec_flag(flag_prefix: str | None = None) -> str:
    return full_flag(flag_prefix, SPEC_FLAG_SUFFIX)

# 🐍🏗️🔌
