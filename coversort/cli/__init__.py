"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands.
"""
from coversort.cli.helpers import cli  # root group
from coversort.cli import sort_cmds  # noqa: F401

__all__ = ["cli"]
