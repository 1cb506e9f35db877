"""
CLI module for labgraph.

The command-line interface providing show, edges, convert and shell commands.
"""

from labgraph_cli.main import app

__all__ = ["app"]
