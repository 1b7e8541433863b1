"""REST server for block and workflow execution."""

from block_workflows.server.app import create_app

__all__ = ["create_app"]
