"""`oaedit locate` command: resolve a pointer the way the editor resolves a selection."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from oaedit.editor.errors import DocumentLoadError
from oaedit.editor.navigation import (
    resolve_navigation_object,
    resolve_nearest_existing,
    resolve_nearest_operation,
)
from oaedit.editor.session import EditorSession
from oaedit.model.paths import NodePath, create_node_path


def register(app):
    @app.command()
    def locate(
        ctx: typer.Context,
        file: Path = typer.Argument(help="OpenAPI document (YAML or JSON)"),
        pointer: str = typer.Argument(help="JSON pointer, e.g. /paths/~1pets/get"),
    ):
        """Show the nearest existing node, its navigation object and operation."""
        session = EditorSession(ctx.obj)
        try:
            doc = session.load_document(file)
            path = NodePath.parse(pointer)
        except (DocumentLoadError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        nearest = resolve_nearest_existing(path, doc)
        target = resolve_navigation_object(nearest, doc)
        operation = resolve_nearest_operation(path, doc)

        exact = "" if create_node_path(nearest) == path else "  (partial)"
        print(f"Pointer:    {path}")
        print(f"Nearest:    {create_node_path(nearest)} [{nearest.kind}]{exact}")
        print(f"Navigation: {target.type} {create_node_path(target.object)}")
        if operation is not None:
            print(f"Operation:  {create_node_path(operation)}")
        else:
            print("Operation:  (none)")
