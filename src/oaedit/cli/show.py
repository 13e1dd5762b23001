"""`oaedit show` command: summarize a document."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from oaedit.editor.errors import DocumentLoadError
from oaedit.editor.session import EditorSession


def register(app):
    @app.command()
    def show(
        ctx: typer.Context,
        file: Path = typer.Argument(help="OpenAPI document (YAML or JSON)"),
    ):
        """Show title, paths with their operations, and schemas."""
        session = EditorSession(ctx.obj)
        try:
            doc = session.load_document(file)
        except DocumentLoadError as e:
            print(str(e))
            sys.exit(1)

        info = doc.info
        title = info.title if info is not None else None
        version = info.version if info is not None else None
        print(f"{title or '(untitled)'} {version or ''}".rstrip() + f" (openapi {doc.openapi})")

        print("\nPaths:")
        if doc.paths is None or not doc.paths.entries:
            print("  (none)")
        else:
            for path_name, path_item in doc.paths.entries.items():
                print(f"  {path_name}")
                for method, operation in path_item.operations():
                    label = operation.operation_id or operation.summary or ""
                    print(f"    {method.upper():<7} {label}".rstrip())

        schemas = doc.components.get_map("schemas") if doc.components is not None else None
        print("\nSchemas:")
        if not schemas:
            print("  (none)")
        else:
            for name in schemas:
                print(f"  {name}")
