"""`oaedit apply` command: replay an edit script against a document.

The script runs through an EditorSession, so every step is an undoable
command and `undo`/`redo` steps behave as they would in the editor.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
import yaml

from oaedit.editor.errors import DocumentLoadError, EditorError
from oaedit.editor.session import EditorSession
from oaedit.script import run_script


def register(app):
    @app.command()
    def apply(
        ctx: typer.Context,
        file: Path = typer.Argument(help="OpenAPI document (YAML or JSON)"),
        script: Path = typer.Argument(help="YAML edit script"),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result here instead of FILE"),
    ):
        """Apply an edit script and write the result."""
        session = EditorSession(ctx.obj)
        try:
            session.load_document(file)
        except DocumentLoadError as e:
            print(str(e))
            sys.exit(1)

        if not script.exists():
            print(f"Script not found: {script}")
            sys.exit(1)
        try:
            data = yaml.safe_load(script.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            print(f"Invalid script: {e}")
            sys.exit(1)

        try:
            log = run_script(session, data)
        except (EditorError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        for line in log:
            print(f"  ✓ {line}")

        target = output or file
        if session.is_dirty:
            session.save(target)
            print(f"Applied {len(log)} step(s), undo depth {session.engine.undo_count}; wrote {target}")
        else:
            print(f"Applied {len(log)} step(s); no changes")
