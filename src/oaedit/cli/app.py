"""Main CLI application wiring for oaedit.

  oaedit show petstore.yaml
  oaedit locate petstore.yaml /paths/~1pets/get/responses/404
  oaedit apply petstore.yaml edits.yml --output out.yaml
"""

import sys

import typer

from oaedit.config import configure_logging, load_config

app = typer.Typer(add_completion=False, help="oaedit — scripted OpenAPI document editing")


@app.callback()
def main(ctx: typer.Context):
    """oaedit CLI."""
    try:
        cfg = load_config()
    except ValueError as e:
        print(f"Invalid config: {e}")
        sys.exit(1)
    configure_logging(cfg)
    ctx.obj = cfg


# =============================================================================
# Commands
# =============================================================================

from oaedit.cli import show as show_cmd
from oaedit.cli import locate as locate_cmd
from oaedit.cli import apply as apply_cmd

show_cmd.register(app)
locate_cmd.register(app)
apply_cmd.register(app)
