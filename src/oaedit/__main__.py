"""
oaedit CLI entrypoint.

Executed via:
  python -m oaedit
"""

from oaedit.cli.app import app

if __name__ == "__main__":
    app()
