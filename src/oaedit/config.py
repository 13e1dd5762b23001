"""Editor configuration.

Read from `.oaedit/config.yml` in the working directory when present:

    editor:
      max_undo_size: 200
    logging:
      level: DEBUG
      file: .oaedit/editor.log

OAEDIT_MAX_UNDO overrides editor.max_undo_size.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from oaedit.editor.undo import DEFAULT_MAX_UNDO_SIZE

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class EditorConfig:
    max_undo_size: int = DEFAULT_MAX_UNDO_SIZE
    log_level: str = "WARNING"
    log_file: Optional[Path] = None


def config_path(work_dir: Path | None = None) -> Path:
    return (work_dir or Path.cwd()).resolve() / ".oaedit" / "config.yml"


def load_config(work_dir: Path | None = None) -> EditorConfig:
    path = config_path(work_dir)
    raw = yaml.safe_load(path.read_text()) if path.exists() else None
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config (expected a mapping): {path}")

    editor = raw.get("editor") or {}
    logs = raw.get("logging") or {}

    max_undo_size = editor.get("max_undo_size", DEFAULT_MAX_UNDO_SIZE)
    env = os.environ.get("OAEDIT_MAX_UNDO")
    if env is not None:
        max_undo_size = env

    try:
        max_undo_size = int(max_undo_size)
    except (TypeError, ValueError):
        raise ValueError(f"max_undo_size must be an integer, got {max_undo_size!r}") from None
    if max_undo_size < 1:
        raise ValueError(f"max_undo_size must be at least 1, got {max_undo_size}")

    level = str(logs.get("level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level}")

    log_file = logs.get("file")
    return EditorConfig(
        max_undo_size=max_undo_size,
        log_level=level,
        log_file=Path(log_file) if log_file else None,
    )


def configure_logging(cfg: EditorConfig) -> None:
    if cfg.log_file is not None:
        cfg.log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(filename=cfg.log_file, level=cfg.log_level, format=LOG_FORMAT)
    else:
        logging.basicConfig(level=cfg.log_level, format=LOG_FORMAT)
