"""Editor configuration: .oaedit/config.yml plus environment override."""

from pathlib import Path

import pytest
import yaml

from oaedit.config import EditorConfig, load_config
from oaedit.editor.session import EditorSession


def write_config(work_dir: Path, cfg: dict) -> None:
    oaedit_dir = work_dir / ".oaedit"
    oaedit_dir.mkdir()
    (oaedit_dir / "config.yml").write_text(yaml.safe_dump(cfg))


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv("OAEDIT_MAX_UNDO", raising=False)


def test_defaults_without_config(tmp_path):
    assert load_config(tmp_path) == EditorConfig()


def test_reads_config_file(tmp_path):
    write_config(tmp_path, {"editor": {"max_undo_size": 5}, "logging": {"level": "debug", "file": "edit.log"}})
    cfg = load_config(tmp_path)
    assert cfg.max_undo_size == 5
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == Path("edit.log")


def test_empty_config_file(tmp_path):
    (tmp_path / ".oaedit").mkdir()
    (tmp_path / ".oaedit" / "config.yml").write_text("")
    assert load_config(tmp_path) == EditorConfig()


def test_env_overrides_file(tmp_path, monkeypatch):
    write_config(tmp_path, {"editor": {"max_undo_size": 5}})
    monkeypatch.setenv("OAEDIT_MAX_UNDO", "7")
    assert load_config(tmp_path).max_undo_size == 7


@pytest.mark.parametrize("value", ["zero", "0"])
def test_invalid_max_undo(tmp_path, monkeypatch, value):
    monkeypatch.setenv("OAEDIT_MAX_UNDO", value)
    with pytest.raises(ValueError):
        load_config(tmp_path)


def test_invalid_log_level(tmp_path):
    write_config(tmp_path, {"logging": {"level": "LOUD"}})
    with pytest.raises(ValueError):
        load_config(tmp_path)


def test_session_uses_configured_history_size():
    session = EditorSession(EditorConfig(max_undo_size=3))
    assert session.engine.history.max_undo_size == 3