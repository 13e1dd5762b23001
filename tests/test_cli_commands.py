"""CLI commands, run as a subprocess the way a user would."""

import os
import subprocess
import sys
from pathlib import Path

import pytest
import yaml


# ── helpers ──────────────────────────────────────────────


def run(cwd: Path, *args: str, env: dict | None = None) -> subprocess.CompletedProcess:
    """Run `python -m oaedit ARGS` in a work directory."""
    return subprocess.run(
        [sys.executable, "-m", "oaedit", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        env={**os.environ, **(env or {})},
    )


@pytest.fixture
def api_file(tmp_path, petstore):
    path = tmp_path / "petstore.yaml"
    path.write_text(yaml.safe_dump(petstore, sort_keys=False))
    return path


def write_script(tmp_path: Path, steps: list) -> Path:
    path = tmp_path / "edits.yml"
    path.write_text(yaml.safe_dump({"steps": steps}, sort_keys=False))
    return path


# ── show ─────────────────────────────────────────────────


def test_show(tmp_path, api_file):
    res = run(tmp_path, "show", str(api_file))
    assert res.returncode == 0, res.stderr
    assert "Pet Store 1.0.0 (openapi 3.0.3)" in res.stdout
    assert "/pets/{petId}" in res.stdout
    assert "showPetById" in res.stdout
    assert "  Pets" in res.stdout


def test_show_missing_file(tmp_path):
    res = run(tmp_path, "show", "nope.yaml")
    assert res.returncode == 1
    assert "Failed to load document" in res.stdout


def test_show_rejects_swagger(tmp_path):
    path = tmp_path / "old.yaml"
    path.write_text("swagger: '2.0'\ninfo: {title: Old, version: '1'}\n")
    res = run(tmp_path, "show", str(path))
    assert res.returncode == 1
    assert "Swagger 2.0" in res.stdout


# ── locate ───────────────────────────────────────────────


def test_locate_existing(tmp_path, api_file):
    res = run(tmp_path, "locate", str(api_file), "/components/schemas/Pet/properties/name")
    assert res.returncode == 0, res.stderr
    assert "Nearest:    /components/schemas/Pet/properties/name [schema]" in res.stdout
    assert "(partial)" not in res.stdout
    assert "Operation:  (none)" in res.stdout


def test_locate_partial(tmp_path, api_file):
    res = run(tmp_path, "locate", str(api_file), "/paths/~1pets/get/responses/404")
    assert res.returncode == 0, res.stderr
    assert "Nearest:    /paths/~1pets/get/responses [responses]  (partial)" in res.stdout
    assert "Navigation: pathItem /paths/~1pets" in res.stdout
    assert "Operation:  /paths/~1pets/get" in res.stdout


def test_locate_bad_pointer(tmp_path, api_file):
    res = run(tmp_path, "locate", str(api_file), "paths")
    assert res.returncode == 1
    assert "Invalid node path" in res.stdout


# ── apply ────────────────────────────────────────────────


def test_apply_writes_output(tmp_path, api_file):
    script = write_script(
        tmp_path,
        [
            {"set": {"target": "/info", "property": "title", "value": "Zoo"}},
            {"create-path": "/orders"},
            {"create-operation": {"path": "/orders", "method": "get"}},
            "undo",
        ],
    )
    out = tmp_path / "out.json"
    res = run(tmp_path, "apply", str(api_file), str(script), "--output", str(out))
    assert res.returncode == 0, res.stderr
    assert "create-path /orders" in res.stdout
    assert f"wrote {out}" in res.stdout

    data = yaml.safe_load(out.read_text())
    assert data["info"]["title"] == "Zoo"
    assert data["paths"]["/orders"] == {}
    # input untouched
    assert yaml.safe_load(api_file.read_text())["info"]["title"] == "Pet Store"


def test_apply_in_place(tmp_path, api_file):
    script = write_script(tmp_path, [{"add-tag": {"name": "store"}}])
    res = run(tmp_path, "apply", str(api_file), str(script))
    assert res.returncode == 0, res.stderr
    tags = yaml.safe_load(api_file.read_text())["tags"]
    assert [t["name"] for t in tags] == ["pets", "store"]


def test_apply_failing_step(tmp_path, api_file):
    script = write_script(tmp_path, [{"set": {"target": "/paths/~1nope", "property": "summary", "value": "x"}}])
    before = api_file.read_text()
    res = run(tmp_path, "apply", str(api_file), str(script))
    assert res.returncode == 1
    assert "Failed to execute command" in res.stdout
    assert api_file.read_text() == before


def test_apply_unknown_step(tmp_path, api_file):
    script = write_script(tmp_path, ["frobnicate"])
    res = run(tmp_path, "apply", str(api_file), str(script))
    assert res.returncode == 1
    assert "unknown step 'frobnicate'" in res.stdout


def test_apply_missing_script(tmp_path, api_file):
    res = run(tmp_path, "apply", str(api_file), "missing.yml")
    assert res.returncode == 1
    assert "Script not found" in res.stdout


# ── config ───────────────────────────────────────────────


def test_invalid_config_reported(tmp_path, api_file):
    res = run(tmp_path, "show", str(api_file), env={"OAEDIT_MAX_UNDO": "lots"})
    assert res.returncode == 1
    assert "Invalid config" in res.stdout


def test_log_file_from_config(tmp_path, api_file):
    (tmp_path / ".oaedit").mkdir()
    (tmp_path / ".oaedit" / "config.yml").write_text(
        yaml.safe_dump({"logging": {"level": "DEBUG", "file": ".oaedit/editor.log"}})
    )
    script = write_script(tmp_path, [{"create-path": "/orders"}])
    res = run(tmp_path, "apply", str(api_file), str(script))
    assert res.returncode == 0, res.stderr
    assert "Executed create-path /orders" in (tmp_path / ".oaedit" / "editor.log").read_text()
