from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from click.testing import CliRunner

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from main import cli


def write_config(tmp_path: Path) -> Path:
    cfg_path = tmp_path / "cfg.ini"
    cfg_path.write_text(
        "\n".join(
            [
                "[LOG]",
                f"dir = {tmp_path}",
                "file = dialogs.log",
                "format = json",
                "active = false",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return cfg_path


def test_logs_show_filters_by_event(tmp_path: Path):
    cfg_path = write_config(tmp_path)
    lines = [
        {
            "ts": "2026-01-01T00:00:00.000000Z",
            "run_id": "r1",
            "event": "ask",
            "component": "core.confirmation",
            "aspect": "dialogs",
            "severity": "info",
            "data": {"variant": "modal"},
        },
        {
            "ts": "2026-01-01T00:00:01.000000Z",
            "run_id": "r1",
            "event": "settle",
            "component": "core.confirmation",
            "aspect": "dialogs",
            "severity": "info",
            "data": {"variant": "modal", "how": "confirm", "value": True},
        },
    ]
    (tmp_path / "dialogs.log").write_text("\n".join(json.dumps(x) for x in lines) + "\nnot json\n", encoding="utf-8")

    runner = CliRunner()
    res = runner.invoke(cli, ["-c", str(cfg_path), "logs", "show", "--event", "settle", "--json"])
    assert res.exit_code == 0
    out_lines = [l for l in res.output.splitlines() if l.strip()]
    assert len(out_lines) == 1
    assert json.loads(out_lines[0])["data"]["how"] == "confirm"

    res = runner.invoke(cli, ["-c", str(cfg_path), "logs", "show", "--aspect", "dialogs"])
    assert res.exit_code == 0
    out_lines = [l for l in res.output.splitlines() if l.strip()]
    assert len(out_lines) == 2
    assert "dialogs:ask core.confirmation variant=modal" in out_lines[0]


def test_logs_show_without_files(tmp_path: Path):
    cfg_path = tmp_path / "cfg.ini"
    cfg_path.write_text(f"[LOG]\ndir = {tmp_path / 'empty'}\nactive = false\n", encoding="utf-8")
    res = CliRunner().invoke(cli, ["-c", str(cfg_path), "logs", "show"])
    assert res.exit_code == 0
    assert "No log files found" in res.output


def test_logs_show_limit_keeps_most_recent(tmp_path: Path):
    cfg_path = write_config(tmp_path)
    lines = [
        {"ts": f"2026-01-01T00:00:0{i}.000000Z", "event": "settle", "aspect": "dialogs",
         "component": "core.confirmation", "severity": "info", "data": {"how": how}}
        for i, how in enumerate(["confirm", "cancel", "dismiss"])
    ]
    (tmp_path / "dialogs.log").write_text("\n".join(json.dumps(x) for x in lines) + "\n", encoding="utf-8")

    res = CliRunner().invoke(cli, ["-c", str(cfg_path), "logs", "show", "-n", "2", "--json"])
    assert res.exit_code == 0
    hows = [json.loads(l)["data"]["how"] for l in res.output.splitlines() if l.strip()]
    assert hows == ["cancel", "dismiss"]
