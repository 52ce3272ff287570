from __future__ import annotations

import json

from typer.testing import CliRunner

from treesync.cli import app

from conftest import T0, at, mk_info, write_inventory

runner = CliRunner()


def _inventories(tmp_path):
    local = write_inventory(
        tmp_path / "local.json",
        {
            "new.txt": mk_info("new.txt", size=1),
            "edit.txt": mk_info("edit.txt", size=5, modified=at(60)),
            "same.txt": mk_info("same.txt", size=9),
            "node_modules/x.js": mk_info("node_modules/x.js", size=1),
        },
    )
    remote = write_inventory(
        tmp_path / "remote.json",
        {
            "gone.txt": mk_info("gone.txt", size=1, root="/remote"),
            "edit.txt": mk_info("edit.txt", size=4, modified=T0, root="/remote"),
            "same.txt": mk_info("same.txt", size=9, root="/remote"),
        },
    )
    return local, remote


def test_plan_json_output(tmp_path) -> None:
    local, remote = _inventories(tmp_path)
    config = tmp_path / "config.toml"
    config.write_text('[compare]\ndirection = "local_to_remote"\n', encoding="utf-8")

    result = runner.invoke(
        app, ["plan", str(local), str(remote), "--config", str(config), "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    actions = {
        op["comparison"]["relative_path"]: op["action"] for op in payload["operations"]
    }
    assert actions == {
        "edit.txt": "upload",
        "gone.txt": "delete_remote",
        "new.txt": "upload",
    }
    assert payload["options"]["direction"] == "local_to_remote"


def test_plan_direction_flag_and_extra_exclude(tmp_path) -> None:
    local, remote = _inventories(tmp_path)
    config = tmp_path / "config.toml"
    config.write_text("[compare]\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "plan",
            str(local),
            str(remote),
            "--config",
            str(config),
            "--direction",
            "remote_to_local",
            "--exclude",
            "gone",
            "--json",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    actions = {
        op["comparison"]["relative_path"]: op["action"] for op in payload["operations"]
    }
    assert actions == {"edit.txt": "skip", "new.txt": "delete_local"}


def test_plan_table_output(tmp_path) -> None:
    local, remote = _inventories(tmp_path)
    config = tmp_path / "config.toml"
    config.write_text("[compare]\n", encoding="utf-8")

    result = runner.invoke(
        app, ["plan", str(local), str(remote), "--config", str(config)]
    )

    assert result.exit_code == 0, result.output
    assert "new.txt" in result.output
    assert "gone.txt" in result.output
    assert "same.txt" not in result.output
    assert "node_modules" not in result.output
    assert "Upload: 2" in result.output


def test_plan_rejects_bad_inventory(tmp_path) -> None:
    local, _remote = _inventories(tmp_path)
    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2]", encoding="utf-8")

    result = runner.invoke(app, ["plan", str(local), str(broken)])

    assert result.exit_code == 1
    assert "Invalid inventory" in result.output


def test_plan_rejects_bad_config(tmp_path) -> None:
    local, remote = _inventories(tmp_path)
    config = tmp_path / "config.toml"
    config.write_text('[compare]\ndirection = "up"\n', encoding="utf-8")

    result = runner.invoke(
        app, ["plan", str(local), str(remote), "--config", str(config)]
    )

    assert result.exit_code == 1
    assert "Invalid config" in result.output


def test_defaults_command() -> None:
    result = runner.invoke(app, ["defaults"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["direction"] == "bidirectional"
    assert "node_modules" in payload["exclude_patterns"]


def test_plan_rejects_inventory_with_invalid_utf8(tmp_path) -> None:
    local, _remote = _inventories(tmp_path)
    broken = tmp_path / "bad.json"
    broken.write_bytes(b'{"\xff": 1}')

    result = runner.invoke(app, ["plan", str(local), str(broken)])

    assert result.exit_code == 1
    assert "Invalid inventory" in result.output


def test_plan_rejects_infinite_size(tmp_path) -> None:
    local, _remote = _inventories(tmp_path)
    broken = tmp_path / "huge.json"
    broken.write_text(
        '{"a.txt": {"name": "a.txt", "path": "/a.txt", "size": Infinity}}',
        encoding="utf-8",
    )

    result = runner.invoke(app, ["plan", str(local), str(broken)])

    assert result.exit_code == 1
    assert "Invalid inventory" in result.output


def test_plan_rejects_config_with_invalid_utf8(tmp_path) -> None:
    local, remote = _inventories(tmp_path)
    config = tmp_path / "config.toml"
    config.write_bytes(b'[compare]\ndirection = "\xff"\n')

    result = runner.invoke(
        app, ["plan", str(local), str(remote), "--config", str(config)]
    )

    assert result.exit_code == 1
    assert "Invalid config" in result.output
