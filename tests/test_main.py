from unittest.mock import patch

import pytest

from shipit.__main__ import main, run


def test_unknown_command(make_client, capsys):
    assert run(make_client("deploy")) == 1
    captured = capsys.readouterr()
    assert "Unknown command" in captured.err
    assert "redeploy" in captured.out


def test_no_command(make_client, capsys):
    assert run(make_client()) == 1
    assert "Available commands: redeploy" in capsys.readouterr().out


def test_bare_help_lists_commands(make_client, capsys):
    assert run(make_client("help")) == 2
    captured = capsys.readouterr()
    assert "Available commands: redeploy" in captured.out
    assert "Unknown command" not in captured.err


def test_help_subcommand(make_client, capsys):
    assert run(make_client("help", "redeploy")) == 2
    assert "Rebuild and deploy a previous deployment." in capsys.readouterr().out


def test_unhandled_errors_become_exit_code_one(
    make_client, project_dir, link_project, tmp_path, capsys
):
    link_project(project_dir)
    empty = tmp_path / "empty"
    empty.mkdir()
    assert run(make_client("redeploy", global_config_dir=empty)) == 1
    assert "No existing credentials found" in capsys.readouterr().err


def test_main_exits_with_command_code(monkeypatch):
    monkeypatch.setattr("sys.argv", ["shipit", "redeploy", "--help"])
    with patch("shipit.__main__.install"), pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 2
