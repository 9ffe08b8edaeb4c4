from pathlib import Path
from unittest.mock import patch

from shipit.paths import validate_paths


def test_valid_directory(client, project_dir):
    result = validate_paths(client, [project_dir])
    assert result.valid
    assert result.exit_code == 0
    assert result.path == project_dir.resolve()


def test_relative_path_resolves_against_client_cwd(client, project_dir):
    (project_dir / "web").mkdir()
    result = validate_paths(client, ["web"])
    assert result.path == (project_dir / "web").resolve()


def test_more_than_one_path(client, project_dir, tmp_path, capsys):
    result = validate_paths(client, [project_dir, tmp_path])
    assert not result.valid
    assert result.exit_code == 1
    assert "more than one path" in capsys.readouterr().err


def test_missing_directory(client, project_dir, capsys):
    result = validate_paths(client, [project_dir / "nope"])
    assert (result.valid, result.exit_code) == (False, 1)
    assert "does not exist" in capsys.readouterr().err


def test_file_is_rejected(client, project_dir, capsys):
    file = project_dir / "index.html"
    file.write_text("<h1>hi</h1>")
    result = validate_paths(client, [file])
    assert (result.valid, result.exit_code) == (False, 1)
    assert "is not a directory" in capsys.readouterr().err


def test_home_directory_is_declined_when_not_interactive(
    client, project_dir, monkeypatch, capsys
):
    monkeypatch.setattr(Path, "home", lambda: project_dir)
    result = validate_paths(client, [project_dir])
    assert (result.valid, result.exit_code) == (False, 0)
    assert "Canceled" in capsys.readouterr().out


def test_home_directory_can_be_confirmed(make_client, project_dir, monkeypatch):
    monkeypatch.setattr(Path, "home", lambda: project_dir)
    client = make_client(interactive=True)
    with patch("rich.prompt.Confirm.ask", return_value=True) as ask:
        result = validate_paths(client, [project_dir])
    ask.assert_called_once()
    assert result.valid
