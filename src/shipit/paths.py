from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from .client import Client


@dataclass(frozen=True, slots=True)
class PathValidation:
    valid: bool
    exit_code: int = 0
    path: Path | None = None


def validate_paths(client: Client, paths: list[str | Path]) -> PathValidation:
    if len(paths) > 1:
        client.stdout.error("Can't run `shipit` with more than one path.")
        return PathValidation(valid=False, exit_code=1)

    path = Path(paths[0]).expanduser()
    if not path.is_absolute():
        path = client.cwd / path
    path = path.resolve()

    if not path.exists():
        client.stdout.error(
            f"The specified directory “{escape(str(path))}” does not exist."
        )
        return PathValidation(valid=False, exit_code=1)
    if not path.is_dir():
        client.stdout.error(f"“{escape(str(path))}” is not a directory.")
        return PathValidation(valid=False, exit_code=1)

    if path == Path.home().resolve():
        if not client.confirm(
            "[yellow]You are running in your home directory. Do you want to continue?[/yellow]",
            default=False,
        ):
            client.stdout.output("Canceled")
            return PathValidation(valid=False, exit_code=0)

    return PathValidation(valid=True, path=path)
