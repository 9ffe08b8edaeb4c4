from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, TypeVar

import cappa
from rich.console import Console

from .errors import ArgumentError

T = TypeVar("T", bound="GlobalArgs")


@dataclass
class GlobalArgs:
    """Options every command accepts, on top of its own."""

    command: Annotated[str | None, cappa.Arg()] = None
    target: Annotated[str | None, cappa.Arg()] = None
    help: Annotated[bool, cappa.Arg(short="-h", long="--help")] = False
    cwd: Annotated[str | None, cappa.Arg(long="--cwd", value_name="DIR")] = None
    local_config: Annotated[
        str | None, cappa.Arg(short="-A", long="--local-config", value_name="FILE")
    ] = None
    global_config: Annotated[
        str | None, cappa.Arg(short="-Q", long="--global-config", value_name="DIR")
    ] = None
    token: Annotated[
        str | None, cappa.Arg(short="-t", long="--token", value_name="TOKEN")
    ] = None
    no_color: Annotated[bool, cappa.Arg(long="--no-color")] = False


def get_args(argv: list[str], spec: type[T]) -> T:
    """
    Parse ``argv`` (without the program name) into ``spec``.

    Help is rendered by each command itself, so cappa's help and completion
    arguments are turned off and ``--help`` is just another flag. cappa's own
    output is silenced, the caller reports the ``ArgumentError``.
    """
    silent = cappa.Output(
        output_console=Console(quiet=True), error_console=Console(quiet=True)
    )
    try:
        return cappa.parse(
            spec, argv=argv, help=False, completion=False, output=silent
        )
    except cappa.Exit as e:
        name = argv[0] if argv else "shipit"
        usage = f"Run `shipit {name} --help` for usage information."
        if e.message:
            raise ArgumentError(f"{e.message}. {usage}") from e
        raise ArgumentError(f"Invalid arguments. {usage}") from e
