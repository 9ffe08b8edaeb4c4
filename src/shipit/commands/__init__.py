from __future__ import annotations

from typing import Callable

from shipit.client import Client

from .redeploy import redeploy

Command = Callable[[Client], int]

COMMANDS: dict[str, Command] = {
    "redeploy": redeploy,
}
