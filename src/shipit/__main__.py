from __future__ import annotations

import sys

from rich.traceback import install

from shipit.client import Client
from shipit.commands import COMMANDS
from shipit.errors import ShipitError, handle_error


def run(client: Client) -> int:
    name = client.argv[1] if len(client.argv) > 1 else None
    # `shipit help <command>` is the same as `shipit <command> --help`
    if name == "help" and len(client.argv) > 2:
        name = client.argv[2]
        client.argv = [client.argv[0], "help", *client.argv[3:]]
    if name == "help":
        client.stdout.output(f"Available commands: {', '.join(sorted(COMMANDS))}")
        return 2
    command = COMMANDS.get(name) if name else None
    if command is None:
        if name:
            client.stdout.error(f"Unknown command `{name}`")
        client.stdout.output(f"Available commands: {', '.join(sorted(COMMANDS))}")
        return 1
    try:
        return command(client)
    except ShipitError as e:
        handle_error(e, client.stdout)
        return 1


def main():
    install(show_locals=True)
    client = Client(argv=sys.argv)
    try:
        code = run(client)
    finally:
        client.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
