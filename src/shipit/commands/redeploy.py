from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import cappa
from rich.markup import escape
from rich.pretty import pretty_repr

from shipit.args import GlobalArgs, get_args
from shipit.client import Client
from shipit.deployments import get_deployment_by_id_or_url
from shipit.errors import ArgumentError, handle_error
from shipit.link import EarlyExit, Linked, ensure_link
from shipit.paths import validate_paths
from shipit.scope import get_scope

HELP = """
  [bold]▲ shipit redeploy[/bold] \\[deploymentId|deploymentName]

  Rebuild and deploy a previous deployment.

  [dim]Options:[/dim]

    -h, --help                     Output usage information
    -A [bold underline]FILE[/bold underline], --local-config=[bold underline]FILE[/bold underline]   Path to the local `shipit.json` file
    -Q [bold underline]DIR[/bold underline], --global-config=[bold underline]DIR[/bold underline]    Path to the global `.shipit` directory
    -d, --debug                    Debug mode \\[off]
    --no-color                     No color mode \\[off]
    -t [bold underline]TOKEN[/bold underline], --token=[bold underline]TOKEN[/bold underline]        Login token
    -y, --yes                      Skip questions when setting up new project using default scope and settings

  [dim]Examples:[/dim]

  [grey50]–[/grey50] Redeploy a deployment using id or url

    [cyan]$ shipit redeploy <deployment id/url>[/cyan]
"""


@cappa.command(name="redeploy", help="Rebuild and deploy a previous deployment")
@dataclass
class RedeployArgs(GlobalArgs):
    debug: Annotated[bool, cappa.Arg(short="-d", long="--debug")] = False
    yes: Annotated[bool, cappa.Arg(short="-y", long="--yes")] = False


def redeploy(client: Client) -> int:
    try:
        args = get_args(client.argv[1:], RedeployArgs)
    except ArgumentError as e:
        handle_error(e, client.stdout)
        return 1
    client.apply_global_args(args)

    if args.help or args.command == "help":
        client.stdout.output(HELP)
        return 2

    # ensure the current directory is good
    cwd = args.cwd or client.cwd
    path_validation = validate_paths(client, [cwd])
    if not path_validation.valid:
        return path_validation.exit_code

    # ensure the current directory is a linked project
    match ensure_link(
        "redeploy", client, path_validation.path, auto_confirm=args.yes
    ):
        case EarlyExit(code=code):
            return code
        case Linked(project=project):
            pass

    deploy_id = args.target or "status"
    context_name = get_scope(client).context_name

    deployment = get_deployment_by_id_or_url(
        client=client, context_name=context_name, deploy_id=deploy_id
    )

    client.stdout.output(
        escape(pretty_repr({"project": project, "deployment": deployment}))
    )
    return 0
