from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import msgspec
from rich.markup import escape
from rich.prompt import Prompt

from .client import Client
from .config import read_local_config
from .errors import APIError
from .models import Org, Project, ProjectLink, Team, UserResponse
from .scope import get_scope

LINK_DIR = ".shipit"
LINK_FILE = "project.json"

LINK_README = """\
> Why do I have a folder named ".shipit" in my project?
The ".shipit" folder is created when you link a directory to a shipit project.

> What does the "project.json" file contain?
The "project.json" file contains:
- The ID of the shipit project that you linked ("projectId")
- The ID of the user or team your shipit project is owned by ("orgId")

> Should I commit the ".shipit" folder?
No, you should not share the ".shipit" folder with anyone.
Upon creation, it will be automatically added to your ".gitignore" file.
"""


@dataclass(frozen=True, slots=True)
class Linked:
    org: Org
    project: Project


@dataclass(frozen=True, slots=True)
class EarlyExit:
    code: int


@dataclass(frozen=True, slots=True)
class NotLinked:
    pass


@dataclass(frozen=True, slots=True)
class LinkFailed:
    code: int


LinkedProject = Linked | EarlyExit
LinkStatus = Linked | NotLinked | LinkFailed


def read_project_link(path: Path) -> ProjectLink | None:
    link_file = path / LINK_DIR / LINK_FILE
    if not link_file.exists():
        return None
    return msgspec.json.decode(link_file.read_bytes(), type=ProjectLink)


def get_org_by_id(client: Client, org_id: str) -> Org | None:
    if org_id.startswith("team_"):
        try:
            team = client.fetch(f"/v1/teams/{org_id}", type=Team, use_current_team=False)
        except APIError as e:
            if e.status in (403, 404):
                return None
            raise
        return Org(type="team", id=team.id, slug=team.slug)

    user = client.fetch("/v2/user", type=UserResponse, use_current_team=False).user
    if user.id != org_id:
        return None
    return Org(type="user", id=user.id, slug=user.username)


def get_project(client: Client, id_or_name: str, org: Org) -> Project | None:
    params = {"teamId": org.id} if org.type == "team" else {}
    try:
        return client.fetch(
            f"/v9/projects/{quote(id_or_name, safe='')}",
            params=params,
            type=Project,
            use_current_team=False,
        )
    except APIError as e:
        if e.status == 404:
            return None
        raise


def get_linked_project(client: Client, path: Path) -> LinkStatus:
    try:
        link = read_project_link(path)
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        client.stdout.error(
            f"Couldn't read {LINK_DIR}/{LINK_FILE}: {escape(str(e))}. "
            f"Remove the `{LINK_DIR}` directory and run the command again."
        )
        return LinkFailed(1)
    if link is None:
        return NotLinked()

    settings_missing = (
        "Could not retrieve Project Settings. To link your project, "
        f"remove the `{LINK_DIR}` directory and run the command again."
    )
    org = get_org_by_id(client, link.org_id)
    if org is None:
        client.stdout.error(settings_missing)
        return LinkFailed(1)
    try:
        project = get_project(client, link.project_id, org)
    except APIError as e:
        if e.status != 403:
            raise
        client.stdout.error(
            f"Could not retrieve Project Settings. You don't have access to the project under {escape(org.slug)}."
        )
        return LinkFailed(1)
    if project is None:
        client.stdout.error(settings_missing)
        return LinkFailed(1)

    # later calls are made on behalf of the project's owner
    client.current_team = org.id if org.type == "team" else None
    return Linked(org=org, project=project)


def ensure_link(
    command_name: str, client: Client, path: Path, *, auto_confirm: bool = False
) -> LinkedProject:
    """
    Make sure ``path`` is linked to a remote project, setting the link up when
    it isn't. Returns the link or the exit code the command should end with.
    """
    match get_linked_project(client, path):
        case Linked() as linked:
            return linked
        case LinkFailed(code=code):
            return EarlyExit(code)
        case NotLinked():
            if not client.interactive and not auto_confirm:
                client.stdout.error(
                    f"Command `shipit {command_name}` requires confirmation. "
                    'Use option "--yes" to confirm.'
                )
                return EarlyExit(1)
            return setup_and_link(client, path, auto_confirm=auto_confirm)


def setup_and_link(
    client: Client, path: Path, *, auto_confirm: bool = False
) -> LinkedProject:
    if not auto_confirm and not client.confirm(
        f"Set up “{escape(str(path))}”?", default=True
    ):
        client.stdout.output("Canceled. Project not set up.")
        return EarlyExit(0)

    org = get_scope(client).org
    local_config = read_local_config(path, client.local_config_path)
    name = local_config.name or slugify(path.name)
    if not auto_confirm and client.interactive:
        name = Prompt.ask("What's your project's name?", default=name)

    project = get_project(client, name, org)
    if project is None:
        client.stdout.output(f"[blue]Creating project {escape(name)}[/blue]")
        params = {"teamId": org.id} if org.type == "team" else {}
        project = client.fetch(
            "/v11/projects",
            method="POST",
            params=params,
            json={"name": name},
            type=Project,
            use_current_team=False,
        )

    link_folder_to_project(path, ProjectLink(org_id=org.id, project_id=project.id))
    client.current_team = org.id if org.type == "team" else None
    client.stdout.output(
        f"[green]Linked to {escape(org.slug)}/{escape(project.name)}[/green] "
        f"(created {LINK_DIR} and added it to .gitignore)"
    )
    return Linked(org=org, project=project)


def link_folder_to_project(path: Path, link: ProjectLink) -> None:
    link_dir = path / LINK_DIR
    link_dir.mkdir(parents=True, exist_ok=True)
    (link_dir / LINK_FILE).write_bytes(msgspec.json.encode(link))
    (link_dir / "README.txt").write_text(LINK_README)

    gitignore = path / ".gitignore"
    content = gitignore.read_text() if gitignore.exists() else ""
    if LINK_DIR not in content.splitlines():
        separator = "" if not content or content.endswith("\n") else "\n"
        gitignore.write_text(f"{content}{separator}{LINK_DIR}\n")


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9._-]+", "-", name.lower()).strip("-.")
    return slug[:100] or "project"
