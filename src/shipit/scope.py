from __future__ import annotations

from dataclasses import dataclass

from .client import Client
from .models import Org, Team, User, UserResponse


@dataclass(frozen=True, slots=True)
class Scope:
    context_name: str
    user: User
    team: Team | None = None

    @property
    def org(self) -> Org:
        if self.team:
            return Org(type="team", id=self.team.id, slug=self.team.slug)
        return Org(type="user", id=self.user.id, slug=self.user.username)


def get_scope(client: Client, *, get_team: bool = True) -> Scope:
    """Resolve the identity API calls are made under: the current team, else the user."""
    user = client.fetch("/v2/user", type=UserResponse, use_current_team=False).user
    team = None
    if get_team and client.current_team:
        team = client.fetch(
            f"/v1/teams/{client.current_team}", type=Team, use_current_team=False
        )
    return Scope(context_name=team.slug if team else user.username, user=user, team=team)
