from __future__ import annotations

from typing import Literal

import msgspec


class User(msgspec.Struct, rename="camel"):
    id: str
    username: str
    email: str | None = None


class UserResponse(msgspec.Struct):
    user: User


class Team(msgspec.Struct, rename="camel"):
    id: str
    slug: str
    name: str | None = None


class Org(msgspec.Struct, frozen=True):
    type: Literal["user", "team"]
    id: str
    slug: str


class Project(msgspec.Struct, rename="camel"):
    id: str
    name: str
    account_id: str | None = None
    framework: str | None = None
    updated_at: int | None = None


class Creator(msgspec.Struct, rename="camel"):
    uid: str
    username: str | None = None


class Deployment(msgspec.Struct, rename="camel"):
    id: str
    url: str
    name: str
    ready_state: str | None = None
    target: str | None = None
    project_id: str | None = None
    created_at: int | None = None
    creator: Creator | None = None


class ProjectLink(msgspec.Struct, rename="camel"):
    org_id: str
    project_id: str
