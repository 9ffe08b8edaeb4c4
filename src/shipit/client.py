from __future__ import annotations

import sys
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any

import cappa
import httpx
import msgspec
from rich import print as rich_print
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from .config import (
    AuthConfig,
    GlobalConfig,
    default_api_url,
    default_global_config_dir,
    read_auth_config,
    read_global_config,
)
from .errors import APIError, NotAuthenticated

if TYPE_CHECKING:
    from .args import GlobalArgs


def default_output() -> cappa.Output:
    # consoles without a file look up sys.stdout / sys.stderr on every write
    return cappa.Output(output_console=Console(), error_console=Console(stderr=True))


class _ErrorBody(msgspec.Struct):
    code: str | None = None
    message: str | None = None


class _ErrorResponse(msgspec.Struct):
    error: _ErrorBody | None = None


@dataclass
class Client:
    """
    Per-invocation state: the argument vector, the working directory and an
    authenticated session against the platform API.
    """

    argv: list[str]
    cwd: Path = field(default_factory=Path.cwd)
    stdout: cappa.Output = field(default_factory=default_output)
    api_url: str = field(default_factory=default_api_url)
    global_config_dir: Path = field(default_factory=default_global_config_dir)
    local_config_path: Path | None = None
    token: str | None = None
    debug_enabled: bool = False
    interactive: bool = field(default_factory=lambda: sys.stdin.isatty())
    transport: httpx.BaseTransport | None = None

    @cached_property
    def config(self) -> GlobalConfig:
        return read_global_config(self.global_config_dir)

    @cached_property
    def auth(self) -> AuthConfig:
        return read_auth_config(self.global_config_dir)

    @cached_property
    def current_team(self) -> str | None:
        return self.config.current_team

    @cached_property
    def http(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_url,
            transport=self.transport,
            timeout=httpx.Timeout(30.0),
            headers={"User-Agent": "shipit-cli"},
        )

    def apply_global_args(self, args: GlobalArgs) -> None:
        if args.token:
            self.token = args.token
        if args.global_config:
            self.global_config_dir = Path(args.global_config).expanduser()
            # drop anything read from the previous location
            for name in ("config", "auth", "current_team"):
                self.__dict__.pop(name, None)
        if args.local_config:
            self.local_config_path = Path(args.local_config).expanduser()
        if args.no_color:
            self.stdout.output_console.no_color = True
            self.stdout.error_console.no_color = True
        if getattr(args, "debug", False):
            self.debug_enabled = True

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            rich_print(f"[dim]> \\[debug] {escape(message)}[/dim]", file=sys.stderr)

    def confirm(self, message: str, *, default: bool = False) -> bool:
        if not self.interactive:
            return default
        return Confirm.ask(message, default=default)

    def fetch(
        self,
        path: str,
        *,
        method: str = "GET",
        params: dict[str, str] | None = None,
        json: Any = None,
        type: Any = Any,
        use_current_team: bool = True,
    ) -> Any:
        token = self.token or self.auth.token
        if not token:
            raise NotAuthenticated()
        params = dict(params or {})
        if use_current_team and self.current_team:
            params.setdefault("teamId", self.current_team)

        self.debug(f"{method} {path} {params or ''}".rstrip())
        try:
            response = self.http.request(
                method,
                path,
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            raise APIError(f"Request to {path} failed: {e}") from e
        self.debug(f"{method} {path} -> {response.status_code}")

        if response.is_error:
            raise _api_error(response)
        try:
            return msgspec.json.decode(response.content, type=type)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise APIError(
                f"Unexpected response from {path}: {e}", status=response.status_code
            ) from e

    def close(self) -> None:
        if "http" in self.__dict__:
            self.http.close()


def _api_error(response: httpx.Response) -> APIError:
    code = message = None
    try:
        body = msgspec.json.decode(response.content, type=_ErrorResponse)
    except (msgspec.DecodeError, msgspec.ValidationError):
        body = None
    if body and body.error:
        code, message = body.error.code, body.error.message
    return APIError(
        message or f"Response Error ({response.status_code})",
        status=response.status_code,
        code=code,
    )
