from __future__ import annotations

from urllib.parse import quote, urlsplit

from .client import Client
from .errors import APIError, DeploymentNotFound, DeploymentPermissionDenied
from .models import Deployment


def to_host(url: str) -> str:
    """``https://my-app-abc.shipit.app/some/path`` -> ``my-app-abc.shipit.app``"""
    if "://" not in url:
        url = f"https://{url}"
    return urlsplit(url).hostname or url


def get_deployment_by_id_or_url(
    *, client: Client, context_name: str, deploy_id: str
) -> Deployment:
    id_or_host = to_host(deploy_id) if "." in deploy_id else deploy_id
    client.debug(f"Looking up deployment {id_or_host} under {context_name}")
    try:
        return client.fetch(
            f"/v13/deployments/{quote(id_or_host, safe='')}", type=Deployment
        )
    except APIError as e:
        if e.status == 404:
            raise DeploymentNotFound(deploy_id, context_name) from e
        if e.status == 403:
            raise DeploymentPermissionDenied(deploy_id, context_name) from e
        raise
