from __future__ import annotations

import cappa
from rich.markup import escape


class ShipitError(Exception):
    pass


class ArgumentError(ShipitError):
    pass


class ImproperlyConfiguredError(ShipitError):
    pass


class NotAuthenticated(ShipitError):
    def __init__(self):
        super().__init__(
            'No existing credentials found. Please run `shipit login` or pass "--token"'
        )


class APIError(ShipitError):
    def __init__(
        self, message: str, *, status: int | None = None, code: str | None = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class DeploymentNotFound(ShipitError):
    def __init__(self, deploy_id: str, context_name: str):
        super().__init__(
            f"Can't find the deployment “{deploy_id}” under the context “{context_name}”"
        )
        self.deploy_id = deploy_id
        self.context_name = context_name


class DeploymentPermissionDenied(ShipitError):
    def __init__(self, deploy_id: str, context_name: str):
        super().__init__(
            f"No permission to access deployment “{deploy_id}” under the context “{context_name}”"
        )
        self.deploy_id = deploy_id
        self.context_name = context_name


def handle_error(error: BaseException, output: cappa.Output | None = None) -> None:
    """Print a single diagnostic line for ``error`` on stderr."""
    output = output or cappa.Output()
    if isinstance(error, APIError) and error.status == 403:
        message = "Authentication error. Run `shipit login` to log in again."
    elif isinstance(error, APIError) and error.status and error.status >= 500:
        message = f"Unexpected server error. Please retry. ({error.message})"
    elif isinstance(error, ShipitError):
        message = str(error)
    else:
        message = f"Unexpected error. Please try again later. ({error})"
    output.error(escape(message))
