"""Reading and updating access roles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pxcli.api import Role, Rule
from pxcli.errors import RpcError, px_error_message
from pxcli.formatting import FormatOutput

ROLE_GUEST_DISABLED = Role(
    name="system.guest",
    rules=[Rule(services=["!*"], apis=["!*"])],
)
"""The guest role with every service denied."""

ROLE_GUEST_ENABLED = Role(
    name="system.guest",
    rules=[
        Rule(services=["mountattach", "volume", "cloudbackup", "migrate"], apis=["*"]),
        Rule(services=["identity"], apis=["version"]),
        Rule(services=["cluster", "node"], apis=["inspect*", "enumerate*"]),
    ],
)
"""The guest role with its default access."""


@dataclass
class CliAuthInputs(FormatOutput):
    """Options given on the command line for auth commands."""

    wide: bool = False


class RoleClient(Protocol):
    """The role service of a cluster."""

    def inspect(self, name: str) -> Role:
        """Return the role with the given name."""

    def update(self, role: Role) -> None:
        """Replace the stored role of the same name."""


class AuthOps:
    """Role operations through a role client."""

    def __init__(self, client: RoleClient) -> None:
        self._client = client

    def get_role(self, name: str) -> Role:
        """Return the named role."""
        try:
            return self._client.inspect(name)
        except RpcError as err:
            raise px_error_message(err, "Failed to get role") from err

    def update_role(self, role: Role) -> None:
        """Store the role."""
        try:
            self._client.update(role)
        except RpcError as err:
            raise px_error_message(err, "Failed to update role") from err