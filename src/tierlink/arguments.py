"""Command line arguments for EasyTier, derived from an invitation code."""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownRole
from .invites import parse_invitation_code

ENCRYPTION_ALGORITHM = "chacha20"
# Fixed virtual address of the (only) host inside the network.
HOST_IP = "10.114.114.114"
CLIENT_HOSTNAME_PREFIX = "Client"
FORWARD_PROTOCOLS = ("tcp", "udp")
FORWARD_BIND_ADDRESSES = ("[::1]", "127.0.0.1")


class HostRole(BaseModel):
    """The machine running the game server.

    A hostname like ``Server-{name}`` is suggested.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["host"] = "host"
    hostname: str


class ClientRole(BaseModel):
    """A player joining the host; the remote server is forwarded to a local port."""

    model_config = ConfigDict(frozen=True)

    role: Literal["client"] = "client"
    hostname_suffix: str
    port_to_forward: int = Field(ge=0, le=0xFFFF)


Role = Union[HostRole, ClientRole]

_ROLE_TYPES = {"host": HostRole, "client": ClientRole}


def role_from_mapping(data: Mapping[str, Any]) -> Role:
    """Build a role from loose input such as ``{"role": "host", "hostname": ...}``."""
    name = data.get("role")
    role_type = _ROLE_TYPES.get(name) if isinstance(name, str) else None
    if role_type is None:
        raise UnknownRole(name)
    return role_type.model_validate(dict(data))


def build_arguments(invitation_code: str, nodes: Sequence[str], role: Role) -> List[str]:
    """Generate EasyTier command line arguments.

    Args:
        invitation_code: a version 02 invitation code
        nodes: urls of public EasyTier nodes, in the order they should be tried
        role: HostRole if this machine hosts the game server, otherwise ClientRole
    """
    data = parse_invitation_code(invitation_code)
    result: List[str] = []

    result.append(f"--encryption-algorithm={ENCRYPTION_ALGORITHM}")

    for node in nodes:
        result.append("-p")
        result.append(f"{node}")

    result.append(f"--network-name={data.network_name}")
    result.append(f"--network-secret={data.network_secret}")

    if isinstance(role, HostRole):
        result.append("-i")
        result.append(HOST_IP)
        result.append(f"--hostname={role.hostname}")

        # only the game server port is reachable
        result.append(f"--tcp-whitelist={data.port}")
        result.append(f"--udp-whitelist={data.port}")
    elif isinstance(role, ClientRole):
        result.append(f"--hostname={CLIENT_HOSTNAME_PREFIX}{role.hostname_suffix}")
        for protocol in FORWARD_PROTOCOLS:
            for address in FORWARD_BIND_ADDRESSES:
                result.append(
                    f"--port-forward={protocol}://{address}:{role.port_to_forward}"
                    f"/{HOST_IP}:{data.port}"
                )

        # clients accept no inbound connections and don't relay for others
        result.append("--tcp-whitelist=0")
        result.append("--udp-whitelist=0")
        result.append("-d")
    else:
        raise UnknownRole(getattr(role, "role", role))

    return result
