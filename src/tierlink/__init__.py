from .arguments import ClientRole, HostRole, Role, build_arguments, role_from_mapping
from .errors import InvalidParameter, MalformedCode, RemoteDiscoveryFailure, TierlinkError, UnknownRole
from .invites import (
    ParsedInvitation,
    generate_invitation_code,
    is_invitation_code_valid,
    parse_invitation_code,
)

__all__ = [
    "ClientRole",
    "HostRole",
    "Role",
    "build_arguments",
    "role_from_mapping",
    "InvalidParameter",
    "MalformedCode",
    "RemoteDiscoveryFailure",
    "TierlinkError",
    "UnknownRole",
    "ParsedInvitation",
    "generate_invitation_code",
    "is_invitation_code_valid",
    "parse_invitation_code",
]
