"""Invitation codes (format version 02).

Layout of the 23-character head, followed by an optional free-form attachment::

    P0FFF-ABCDE-H1JKL-02000
    |^^^^ ^^^^^ ^^^^^ ^^^^^
    |port name  secret |node id
    marker             version

Everything in the head is uppercase and drawn from ``CODE_ALPHABET``, which
leaves out ``I`` and ``O`` so codes survive being read aloud or retyped.
"""

from __future__ import annotations

import logging
import math
import random
import secrets
import string
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .errors import InvalidParameter, MalformedCode

logger = logging.getLogger(__name__)

RANDOM_ALPHABET = string.digits + string.ascii_uppercase
CODE_ALPHABET = "".join(c for c in RANDOM_ALPHABET if c not in "IO")
HEX_DIGITS = "0123456789ABCDEF"

CODE_PREFIX = "P"
CODE_VERSION = "02"
SEPARATOR = "-"
SEPARATOR_POSITIONS = (5, 11, 17)
HEAD_LENGTH = 23
SEGMENT_LENGTH = 5

PORT_SLICE = slice(1, 5)
NETWORK_NAME_SLICE = slice(0, 11)
NETWORK_SECRET_SLICE = slice(12, 17)
VERSION_SLICE = slice(18, 20)
NODE_ID_SLICE = slice(20, 23)

MAX_PORT = 0xFFFF
MAX_NODE_ID = 0xFFF

# Residues shorter than this were padding in the pre-02 format, not attachments.
ATTACHMENT_MIN_LENGTH = 7

_system_random = secrets.SystemRandom()


class ParsedInvitation(BaseModel):
    """Fields decoded from an invitation code."""

    model_config = ConfigDict(frozen=True)

    port: int
    network_name: str
    network_secret: str
    node_id: int
    attachment: Optional[str] = None


def _is_hex(text: str) -> bool:
    return bool(text) and all(c in HEX_DIGITS for c in text)


def is_invitation_code_valid(code: Any) -> bool:
    """Check whether ``code`` is a well-formed version 02 invitation code.

    The code is invalid if:
    - it is shorter than the 23-character head
    - it doesn't start with 'P'
    - code[5], code[11] or code[17] isn't '-'
    - code[18:20] isn't '02' (wrong version)
    - code[1:5] isn't an uppercase hex string (port)
    - code[20:23] isn't an uppercase hex string (initial node id)
    - code[0:23] contains anything other than 0-9A-Z minus I/O, apart from
      the three separators
    """
    if not isinstance(code, str):
        return False
    if len(code) < HEAD_LENGTH:
        return False
    if code[0] != CODE_PREFIX:
        return False
    if any(code[i] != SEPARATOR for i in SEPARATOR_POSITIONS):
        return False
    if code[VERSION_SLICE] != CODE_VERSION:
        return False
    if not _is_hex(code[PORT_SLICE]):
        return False
    if not _is_hex(code[NODE_ID_SLICE]):
        return False
    for i, c in enumerate(code[:HEAD_LENGTH]):
        if i in SEPARATOR_POSITIONS:
            continue
        if c not in CODE_ALPHABET:
            return False
    return True


def _require_int(name: str, value: Any, upper: int) -> int:
    if isinstance(value, bool):
        raise InvalidParameter(name, value)
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidParameter(name, value)
        value = int(value)
    if not isinstance(value, int) or value < 0 or value > upper:
        raise InvalidParameter(name, value)
    return value


def _random_segment(rng: random.Random) -> str:
    return "".join(rng.choice(RANDOM_ALPHABET) for _ in range(SEGMENT_LENGTH))


def generate_invitation_code(
    port: int,
    *,
    attachment: Optional[str] = None,
    node_id: int = 0,
    rng: Optional[random.Random] = None,
) -> str:
    """Create a new invitation code.

    Args:
        port: the port the game server is listening at (0-65535)
        attachment: optional text appended verbatim after the head
        node_id: id of the initial relay node (0-4095)
        rng: random source for the name/secret segments; defaults to the
            system CSPRNG. Pass a seeded ``random.Random`` for reproducible codes.
    """
    port = _require_int("port", port, MAX_PORT)
    node_id = _require_int("node_id", node_id, MAX_NODE_ID)
    rng = rng or _system_random

    head = (
        f"{CODE_PREFIX}{port:04x}-{_random_segment(rng)}-{_random_segment(rng)}"
        f"-{CODE_VERSION}{node_id:03x}"
    )
    head = head.replace("O", "0").replace("I", "1").upper()

    if attachment and len(attachment) < ATTACHMENT_MIN_LENGTH:
        logger.warning(
            "Attachment %r is shorter than %s characters and will be ignored when parsed",
            attachment,
            ATTACHMENT_MIN_LENGTH,
        )
    return head + (attachment or "")


def parse_invitation_code(code: str) -> ParsedInvitation:
    """Decode an invitation code; raises MalformedCode if it isn't valid."""
    if not is_invitation_code_valid(code):
        raise MalformedCode()

    attachment = code[HEAD_LENGTH:]
    return ParsedInvitation(
        port=int(code[PORT_SLICE], 16),
        network_name=code[NETWORK_NAME_SLICE],
        network_secret=code[NETWORK_SECRET_SLICE],
        node_id=int(code[NODE_ID_SLICE], 16),
        attachment=attachment if len(attachment) >= ATTACHMENT_MIN_LENGTH else None,
    )
