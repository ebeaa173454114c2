import random

import pytest
from pydantic import ValidationError

from tierlink.arguments import ClientRole, HostRole, build_arguments, role_from_mapping
from tierlink.errors import MalformedCode, UnknownRole
from tierlink.invites import generate_invitation_code, parse_invitation_code


@pytest.fixture()
def code():
    return generate_invitation_code(4095, node_id=0, rng=random.Random(99))


def test_host_arguments(code):
    data = parse_invitation_code(code)
    args = build_arguments(code, ["tcp://example.com:8080"], HostRole(hostname="Server-test"))
    assert args == [
        "--encryption-algorithm=chacha20",
        "-p",
        "tcp://example.com:8080",
        f"--network-name={data.network_name}",
        f"--network-secret={data.network_secret}",
        "-i",
        "10.114.114.114",
        "--hostname=Server-test",
        "--tcp-whitelist=4095",
        "--udp-whitelist=4095",
    ]


def test_client_arguments(code):
    data = parse_invitation_code(code)
    role = ClientRole(hostname_suffix="-test", port_to_forward=4444)
    args = build_arguments(code, ["tcp://example.com:8080"], role)
    assert args == [
        "--encryption-algorithm=chacha20",
        "-p",
        "tcp://example.com:8080",
        f"--network-name={data.network_name}",
        f"--network-secret={data.network_secret}",
        "--hostname=Client-test",
        "--port-forward=tcp://[::1]:4444/10.114.114.114:4095",
        "--port-forward=tcp://127.0.0.1:4444/10.114.114.114:4095",
        "--port-forward=udp://[::1]:4444/10.114.114.114:4095",
        "--port-forward=udp://127.0.0.1:4444/10.114.114.114:4095",
        "--tcp-whitelist=0",
        "--udp-whitelist=0",
        "-d",
    ]
    assert len(args) == 13


def test_nodes_keep_order_and_may_be_empty(code):
    nodes = ["tcp://a.example:11010", "udp://b.example:11010", "wss://c.example:443"]
    args = build_arguments(code, nodes, HostRole(hostname="Server-x"))
    assert args[1:7] == ["-p", nodes[0], "-p", nodes[1], "-p", nodes[2]]

    args = build_arguments(code, [], HostRole(hostname="Server-x"))
    assert args[1].startswith("--network-name=")


def test_invalid_code_propagates():
    with pytest.raises(MalformedCode):
        build_arguments("P0FFF-ABCDE-H1JKO-02000", [], HostRole(hostname="Server-x"))


def test_unknown_role_object_fails_fast(code):
    with pytest.raises(UnknownRole):
        build_arguments(code, [], {"role": "spectator"})


def test_role_from_mapping():
    assert role_from_mapping({"role": "host", "hostname": "Server-a"}) == HostRole(hostname="Server-a")
    role = role_from_mapping({"role": "client", "hostname_suffix": "-b", "port_to_forward": 25565})
    assert isinstance(role, ClientRole)
    assert role.port_to_forward == 25565


@pytest.mark.parametrize("data", [{"role": "spectator"}, {"hostname": "x"}, {"role": None}])
def test_role_from_mapping_rejects_unknown_role(data):
    with pytest.raises(UnknownRole):
        role_from_mapping(data)


def test_role_from_mapping_requires_role_fields():
    with pytest.raises(ValidationError):
        role_from_mapping({"role": "client", "hostname_suffix": "-b"})
    with pytest.raises(ValidationError):
        role_from_mapping({"role": "client", "hostname_suffix": "-b", "port_to_forward": 70000})
