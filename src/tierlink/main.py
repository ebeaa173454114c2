"""CLI 入口"""

import asyncio
import logging
import shlex
from typing import List, Optional, Sequence

import click
import httpx

from .arguments import ClientRole, HostRole, Role, build_arguments
from .clients.uptime import UptimeClient
from .config import get_settings
from .errors import TierlinkError
from .invites import (
    MAX_NODE_ID,
    MAX_PORT,
    generate_invitation_code,
    is_invitation_code_valid,
    parse_invitation_code,
)


def _discover(tags: Sequence[str]) -> List[str]:
    return asyncio.run(UptimeClient().get_available_nodes(list(tags) or None))


def _emit_arguments(code: str, nodes: Sequence[str], discover: bool, role: Role) -> None:
    try:
        node_list = list(nodes)
        if discover:
            node_list.extend(_discover(()))
        args = build_arguments(code, node_list, role)
    except (TierlinkError, httpx.HTTPError) as e:
        raise click.ClickException(str(e))
    click.echo(shlex.join(args))


@click.group()
@click.option("--log-level", default=None, help="覆盖 LOG_LEVEL 环境变量")
def main(log_level: Optional[str]):
    """tierlink - EasyTier 联机邀请码工具

    示例:
        tierlink generate 25565
        tierlink host P63DD-ABCDE-H1JKL-02000 --hostname Server-steve --discover
        tierlink client P63DD-ABCDE-H1JKL-02000 --hostname-suffix -alex --port-to-forward 25565
    """
    settings = get_settings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@main.command("generate")
@click.argument("port", type=click.IntRange(0, MAX_PORT))
@click.option("--node-id", default=0, show_default=True, type=click.IntRange(0, MAX_NODE_ID))
@click.option("--attachment", default=None, help="追加在邀请码末尾的文本")
def generate(port: int, node_id: int, attachment: Optional[str]):
    """Create an invitation code for a server listening on PORT."""
    click.echo(generate_invitation_code(port, node_id=node_id, attachment=attachment))


@main.command("validate")
@click.argument("code")
def validate(code: str):
    """Check whether CODE is a well-formed invitation code."""
    if is_invitation_code_valid(code):
        click.echo("valid")
        return
    click.echo("invalid")
    click.get_current_context().exit(1)


@main.command("parse")
@click.argument("code")
def parse(code: str):
    """Decode CODE and print its fields as JSON."""
    try:
        data = parse_invitation_code(code)
    except TierlinkError as e:
        raise click.ClickException(str(e))
    click.echo(data.model_dump_json(indent=2))


@main.command("nodes")
@click.option("--tag", "tags", multiple=True, help="节点标签过滤，可重复；默认取 UPTIME_TAGS")
def nodes(tags: Sequence[str]):
    """List public EasyTier nodes from the uptime API."""
    try:
        found = _discover(tags)
    except (TierlinkError, httpx.HTTPError) as e:
        raise click.ClickException(str(e))
    for node in found:
        click.echo(node)


@main.command("host")
@click.argument("code")
@click.option("--hostname", required=True, help="建议格式 Server-<name>")
@click.option("--node", "-p", "nodes", multiple=True, help="EasyTier 节点 url，可重复")
@click.option("--discover/--no-discover", default=False, show_default=True, help="从 uptime API 获取节点")
def host(code: str, hostname: str, nodes: Sequence[str], discover: bool):
    """Print EasyTier arguments for the machine hosting the game server."""
    _emit_arguments(code, nodes, discover, HostRole(hostname=hostname))


@main.command("client")
@click.argument("code")
@click.option("--hostname-suffix", required=True)
@click.option("--port-to-forward", required=True, type=click.IntRange(0, MAX_PORT), help="本地转发端口")
@click.option("--node", "-p", "nodes", multiple=True, help="EasyTier 节点 url，可重复")
@click.option("--discover/--no-discover", default=False, show_default=True, help="从 uptime API 获取节点")
def client(code: str, hostname_suffix: str, port_to_forward: int, nodes: Sequence[str], discover: bool):
    """Print EasyTier arguments for a player joining the host."""
    role = ClientRole(hostname_suffix=hostname_suffix, port_to_forward=port_to_forward)
    _emit_arguments(code, nodes, discover, role)


if __name__ == "__main__":
    main()
