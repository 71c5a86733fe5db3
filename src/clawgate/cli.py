"""
clawgate CLI: clawgate serve | schema | skills
"""
import asyncio
import json
import sys
from functools import partial
from pathlib import Path

import click

from clawgate.config.settings import load_settings
from clawgate.core.exceptions import ClawgateError
from clawgate.core.structured_logger import configure_logging
from clawgate.extensions.composer import serialize_schema
from clawgate.gateway.client import GatewayClient
from clawgate.interfaces.web.schema_http import SchemaSources, build_config_schema
from clawgate.tools.skills_tool import SKILLS_ACTIONS, create_skills_tool

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $CLAWGATE_CONFIG_PATH or ~/.clawgate/clawgate.yaml)",
)


def _load(config_path: Path | None):
    try:
        settings = load_settings(config_path)
    except ClawgateError as e:
        click.echo(e.message, err=True)
        raise SystemExit(1)
    configure_logging(settings.logging)
    return settings


@click.group()
@click.version_option(package_name="clawgate")
def cli() -> None:
    """clawgate: config schema server and gateway skills client."""
    pass


@cli.command()
@_config_option
def serve(config_path: Path | None) -> None:
    """Serve /openclaw.schema.json, /health and /metrics."""
    from clawgate.interfaces.web.server import run

    settings = _load(config_path)
    sources = SchemaSources(load_config=partial(load_settings, config_path))
    click.echo(f"Serving on http://{settings.web.host}:{settings.web.port}")
    run(settings, sources)


@cli.command()
@_config_option
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the schema to a file instead of stdout")
def schema(config_path: Path | None, output: Path | None) -> None:
    """Print the composed config JSON Schema."""
    _load(config_path)
    try:
        document = build_config_schema(SchemaSources(load_config=partial(load_settings, config_path)))
    except ClawgateError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)
    body = serialize_schema(document)
    if output:
        output.write_bytes(body)
        click.echo(f"Wrote {output}")
    else:
        click.echo(body.decode("utf-8"))


@cli.command()
@_config_option
@click.argument("action", type=click.Choice(SKILLS_ACTIONS))
@click.option("--agent-id", default=None, help="Agent to report on (status)")
@click.option("--name", default=None, help="Skill name (install)")
@click.option("--install-id", default=None, help="Install option id (install)")
@click.option("--skill-key", default=None, help="Skill key (update)")
@click.option("--enabled/--disabled", default=None, help="Enable or disable the skill (update)")
@click.option("--api-key", default=None, help="Skill API key (update)")
@click.option("--env", "env_pairs", multiple=True, metavar="KEY=VALUE",
              help="Environment variable (update); KEY= clears it. Repeatable.")
@click.option("--timeout-ms", type=float, default=None, help="Call timeout in milliseconds")
@click.option("--gateway-url", default=None, help="Gateway URL override")
@click.option("--gateway-token", default=None, help="Gateway token override")
def skills(config_path: Path | None, action: str, agent_id, name, install_id, skill_key, enabled,
           api_key, env_pairs, timeout_ms, gateway_url, gateway_token) -> None:
    """Run a skills ACTION against the gateway and print the result."""
    settings = _load(config_path)

    env: dict[str, str] = {}
    for pair in env_pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        env[key] = value

    candidates = {
        "action": action,
        "agentId": agent_id,
        "name": name,
        "installId": install_id,
        "skillKey": skill_key,
        "enabled": enabled,
        "apiKey": api_key,
        "env": env or None,
        "timeoutMs": timeout_ms,
        "gatewayUrl": gateway_url,
        "gatewayToken": gateway_token,
    }
    params = {k: v for k, v in candidates.items() if v is not None}

    tool = create_skills_tool(GatewayClient(settings.gateway))
    result = asyncio.run(tool.execute(params))
    click.echo(json.dumps(result, indent=2, default=str))
    if not result["success"]:
        sys.exit(1)


if __name__ == "__main__":
    cli()
