"""Agent id and workspace directory resolution."""

from pathlib import Path

from clawgate.config.settings import AgentConfig, Settings
from clawgate.core.exceptions import CollaboratorError

DEFAULT_AGENT_ID = "main"
STATE_DIR = Path("~/.clawgate")


def normalize_agent_id(agent_id: str | None) -> str:
    value = (agent_id or "").strip().lower()
    return value or DEFAULT_AGENT_ID


def _find_agent(settings: Settings, agent_id: str) -> AgentConfig | None:
    for agent in settings.agents.list:
        if normalize_agent_id(agent.id) == agent_id:
            return agent
    return None


def resolve_default_agent_id(settings: Settings) -> str:
    """The agent flagged ``default``, else the first listed, else ``main``."""
    agents = settings.agents.list
    if not agents:
        return DEFAULT_AGENT_ID
    chosen = next((a for a in agents if a.default), agents[0])
    return normalize_agent_id(chosen.id)


def resolve_agent_workspace_dir(settings: Settings, agent_id: str) -> Path:
    """Workspace directory for ``agent_id``.

    Order: the agent's own ``workspace``, then ``agents.default_workspace``
    for the default agent, then ``~/.clawgate/workspace`` (default agent) or
    ``~/.clawgate/workspace-<id>``.
    """
    agent_id = normalize_agent_id(agent_id)
    agent = _find_agent(settings, agent_id)
    is_default = agent_id == resolve_default_agent_id(settings)

    if agent is not None and agent.workspace is not None:
        configured = agent.workspace
    elif is_default and settings.agents.default_workspace is not None:
        configured = settings.agents.default_workspace
    elif is_default:
        configured = STATE_DIR / "workspace"
    else:
        configured = STATE_DIR / f"workspace-{agent_id}"

    try:
        return configured.expanduser().resolve()
    except (OSError, RuntimeError) as e:
        raise CollaboratorError(f"Cannot resolve workspace for agent {agent_id!r}: {e}") from e
