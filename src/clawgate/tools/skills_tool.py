"""
Skills Tool - Manage agent skills through the gateway (status/install/update/bins)

Validates the action and its parameters locally, shapes the payload, and
forwards it with exactly one gateway call. Nothing is sent when validation
fails.
"""

import math
from collections.abc import Mapping
from typing import Any

from clawgate.core.exceptions import ClawgateError, ValidationError
from clawgate.core.interfaces.tool import BaseTool, ToolCategory
from clawgate.core.structured_logger import get_logger
from clawgate.gateway.client import GatewayCallOptions, GatewayClient

logger = get_logger("SkillsTool")

SKILLS_ACTIONS = ("status", "install", "update", "bins")
MIN_INSTALL_TIMEOUT_MS = 1000


def _is_number(value: Any) -> bool:
    # bool is an int subclass; a flag is never a timeout
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite_number(value: Any) -> float | None:
    if not _is_number(value):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return None
    return value if finite else None


def read_string_param(
    params: Mapping[str, Any],
    key: str,
    *,
    required: bool = False,
    trim: bool = True,
    label: str | None = None,
) -> str | None:
    """Return ``params[key]`` as a string, or None when absent or blank.

    Raises:
        ValidationError: If ``required`` and the value is missing, not a
            string, or empty after trimming
    """
    raw = params.get(key)
    value = raw.strip() if isinstance(raw, str) and trim else raw
    if not isinstance(value, str) or not value:
        if required:
            raise ValidationError(f"{label or key} required", details={"parameter": key})
        return None
    return value


class SkillsTool(BaseTool):
    """Manage agent skills on the gateway."""

    METADATA = {
        "name": "skills",
        "label": "Skills",
        "description": (
            "Manage agent skills (status/install/update/bins).\n\n"
            "ACTIONS:\n"
            "- status: List all skills with eligibility and configuration status. "
            "Optional agentId to target a specific agent (defaults to the default agent).\n"
            "- install: Install a skill dependency (requires name and installId from the status report).\n"
            "- update: Update skill configuration (requires skillKey; optional enabled, apiKey, env).\n"
            "- bins: List all binary dependencies required by skills across all agent workspaces."
        ),
        "category": ToolCategory.GATEWAY,
        "parameters": [
            {"name": "action", "param_type": "string", "description": "Action to perform", "required": True,
             "options": list(SKILLS_ACTIONS)},
            {"name": "gatewayUrl", "param_type": "string", "description": "Gateway URL override", "required": False},
            {"name": "gatewayToken", "param_type": "string", "description": "Gateway token override", "required": False},
            {"name": "timeoutMs", "param_type": "float", "description": "Call timeout in milliseconds", "required": False},
            {"name": "agentId", "param_type": "string", "description": "Agent to report on (status)", "required": False},
            {"name": "name", "param_type": "string", "description": "Skill name (install)", "required": False},
            {"name": "installId", "param_type": "string", "description": "Install option id (install)", "required": False},
            {"name": "skillKey", "param_type": "string", "description": "Skill key (update)", "required": False},
            {"name": "enabled", "param_type": "bool", "description": "Enable or disable the skill (update)", "required": False},
            {"name": "apiKey", "param_type": "string", "description": "Skill API key (update)", "required": False},
            {"name": "env", "param_type": "object",
             "description": "Environment variables (update); an empty string clears a variable", "required": False},
        ],
        "examples": [
            '{"action": "status"}',
            '{"action": "status", "agentId": "my-agent"}',
            '{"action": "install", "name": "ffmpeg", "installId": "brew-ffmpeg"}',
            '{"action": "update", "skillKey": "my-skill", "enabled": true}',
            '{"action": "update", "skillKey": "my-skill", "env": {"MY_VAR": ""}}',
            '{"action": "bins"}',
        ],
    }

    def __init__(self, client: GatewayClient | None = None) -> None:
        super().__init__()
        self.client = client or GatewayClient()

    async def execute(self, parameters: dict[str, Any]) -> dict[str, Any]:
        """Validate, shape and forward one action; always returns an envelope."""
        try:
            action = parameters.get("action")
            if action is None or isinstance(action, str):
                action = read_string_param(parameters, "action", required=True)
            handler = self._DISPATCH.get(action) if isinstance(action, str) else None
            if handler is None:
                raise ValidationError(f"Unknown action: {action}", details={"actions": list(SKILLS_ACTIONS)})
            method, options, payload = handler(self, parameters)
            result = await self.client.call(method, options, payload)
        except ClawgateError as e:
            logger.warning(f"skills tool failed: {e.message}", error=e.to_dict())
            return self._error_response(e.message, error_code=int(e.error_code))
        return self._json_response(result)

    def _gateway_options(self, parameters: Mapping[str, Any], timeout_ms: int | None = None) -> GatewayCallOptions:
        if timeout_ms is None:
            requested = _finite_number(parameters.get("timeoutMs"))
            timeout_ms = int(requested) if requested is not None and requested >= 1 else self.client.config.timeout_ms
        return GatewayCallOptions(
            gateway_url=read_string_param(parameters, "gatewayUrl", trim=False),
            gateway_token=read_string_param(parameters, "gatewayToken", trim=False),
            timeout_ms=timeout_ms,
        )

    def _status(self, parameters: Mapping[str, Any]) -> tuple[str, GatewayCallOptions, dict[str, Any]]:
        payload: dict[str, Any] = {}
        agent_id = read_string_param(parameters, "agentId")
        if agent_id:
            payload["agentId"] = agent_id
        return "skills.status", self._gateway_options(parameters), payload

    def _install(self, parameters: Mapping[str, Any]) -> tuple[str, GatewayCallOptions, dict[str, Any]]:
        name = read_string_param(parameters, "name", required=True)
        install_id = read_string_param(parameters, "installId", required=True)
        payload: dict[str, Any] = {"name": name, "installId": install_id}
        requested = _finite_number(parameters.get("timeoutMs"))
        if requested is not None:
            timeout_ms = max(MIN_INSTALL_TIMEOUT_MS, math.floor(requested))
            payload["timeoutMs"] = timeout_ms
            return "skills.install", self._gateway_options(parameters, timeout_ms), payload
        return "skills.install", self._gateway_options(parameters), payload

    def _update(self, parameters: Mapping[str, Any]) -> tuple[str, GatewayCallOptions, dict[str, Any]]:
        skill_key = read_string_param(parameters, "skillKey", required=True)
        payload: dict[str, Any] = {"skillKey": skill_key}
        if isinstance(parameters.get("enabled"), bool):
            payload["enabled"] = parameters["enabled"]
        if isinstance(parameters.get("apiKey"), str):
            payload["apiKey"] = parameters["apiKey"]
        if parameters.get("env") is not None:
            env = parameters["env"]
            if not isinstance(env, Mapping):
                raise ValidationError(
                    f"env must be an object mapping names to values, got {type(env).__name__}",
                    details={"parameter": "env"},
                )
            payload["env"] = dict(env)
        return "skills.update", self._gateway_options(parameters), payload

    def _bins(self, parameters: Mapping[str, Any]) -> tuple[str, GatewayCallOptions, dict[str, Any]]:
        return "skills.bins", self._gateway_options(parameters), {}

    _DISPATCH = {
        "status": _status,
        "install": _install,
        "update": _update,
        "bins": _bins,
    }


def create_skills_tool(client: GatewayClient | None = None) -> SkillsTool:
    return SkillsTool(client=client)
