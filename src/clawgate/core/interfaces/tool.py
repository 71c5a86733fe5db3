"""
Base Tool - Abstract base class for all tools
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ToolCategory(Enum):
    """Tool categories"""

    GATEWAY = "gateway"


@dataclass
class ToolParameter:
    """Tool parameter definition"""

    name: str
    param_type: str  # string, int, float, bool, object
    description: str
    required: bool = True
    default: Any = None
    options: list[str] = field(default_factory=list)


@dataclass
class ToolMetadata:
    """Tool metadata"""

    name: str
    description: str
    category: ToolCategory
    label: str = ""
    version: str = "1.0.0"
    parameters: list[ToolParameter] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)


class BaseTool(ABC):
    """
    Abstract base class for all tools.

    Subclasses define a class-level ``METADATA`` dict and implement
    ``execute(parameters)``.
    """

    _JSON_TYPES: dict[str, str] = {
        "string": "string",
        "int": "integer",
        "float": "number",
        "bool": "boolean",
        "object": "object",
    }

    def __init__(self) -> None:
        self._metadata: ToolMetadata | None = None

    @property
    def metadata(self) -> ToolMetadata:
        """Get tool metadata (cached) from the class-level ``METADATA`` dict."""
        if self._metadata is None:
            cls_meta = getattr(type(self), "METADATA", None)
            if cls_meta is None:
                raise NotImplementedError(f"{type(self).__name__} must define a METADATA class attribute")
            self._metadata = ToolMetadata(
                name=cls_meta["name"],
                description=cls_meta["description"],
                category=cls_meta["category"],
                label=cls_meta.get("label", cls_meta["name"]),
                version=cls_meta.get("version", "1.0.0"),
                parameters=[ToolParameter(**p) for p in cls_meta.get("parameters", [])],
                examples=cls_meta.get("examples", []),
            )
        return self._metadata

    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's argument object, as shown to callers."""
        properties: dict[str, Any] = {}
        required: list[str] = []
        for param in self.metadata.parameters:
            prop: dict[str, Any] = {
                "type": self._JSON_TYPES.get(param.param_type, "string"),
                "description": param.description,
            }
            if param.options:
                prop["enum"] = list(param.options)
            if param.param_type == "object":
                prop["additionalProperties"] = True
            properties[param.name] = prop
            if param.required:
                required.append(param.name)
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    @abstractmethod
    async def execute(self, parameters: dict[str, Any]) -> dict[str, Any]:
        """
        Execute the tool

        Args:
            parameters: Dictionary of parameter name -> value

        Returns:
            Dictionary with 'success' (bool) and 'result' or 'error'
        """
        pass

    def _success_response(self, result: Any = None, **kwargs) -> dict[str, Any]:
        """Create success response"""
        response = {"success": True, "result": result}
        response.update(kwargs)
        return response

    def _json_response(self, result: Any) -> dict[str, Any]:
        """Success response that also carries the result as pretty-printed JSON text"""
        return self._success_response(result=result, text=json.dumps(result, indent=2, default=str))

    def _error_response(self, error: str, **kwargs) -> dict[str, Any]:
        """Create error response"""
        response = {"success": False, "error": error}
        response.update(kwargs)
        return response
