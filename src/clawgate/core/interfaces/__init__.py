"""
Core Interfaces - Abstract interfaces and contracts
===================================================
"""

from .tool import (
    BaseTool,
    ToolCategory,
    ToolMetadata,
    ToolParameter,
)

__all__ = [
    'BaseTool',
    'ToolMetadata',
    'ToolParameter',
    'ToolCategory',
]
