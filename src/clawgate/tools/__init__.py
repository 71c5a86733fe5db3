"""Agent tools backed by the gateway."""

from .skills_tool import SkillsTool, create_skills_tool

__all__ = ['SkillsTool', 'create_skills_tool']
