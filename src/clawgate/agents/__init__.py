"""Agent scope: default agent and workspace resolution."""
