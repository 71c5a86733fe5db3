"""Remote gateway RPC client."""

from .client import GatewayCallOptions, GatewayClient

__all__ = ['GatewayCallOptions', 'GatewayClient']
