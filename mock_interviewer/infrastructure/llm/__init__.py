"""Chat-completion gateway client."""

from .client import GatewayClient, extract_json_span, parse_json_span

__all__ = ["GatewayClient", "extract_json_span", "parse_json_span"]
