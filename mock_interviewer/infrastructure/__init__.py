"""Infrastructure components for the mock interview engine.

This module contains low-level technical components: the AI gateway
client, camera/classifier access and file-backed persistence.
"""

# LLM infrastructure
from .llm import GatewayClient

# Persistence
from .data import InterviewStore, ResumeStorage

__all__ = [
    "GatewayClient",
    "InterviewStore",
    "ResumeStorage",
]
