from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the HTTP clients used by the workspace commands.
"""

from standards.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT
from standards.infra.network.sagebrush_client import SagebrushAPIClient

__all__ = [
    "SagebrushAPIClient",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
]
