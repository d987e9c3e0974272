"""HTTP API: knowledge routes, dependency providers, and error handlers."""

from slack_knowledge.api.errors import validation_exception_handler
from slack_knowledge.api.router import router

__all__ = [
    "router",
    "validation_exception_handler",
]
