"""Core package"""
from caseprobe.core.config import Settings
from caseprobe.core.context import AppContext, get_context

__all__ = [
    "Settings",
    "AppContext",
    "get_context",
]
