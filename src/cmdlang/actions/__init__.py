"""Action dispatchers."""

from .registry import ActionDescriptor, ActionRegistry
from .trace import TraceDispatcher, TracedCall

__all__ = ["ActionDescriptor", "ActionRegistry", "TraceDispatcher", "TracedCall"]
