"""API routes."""

from . import control, messaging, observability

__all__ = ["control", "messaging", "observability"]
