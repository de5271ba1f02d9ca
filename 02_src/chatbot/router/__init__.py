"""Router module."""

from .router import CommandRouter, ICommandRouter, RouteOutcome

__all__ = ["CommandRouter", "ICommandRouter", "RouteOutcome"]
