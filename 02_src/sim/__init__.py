"""Scripted chat scenario for manual testing."""

from .sim import ISim, Sim

__all__ = ["ISim", "Sim"]
