"""Tracker module."""

from .correlation import ErrorReporter
from .tracker import ITracker, Tracker

__all__ = ["ErrorReporter", "ITracker", "Tracker"]
