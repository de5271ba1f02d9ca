"""Image generation module."""

from .replicate import IImageBackend, ReplicateProvider

__all__ = ["IImageBackend", "ReplicateProvider"]
