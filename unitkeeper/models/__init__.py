"""Data models for systemd service management."""

from .service import ServiceDefinition

__all__ = ["ServiceDefinition"]
