"""Data models for generated systemd services."""

from .service import ServiceDefinition, ServiceKind, UnitState

__all__ = ["ServiceDefinition", "ServiceKind", "UnitState"]
