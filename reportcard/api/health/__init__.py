"""Liveness, readiness and aggregate health resources."""

from __future__ import annotations

from .resources import HealthResource, ReadyResource, ServiceHealthResource

__all__ = ["HealthResource", "ReadyResource", "ServiceHealthResource"]
