"""Observability – structured logging used by the bundled adapters."""

from mp_alerts.observability.logging import get_logger

__all__ = ["get_logger"]
