"""HTTP adapter – delivery callables for alert loggers."""
from mp_alerts.adapters.http.slack import SlackWebhookSender

__all__ = ["SlackWebhookSender"]
