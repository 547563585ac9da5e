"""HTTP adapter – SlackWebhookSender, a ``send`` callable for alert loggers."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mp_alerts.kernel.errors import ExternalServiceError
from mp_alerts.kernel.errors import InfrastructureTimeoutError as DeliveryTimeoutError
from mp_alerts.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_alerts.alerting.formats import Payload
    from mp_alerts.config.settings import AlertSettings

log = get_logger(__name__)


def _require_httpx() -> Any:
    try:
        import httpx  # type: ignore[import-untyped]
        return httpx
    except ImportError as exc:
        raise ImportError("Install 'mp-alerts[httpx]' to use SlackWebhookSender") from exc


class SlackWebhookSender:
    """Posts rendered payloads to a Slack incoming webhook.

    Dict payloads are sent as JSON, string payloads as ``{"text": ...}``.
    Slack answers a successful post with the plain body ``ok``.

    Parameters
    ----------
    webhook_url:
        Incoming webhook URL.
    timeout:
        Request timeout in seconds (ignored when *client* is given).
    raise_errors:
        When ``False`` delivery failures are logged as
        ``alert.delivery_failed`` and swallowed, so a broken webhook never
        takes the host process down.
    client:
        Optional shared ``httpx.AsyncClient``; the sender only closes clients
        it created itself.
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        timeout: float = 10.0,
        raise_errors: bool = True,
        client: Any = None,
    ) -> None:
        httpx = _require_httpx()
        self._webhook_url = webhook_url
        self._raise_errors = raise_errors
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: "AlertSettings", client: Any = None) -> "SlackWebhookSender":
        return cls(
            settings.webhook_url,
            timeout=settings.timeout,
            raise_errors=settings.raise_errors,
            client=client,
        )

    async def __aenter__(self) -> "SlackWebhookSender":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __call__(self, payload: "Payload") -> None:
        try:
            await self._post(payload)
        except (ExternalServiceError, DeliveryTimeoutError) as exc:
            if self._raise_errors:
                raise
            log.warning("alert.delivery_failed", error=exc.message, code=exc.code)

    async def _post(self, payload: "Payload") -> None:
        httpx = _require_httpx()
        body = {"text": payload} if isinstance(payload, str) else payload
        try:
            response = await self._client.post(self._webhook_url, json=body)
        except httpx.TimeoutException as exc:
            raise DeliveryTimeoutError("Slack webhook request timed out", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service="slack", message=str(exc), cause=exc) from exc

        if response.status_code >= 400:
            raise ExternalServiceError(
                service="slack",
                message=f"HTTP {response.status_code} from Slack webhook: {response.text}",
                status_code=response.status_code,
            )
        if response.text != "ok":
            raise ExternalServiceError(
                service="slack",
                message=f"Request to Slack was unsuccessful: {response.text!r}",
                status_code=response.status_code,
            )


__all__ = ["SlackWebhookSender"]
