from __future__ import annotations

import logging

import httpx

from account_activation.domain.ports.email_port import EmailPort

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """The relay did not accept the message."""


class HttpSmtpEmailAdapter(EmailPort):
    """
    Hands messages to an HTTP mail relay: `POST <base_url><send_path>` with a
    JSON body. Relay 5xx answers are retried up to `retries` times; 4xx
    answers and transport errors raise immediately.
    """

    def __init__(
        self,
        base_url: str,
        *,
        sender: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
        send_path: str = "/send",
        retries: int = 1,
    ) -> None:
        self._url = base_url.rstrip("/") + "/" + send_path.lstrip("/")
        self._sender = sender
        self._retries = retries
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        message = {"to": to, "subject": subject, "body": body}
        if self._sender:
            message["from"] = self._sender
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else {}

        for attempt in range(self._retries + 1):
            try:
                resp = await self._client.post(self._url, json=message, headers=headers)
            except httpx.HTTPError as e:
                raise EmailDeliveryError(f"mail relay unreachable: {e}") from e
            if resp.is_success:
                logger.debug(
                    "mail relay accepted message",
                    extra={"status": resp.status_code, "attempt": attempt + 1},
                )
                return
            if resp.status_code < 500:
                break
            logger.warning(
                "mail relay error",
                extra={"status": resp.status_code, "attempt": attempt + 1},
            )

        raise EmailDeliveryError(
            f"mail relay answered {resp.status_code}: {resp.text[:200]}"
        )

    async def aclose(self) -> None:
        # a client passed in belongs to the caller
        if self._owns_client:
            await self._client.aclose()
