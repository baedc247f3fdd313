"""Push notification delivery through the Expo push service."""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable

import httpx
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import DependencyError
from src.models.message import Message
from src.models.post import Post
from src.schemas.notification import BatchFailure, DispatchReport, PushPayload
from src.services.push_tokens import tokens_for_audience, tokens_for_name

logger = logging.getLogger(__name__)

# Expo accepts at most 100 messages per request
MAX_BATCH_SIZE = 100

PUSH_TOKEN_PATTERN = re.compile(r"^Expo(nent)?PushToken\[[^\[\]\s]+\]$")

PREVIEW_LENGTH = 100


def is_valid_push_token(token: str) -> bool:
    """Check that a token has the Expo push token shape."""
    return isinstance(token, str) and PUSH_TOKEN_PATTERN.match(token) is not None


class PushGateway(ABC):
    """Abstract interface for a push provider."""

    @abstractmethod
    async def send(self, tokens: list[str], payload: PushPayload) -> None:
        """Submit one batch. Raises if the provider rejects the batch."""
        ...


class ExpoPushGateway(PushGateway):
    """Sends batches to the Expo push API over HTTP."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = get_settings()
        self.url = self.settings.expo_push_url
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.settings.expo_access_token:
            headers["Authorization"] = f"Bearer {self.settings.expo_access_token}"
        return headers

    async def send(self, tokens: list[str], payload: PushPayload) -> None:
        messages = [
            {
                "to": token,
                "title": payload.title,
                "body": payload.body,
                "data": payload.data,
                "sound": "default",
            }
            for token in tokens
        ]

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(self.url, json=messages, headers=self._headers())
            response.raise_for_status()
            data = response.json()

        if data.get("errors"):
            raise DependencyError(f"Expo rejected batch: {data['errors']}")

        # Per-device tickets: a bad token does not fail the batch
        for token, ticket in zip(tokens, data.get("data", []), strict=False):
            if ticket.get("status") == "error":
                logger.warning(
                    f"Expo ticket error for {token[:24]}: "
                    f"{ticket.get('message')} ({ticket.get('details', {}).get('error')})"
                )


class NotificationDispatcher:
    """Filters, batches and submits notifications, isolating batch failures."""

    def __init__(self, gateway: PushGateway | None = None, timeout: float | None = None) -> None:
        self.gateway = gateway or ExpoPushGateway()
        self.timeout = timeout if timeout is not None else get_settings().push_timeout_seconds

    async def notify(self, recipients: Iterable[str], payload: PushPayload) -> DispatchReport:
        """Send ``payload`` to every well-formed token in ``recipients``.

        Malformed tokens are dropped. Batches are submitted concurrently and a
        failing or hanging batch never stops the others; ``sent`` counts only
        tokens in batches the gateway accepted.
        """
        recipients = set(recipients)
        valid = sorted(token for token in recipients if is_valid_push_token(token))
        if len(valid) < len(recipients):
            logger.debug(f"Dropped {len(recipients) - len(valid)} malformed push tokens")

        report = DispatchReport()
        if not valid:
            return report

        batches = [valid[i : i + MAX_BATCH_SIZE] for i in range(0, len(valid), MAX_BATCH_SIZE)]
        failures = await asyncio.gather(
            *(self._submit(index, batch, payload) for index, batch in enumerate(batches))
        )

        for batch, failure in zip(batches, failures, strict=True):
            if failure is None:
                report.sent += len(batch)
            else:
                report.failed_batches.append(failure)
        return report

    async def _submit(
        self, index: int, batch: list[str], payload: PushPayload
    ) -> BatchFailure | None:
        try:
            await asyncio.wait_for(self.gateway.send(batch, payload), timeout=self.timeout)
        except TimeoutError:
            logger.error(f"Push batch {index} timed out after {self.timeout}s")
            return BatchFailure(batch_index=index, error=f"timed out after {self.timeout}s")
        except Exception as e:
            logger.error(f"Push batch {index} failed: {e}")
            return BatchFailure(batch_index=index, error=str(e) or type(e).__name__)
        return None


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[: PREVIEW_LENGTH - 1] + "…"


def _log_report(kind: str, record_id: int, report: DispatchReport) -> None:
    if report.failed_batches:
        logger.warning(
            f"Notifications for {kind} {record_id}: sent {report.sent}, "
            f"{len(report.failed_batches)} batch(es) failed"
        )
    else:
        logger.info(f"Notifications for {kind} {record_id}: sent {report.sent}")


async def fan_out_new_post(
    db: Session, post_id: int, dispatcher: NotificationDispatcher
) -> DispatchReport:
    """Notify every user except the author about a new post."""
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        logger.warning(f"Post {post_id} not found, skipping notifications")
        return DispatchReport()

    tokens = tokens_for_audience(db, exclude_name=post.username)
    payload = PushPayload(
        title=f"New post from {post.username}",
        body=_preview(post.content),
        data={"type": "post", "postId": post.id},
    )
    report = await dispatcher.notify(tokens, payload)
    _log_report("post", post.id, report)
    return report


async def fan_out_new_message(
    db: Session, message_id: int, dispatcher: NotificationDispatcher
) -> DispatchReport:
    """Notify the receiver of a direct message."""
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        logger.warning(f"Message {message_id} not found, skipping notifications")
        return DispatchReport()

    tokens = tokens_for_name(db, message.receiver)
    payload = PushPayload(
        title=f"New message from {message.sender}",
        body=_preview(message.content),
        data={"type": "message", "sender": message.sender},
    )
    report = await dispatcher.notify(tokens, payload)
    _log_report("message", message.id, report)
    return report


def get_dispatcher() -> NotificationDispatcher:
    """Get a dispatcher wired to the Expo push service."""
    return NotificationDispatcher()
