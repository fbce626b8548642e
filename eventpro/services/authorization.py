# eventpro/services/authorization.py
"""Who is asking, and may they touch this event.

Callers currently identify themselves by putting their user id in the
request. ``AuthorizationContext`` keeps that trust decision out of the
services so a verified identity can replace ``ClaimedIdentity`` later.
"""

from abc import ABC, abstractmethod

from loguru import logger

from eventpro.exceptions import ForbiddenError


class AuthorizationContext(ABC):
    @property
    @abstractmethod
    def caller_id(self) -> str:
        ...


class ClaimedIdentity(AuthorizationContext):
    """Identity taken as-is from the request payload."""

    def __init__(self, claimed_id: str) -> None:
        self._claimed_id = claimed_id

    @property
    def caller_id(self) -> str:
        return self._claimed_id

    def __repr__(self) -> str:
        return f"ClaimedIdentity({self._claimed_id!r})"


def ensure_event_owner(event: dict, context: AuthorizationContext, action: str) -> None:
    """Raise ForbiddenError unless the caller created the event."""
    if str(event["userId"]) != context.caller_id:
        logger.warning(f"User {context.caller_id} refused to {action} event {event['id']}: not the creator")
        raise ForbiddenError(
            f"You are not allowed to {action} this event. Only its creator can do that."
        )
