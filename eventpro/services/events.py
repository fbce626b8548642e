# eventpro/services/events.py
from loguru import logger

from eventpro.exceptions import NotFoundError, ValidationError
from eventpro.models.event import STANDARD_EVENT_TYPE
from eventpro.repository import Repository
from eventpro.services.authorization import AuthorizationContext, ensure_event_owner


def check_event_type(event_type) -> None:
    if event_type and event_type != STANDARD_EVENT_TYPE:
        raise ValidationError('Only events of type "standard" can be created at the moment.')


class EventService:
    def __init__(self, events: Repository, users: Repository) -> None:
        self._events = events
        self._users = users

    async def _ensure_user_exists(self, user_id: str) -> None:
        if not await self._users.find_by_id(user_id):
            raise NotFoundError("User not found.")

    async def create_event(self, data: dict) -> dict:
        check_event_type(data.get("type"))
        await self._ensure_user_exists(data["userId"])

        data["type"] = STANDARD_EVENT_TYPE
        data["capacity"] = {**data["capacity"], "current": 0, "total": 0}

        event = await self._events.insert(data)
        logger.info(f"Event {event['id']} created by user {data['userId']}")
        return event

    async def list_events(self) -> list[dict]:
        return await self._events.find()

    async def get_event(self, event_id: str) -> dict:
        event = await self._events.find_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found.")
        return event

    async def list_events_created_by(self, user_id: str) -> list[dict]:
        await self._ensure_user_exists(user_id)
        return await self._events.find({"userId": user_id})

    async def update_event(self, event_id: str, changes: dict, context: AuthorizationContext) -> dict:
        await self._ensure_user_exists(context.caller_id)
        event = await self.get_event(event_id)
        ensure_event_owner(event, context, "edit")
        check_event_type(changes.get("type"))

        if "capacity" in changes:
            # counters belong to the inscription flow, only max is editable
            stored = event.get("capacity") or {}
            changes["capacity"] = {
                "max": changes["capacity"]["max"],
                "current": stored.get("current", 0),
                "total": stored.get("total", 0),
            }

        updated = await self._events.update(event_id, changes)
        if not updated:
            raise NotFoundError("Event not found.")
        logger.info(f"Event {event_id} updated")
        return updated

    async def delete_event(self, event_id: str, context: AuthorizationContext) -> None:
        await self._ensure_user_exists(context.caller_id)
        event = await self.get_event(event_id)
        ensure_event_owner(event, context, "delete")

        await self._events.delete(event_id)
        logger.info(f"Event {event_id} deleted")
