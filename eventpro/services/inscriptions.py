# eventpro/services/inscriptions.py
"""Inscription (ticket) lifecycle.

A ticket moves on two axes:

    status:               APROVADO -> USADO      (entry)
                          APROVADO -> EXPIRADO   (cancel)
    participation_status: APROVADO -> PARTICIPANDO -> PARTICIPADO
                          APROVADO -> NAO_COMPARECEU (cancel)

The ``*_changes`` functions decide a transition from the current state
alone and return the fields to write. ``InscriptionService`` loads the
records, checks existence and ownership, and persists the result. Every
check happens before the single write, so a refused operation leaves the
ticket untouched.
"""

from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from eventpro.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from eventpro.models.inscription import ParticipationStatus, TicketStatus
from eventpro.repository import Repository, utcnow
from eventpro.services.authorization import AuthorizationContext, ensure_event_owner

REQUIRED_PARTICIPANT_FIELDS = ("name", "email", "dateOfBirth", "document")


def entry_changes(status: str, participation_status: str, now: datetime) -> dict:
    if status == TicketStatus.USED:
        raise InvalidStateError("This ticket has already been used for entry.", status)
    if status == TicketStatus.EXPIRED:
        raise InvalidStateError("This ticket is expired and cannot be used for entry.", status)
    if participation_status == ParticipationStatus.PARTICIPATING:
        raise InvalidStateError(
            "This ticket is already marked as PARTICIPANDO.", participation_status
        )
    if participation_status == ParticipationStatus.PARTICIPATED:
        raise InvalidStateError(
            "This ticket has already been used for entry and exit.", participation_status
        )
    if status != TicketStatus.APPROVED:
        raise InvalidStateError(f"Invalid ticket status for entry: {status}.", status)

    return {
        "status": TicketStatus.USED.value,
        "participation_status": ParticipationStatus.PARTICIPATING.value,
        "checkin": {"in": now},
    }


def exit_changes(participation_status: str, checkin: Optional[dict], now: datetime) -> dict:
    if participation_status == ParticipationStatus.PARTICIPATING:
        return {
            "participation_status": ParticipationStatus.PARTICIPATED.value,
            "checkin": {**(checkin or {}), "out": now},
        }
    if participation_status == ParticipationStatus.PARTICIPATED:
        raise InvalidStateError("Exit already recorded for this ticket.", participation_status)
    raise InvalidStateError(
        f"Invalid participation status for exit: {participation_status}. "
        f"The person must be {ParticipationStatus.PARTICIPATING.value} first.",
        participation_status,
    )


def cancel_changes(status: str) -> dict:
    if status == TicketStatus.EXPIRED:
        raise InvalidStateError("This inscription is already expired.", status)
    if status == TicketStatus.USED:
        raise InvalidStateError("This inscription has already been used and cannot be cancelled.", status)

    return {
        "status": TicketStatus.EXPIRED.value,
        "participation_status": ParticipationStatus.NOT_ATTENDED.value,
    }


def participant_from_user(user: dict) -> dict:
    return {
        "name": f"{user['name']} {user['lastname']}",
        "email": user["email"],
        "dateOfBirth": user["dateOfBirth"],
        "document": user["cpf"],
    }


class InscriptionService:
    def __init__(
        self,
        inscriptions: Repository,
        events: Repository,
        users: Repository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._inscriptions = inscriptions
        self._events = events
        self._users = users
        self._clock = clock

    async def register(
        self,
        user_id: str,
        event_id: str,
        for_another_one: bool = False,
        participants: Optional[dict] = None,
    ) -> dict:
        """Create a ticket in (APROVADO, APROVADO).

        When ``for_another_one`` is false the participant is the registering
        user; otherwise ``participants`` must carry every required field.
        """
        user = await self._users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found.")
        event = await self._events.find_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found.")

        if for_another_one:
            participants = participants or {}
            missing = [field for field in REQUIRED_PARTICIPANT_FIELDS if not participants.get(field)]
            if missing:
                raise ValidationError(f"Missing required participant fields: {', '.join(missing)}")
            participant = {field: participants[field] for field in REQUIRED_PARTICIPANT_FIELDS}
        else:
            participant = participant_from_user(user)

        existing = await self._inscriptions.find_one({
            "eventId": event_id,
            "participants.document": participant["document"],
            "status": {"$ne": TicketStatus.EXPIRED.value},
        })
        if existing:
            logger.warning(f"Duplicate inscription refused for event {event_id}")
            raise ConflictError("This person is already registered for this event.")

        capacity = event.get("capacity") or {}
        if capacity.get("max") is not None and capacity.get("current", 0) >= capacity["max"]:
            raise ConflictError("This event has reached its maximum capacity.")

        inscription = await self._inscriptions.insert({
            "userId": user_id,
            "eventId": event_id,
            "forAnotherOne": for_another_one,
            "participants": participant,
            "status": TicketStatus.APPROVED.value,
            "participation_status": ParticipationStatus.APPROVED.value,
            "checkin": {},
        })
        await self._events.increment(event_id, "capacity.current", 1)
        await self._events.increment(event_id, "capacity.total", 1)

        logger.info(f"Inscription {inscription['id']} created for event {event_id}")
        return inscription

    async def _load_ticket_and_event(self, inscription_id: str) -> tuple[dict, dict]:
        inscription = await self._inscriptions.find_by_id(inscription_id)
        if not inscription:
            raise NotFoundError("Ticket not found.")
        event = await self._events.find_by_id(inscription["eventId"])
        if not event:
            raise NotFoundError("Event associated with the ticket not found.")
        return inscription, event

    async def _save(self, inscription_id: str, changes: dict) -> dict:
        updated = await self._inscriptions.update(inscription_id, changes)
        if not updated:
            raise NotFoundError("Ticket not found.")
        return updated

    async def validate_entry(self, inscription_id: str, context: AuthorizationContext) -> dict:
        inscription, event = await self._load_ticket_and_event(inscription_id)
        ensure_event_owner(event, context, "validate entries for")

        changes = entry_changes(
            inscription["status"], inscription["participation_status"], self._clock()
        )
        updated = await self._save(inscription_id, changes)
        logger.info(f"Entry validated for ticket {inscription_id}")
        return updated

    async def validate_exit(self, inscription_id: str, context: AuthorizationContext) -> dict:
        inscription, event = await self._load_ticket_and_event(inscription_id)
        ensure_event_owner(event, context, "validate exits for")

        changes = exit_changes(
            inscription["participation_status"], inscription.get("checkin"), self._clock()
        )
        updated = await self._save(inscription_id, changes)
        logger.info(f"Exit validated for ticket {inscription_id}")
        return updated

    async def cancel(self, inscription_id: str) -> dict:
        inscription = await self._inscriptions.find_by_id(inscription_id)
        if not inscription:
            raise NotFoundError("Inscription not found.")

        changes = cancel_changes(inscription["status"])
        updated = await self._save(inscription_id, changes)
        await self._events.increment(inscription["eventId"], "capacity.current", -1)

        logger.info(f"Inscription {inscription_id} cancelled")
        return updated

    async def list_inscriptions(self) -> list[dict]:
        return await self._inscriptions.find()

    async def get_inscription(self, inscription_id: str) -> dict:
        inscription = await self._inscriptions.find_by_id(inscription_id)
        if not inscription:
            raise NotFoundError("Inscription not found.")
        return inscription
