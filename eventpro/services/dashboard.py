# eventpro/services/dashboard.py
from typing import Iterable

from loguru import logger

from eventpro.exceptions import NotFoundError
from eventpro.models.inscription import ParticipationStatus, TicketStatus
from eventpro.repository import Repository
from eventpro.services.authorization import AuthorizationContext

NO_EVENTS_MESSAGE = "No events found created by this user."
DASHBOARD_MESSAGE = "Dashboard data retrieved successfully."

STATUS_KEYS = {
    TicketStatus.APPROVED.value: "approved",
    TicketStatus.USED.value: "used",
    TicketStatus.EXPIRED.value: "expired",
}

PARTICIPATION_KEYS = {
    ParticipationStatus.PARTICIPATING.value: "participating",
    ParticipationStatus.PARTICIPATED.value: "participated",
    ParticipationStatus.NOT_ATTENDED.value: "notAttended",
    ParticipationStatus.APPROVED.value: "approved",
}


def summarize_event(event: dict, inscriptions: Iterable[dict]) -> dict:
    """Fold one event's inscriptions into its dashboard entry.

    The average stay only counts tickets with both check-in and check-out
    times, and is 0 when there are none.
    """
    total = 0
    status_counts = dict.fromkeys(STATUS_KEYS.values(), 0)
    participation_counts = dict.fromkeys(PARTICIPATION_KEYS.values(), 0)
    total_minutes = 0.0
    completed = 0

    for inscription in inscriptions:
        total += 1

        status_key = STATUS_KEYS.get(inscription.get("status"))
        if status_key:
            status_counts[status_key] += 1

        participation_key = PARTICIPATION_KEYS.get(inscription.get("participation_status"))
        if participation_key:
            participation_counts[participation_key] += 1

        checkin = inscription.get("checkin") or {}
        entered, left = checkin.get("in"), checkin.get("out")
        if entered and left:
            total_minutes += (left - entered).total_seconds() / 60
            completed += 1

    average = round(total_minutes / completed, 2) if completed else 0

    return {
        "eventId": event["id"],
        "eventName": event["name"],
        "totalInscriptions": total,
        "statusCounts": status_counts,
        "participationStatusCounts": participation_counts,
        "averageTimeInMinutes": average,
    }


class DashboardService:
    def __init__(self, events: Repository, inscriptions: Repository, users: Repository) -> None:
        self._events = events
        self._inscriptions = inscriptions
        self._users = users

    async def build_dashboard(self, context: AuthorizationContext) -> dict:
        """Summaries for every event the caller created."""
        owner_id = context.caller_id
        if not await self._users.find_by_id(owner_id):
            raise NotFoundError("Event creator not found.")

        events = await self._events.find({"userId": owner_id})
        if not events:
            return {"message": NO_EVENTS_MESSAGE, "dashboardData": []}

        dashboard = []
        for event in events:
            inscriptions = await self._inscriptions.find({"eventId": event["id"]})
            dashboard.append(summarize_event(event, inscriptions))

        logger.debug(f"Dashboard built for user {owner_id} over {len(events)} events")
        return {"message": DASHBOARD_MESSAGE, "dashboardData": dashboard}
