# eventpro/models/dashboard.py
from typing import List

from eventpro.models.base import WireModel


class StatusCounts(WireModel):
    approved: int = 0
    used: int = 0
    expired: int = 0


class ParticipationStatusCounts(WireModel):
    participating: int = 0
    participated: int = 0
    not_attended: int = 0
    approved: int = 0


class EventDashboard(WireModel):
    event_id: str
    event_name: str
    total_inscriptions: int = 0
    status_counts: StatusCounts
    participation_status_counts: ParticipationStatusCounts
    average_time_in_minutes: float = 0


class DashboardResponse(WireModel):
    message: str
    dashboard_data: List[EventDashboard]
