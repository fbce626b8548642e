# eventpro/models/inscription.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from eventpro.models.base import WireModel


class TicketStatus(str, Enum):
    APPROVED = "APROVADO"
    USED = "USADO"
    EXPIRED = "EXPIRADO"


class ParticipationStatus(str, Enum):
    APPROVED = "APROVADO"
    PARTICIPATING = "PARTICIPANDO"
    PARTICIPATED = "PARTICIPADO"
    NOT_ATTENDED = "NAO_COMPARECEU"


class Participant(WireModel):
    name: str
    email: str
    date_of_birth: datetime
    document: str


class ParticipantInput(WireModel):
    # Completeness is checked by the registration service so the error can
    # list every missing field at once.
    name: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    document: Optional[str] = None


class Checkin(WireModel):
    in_: Optional[datetime] = Field(default=None, alias="in")
    out: Optional[datetime] = None


class InscriptionCreate(WireModel):
    user_id: str
    event_id: str
    for_another_one: bool = False
    participants: Optional[ParticipantInput] = None


class Inscription(WireModel):
    id: str
    user_id: str
    event_id: str
    for_another_one: bool = False
    participants: Participant
    status: TicketStatus = TicketStatus.APPROVED
    participation_status: ParticipationStatus = Field(
        default=ParticipationStatus.APPROVED, alias="participation_status"
    )
    checkin: Checkin = Field(default_factory=Checkin)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketValidationRequest(WireModel):
    """Body of the entry/exit endpoints: who claims to own the event."""

    event_creator_id: str


class InscriptionResponse(WireModel):
    message: str
    inscription: Inscription
