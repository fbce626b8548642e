# eventpro/routes/events.py
from typing import List

from fastapi import APIRouter, Depends, status

from eventpro.dependencies import get_dashboard_service, get_event_service, get_inscription_service
from eventpro.models.dashboard import DashboardResponse
from eventpro.models.event import Event, EventCreate, EventUpdate, OwnerClaim
from eventpro.models.inscription import InscriptionResponse, TicketValidationRequest
from eventpro.services.authorization import ClaimedIdentity
from eventpro.services.dashboard import DashboardService
from eventpro.services.events import EventService
from eventpro.services.inscriptions import InscriptionService

router = APIRouter()


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(event: EventCreate, service: EventService = Depends(get_event_service)):
    return await service.create_event(event.model_dump(by_alias=True, exclude_none=True))


@router.get("", response_model=List[Event])
async def list_events(service: EventService = Depends(get_event_service)):
    return await service.list_events()


@router.get("/created-by/{user_id}", response_model=List[Event])
async def list_events_created_by(user_id: str, service: EventService = Depends(get_event_service)):
    return await service.list_events_created_by(user_id)


@router.get("/dashboard/{user_id}", response_model=DashboardResponse)
async def event_dashboard(user_id: str, service: DashboardService = Depends(get_dashboard_service)):
    """Aggregated inscription and attendance figures for every event the user created."""
    return await service.build_dashboard(ClaimedIdentity(user_id))


@router.get("/{event_id}", response_model=Event)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    return await service.get_event(event_id)


@router.patch("/{event_id}", response_model=Event)
async def update_event(event_id: str, changes: EventUpdate, service: EventService = Depends(get_event_service)):
    fields = changes.model_dump(by_alias=True, exclude_unset=True, exclude={"user_id"})
    return await service.update_event(event_id, fields, ClaimedIdentity(changes.user_id))


@router.delete("/{event_id}")
async def delete_event(event_id: str, claim: OwnerClaim, service: EventService = Depends(get_event_service)):
    await service.delete_event(event_id, ClaimedIdentity(claim.user_id))
    return {"message": "Event deleted successfully."}


@router.post("/validate-entry/{inscription_id}", response_model=InscriptionResponse)
async def validate_entry(
    inscription_id: str,
    request: TicketValidationRequest,
    service: InscriptionService = Depends(get_inscription_service),
):
    inscription = await service.validate_entry(inscription_id, ClaimedIdentity(request.event_creator_id))
    return {"message": "Entry validated successfully!", "inscription": inscription}


@router.post("/validate-exit/{inscription_id}", response_model=InscriptionResponse)
async def validate_exit(
    inscription_id: str,
    request: TicketValidationRequest,
    service: InscriptionService = Depends(get_inscription_service),
):
    inscription = await service.validate_exit(inscription_id, ClaimedIdentity(request.event_creator_id))
    return {"message": "Exit validated successfully!", "inscription": inscription}
