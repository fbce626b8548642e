# eventpro/routes/inscriptions.py
from typing import List

from fastapi import APIRouter, Depends, status

from eventpro.dependencies import get_inscription_service
from eventpro.models.inscription import Inscription, InscriptionCreate, InscriptionResponse
from eventpro.services.inscriptions import InscriptionService

router = APIRouter()


@router.post("", response_model=InscriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_inscription(
    request: InscriptionCreate,
    service: InscriptionService = Depends(get_inscription_service),
):
    participants = None
    if request.participants is not None:
        participants = request.participants.model_dump(by_alias=True, exclude_none=True)

    inscription = await service.register(
        request.user_id,
        request.event_id,
        for_another_one=request.for_another_one,
        participants=participants,
    )
    return {"message": "Inscription completed successfully!", "inscription": inscription}


@router.get("", response_model=List[Inscription])
async def list_inscriptions(service: InscriptionService = Depends(get_inscription_service)):
    return await service.list_inscriptions()


@router.get("/{inscription_id}", response_model=Inscription)
async def get_inscription(inscription_id: str, service: InscriptionService = Depends(get_inscription_service)):
    return await service.get_inscription(inscription_id)


@router.patch("/{inscription_id}/cancel", response_model=InscriptionResponse)
async def cancel_inscription(inscription_id: str, service: InscriptionService = Depends(get_inscription_service)):
    inscription = await service.cancel(inscription_id)
    return {"message": "Inscription cancelled successfully.", "inscription": inscription}
