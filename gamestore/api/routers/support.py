from fastapi import APIRouter

from gamestore.domain.schemas import SupportTicketIn, SupportTicketOut
from gamestore.services.support_service import SupportService

router = APIRouter(prefix="/support", tags=["support"])


@router.post("/ticket", response_model=SupportTicketOut)
def open_ticket(payload: SupportTicketIn):
    return SupportService().create_ticket(payload)
