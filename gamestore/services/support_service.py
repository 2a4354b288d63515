# gamestore/services/support_service.py
import random

from gamestore.domain.schemas import SupportTicketIn
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


def ticket_protocol(rng: random.Random | None = None) -> str:
    #"#2" + 4 losowe cyfry, np. #20417
    rng = rng or random
    return f"#2{rng.randint(0, 9999):04d}"


class SupportService:
    """
    Tickety nie sa zapisywane, tylko logowane
    """

    def create_ticket(self, payload: SupportTicketIn) -> dict:
        protocol = ticket_protocol()

        logger.info(
            f"[SUPPORT TICKET] protocol={protocol} name={payload.name!r} email={payload.email!r} "
            f"subject={payload.subject or 'not provided'!r}"
        )
        logger.debug(f"[SUPPORT TICKET] {protocol} message: {payload.message}")

        return {
            "status": "ok",
            "protocol": protocol,
            "message": "Your support ticket was opened successfully.",
        }
