# gamestore/services/account_service.py
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gamestore.domain.errors import NotFoundError
from gamestore.repos.order_repo import OrderRepo
from gamestore.repos.user_repo import UserRepo
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)

HISTORY_LIMIT = 20


class AccountService:
    def __init__(self, db: Session):
        self.users = UserRepo(db)
        self.orders = OrderRepo(db)

    def purchase_history(self, user_id: int, limit: int = HISTORY_LIMIT) -> List[Dict[str, Any]]:
        return self.orders.purchase_history(user_id, limit)

    def get_account(self, user_id: int) -> Dict[str, Any]:
        user = self.users.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} does not exist", error="User not found")

        #historia best-effort: blad zapytania daje pusta liste, nie 500
        try:
            purchases = self.purchase_history(user_id)
        except SQLAlchemyError as e:
            self.orders.rollback()
            logger.warning(f"Purchase history unavailable for user {user_id}: {e}")
            purchases = []

        return {"user": user, "purchases": purchases}
