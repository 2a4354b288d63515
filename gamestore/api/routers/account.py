# gamestore/api/routers/account.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gamestore.api.deps import get_current_user
from gamestore.data.database import get_db
from gamestore.data.models.user import UserModel
from gamestore.domain.schemas import AccountOut, PurchaseHistoryOut
from gamestore.services.account_service import AccountService

router = APIRouter(prefix="/account", tags=["account"])


@router.get("/history", response_model=PurchaseHistoryOut)
def purchase_history(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"purchases": AccountService(db).purchase_history(user.id)}


@router.get("/{user_id}", response_model=AccountOut)
def get_account(user_id: int, db: Session = Depends(get_db)):
    return AccountService(db).get_account(user_id)
