# gamestore/api/routers/auth.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from gamestore.api.deps import bearer_token
from gamestore.data.database import get_db
from gamestore.domain.errors import AuthenticationError
from gamestore.domain.schemas import LoginIn, LoginOut, RegisterIn, UserEnvelope
from gamestore.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserEnvelope, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user = AuthService(db).register(payload)
    return {"success": True, "message": "User registered successfully!", "user": user}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user, session = AuthService(db).login(payload)
    return {
        "success": True,
        "message": "Login successful!",
        "user": user,
        "token": session.token,
        "expires_at": session.expires_at,
    }


@router.post("/logout", status_code=204)
def logout(token: str | None = Depends(bearer_token), db: Session = Depends(get_db)):
    if not token:
        raise AuthenticationError("Missing session token")
    AuthService(db).logout(token)
    return Response(status_code=204)


@router.get("/verify/{username}", response_model=UserEnvelope)
def verify(username: str, db: Session = Depends(get_db)):
    return {"success": True, "user": AuthService(db).verify(username)}
