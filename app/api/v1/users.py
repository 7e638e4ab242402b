# app/api/v1/users.py
from fastapi import APIRouter, Depends

from app.core.dependencies import get_user_store
from app.core.exceptions import UserNotFoundError
from app.models.user import User
from app.storage.user_store import UserStore

router = APIRouter()

@router.get("/{address}", response_model=User)
def get_user(address: str, store: UserStore = Depends(get_user_store)):
    """Policy and claim ids linked to a wallet address."""
    user = store.get_by_address(address)
    if user is None:
        raise UserNotFoundError(address)
    return user
