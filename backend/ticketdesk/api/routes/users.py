from fastapi import APIRouter, Depends

from ticketdesk.api.deps import get_service
from ticketdesk.services.helpdesk import HelpdeskService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(service: HelpdeskService = Depends(get_service)):
    return [u.model_dump(mode="json") for u in service.get_users()]


@router.get("/{user_id}")
def get_user(user_id: str, service: HelpdeskService = Depends(get_service)):
    return service.get_user(user_id).model_dump(mode="json")
