from fastapi import APIRouter, Depends

from ticketdesk.api.deps import get_service
from ticketdesk.core.errors import InvalidCredentialsError
from ticketdesk.metrics.prometheus import logins_total, registrations_total
from ticketdesk.models.user import LoginInput, RegisterInput
from ticketdesk.services.helpdesk import HelpdeskService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(body: LoginInput, service: HelpdeskService = Depends(get_service)):
    try:
        result = service.login(body.email, body.password)
    except InvalidCredentialsError:
        logins_total.labels(outcome="rejected").inc()
        raise
    logins_total.labels(outcome="accepted").inc()
    return result.model_dump(mode="json")


@router.post("/register", status_code=201)
def register(body: RegisterInput, service: HelpdeskService = Depends(get_service)):
    result = service.register(body)
    registrations_total.labels(role=result.user.role.value).inc()
    return result.model_dump(mode="json")


@router.get("/me")
def me(service: HelpdeskService = Depends(get_service)):
    return service.current_user().model_dump(mode="json")
