import pytest

from ticketdesk.core.errors import UnauthenticatedError
from ticketdesk.models import TicketCreate, TicketFilters


def test_no_session_falls_back_to_default_user(service):
    assert service.identity.resolve_current_user_id() == "1"
    assert service.current_user().email == "john@example.com"


def test_session_user_is_used(make_service):
    svc = make_service("2")
    assert svc.identity.resolve_current_user_id() == "2"
    assert svc.current_user().name == "Jane Smith"


def test_unknown_session_user_acts_as_default(make_service):
    svc = make_service("ghost")
    # filters see the raw session id, attribution falls back to the default user
    assert svc.identity.resolve_current_user_id() == "ghost"
    assert svc.create_ticket(TicketCreate(title="T", description="D")).created_by.id == "1"


def test_fallback_disabled_without_session_is_unauthenticated(make_service):
    svc = make_service(None, anonymous_fallback=False)

    with pytest.raises(UnauthenticatedError):
        svc.identity.resolve_current_user_id()
    with pytest.raises(UnauthenticatedError):
        svc.create_ticket(TicketCreate(title="T", description="D"))
    with pytest.raises(UnauthenticatedError):
        svc.add_comment("1", "hello")
    with pytest.raises(UnauthenticatedError):
        svc.list_tickets(TicketFilters(assigned_to_me=True))

    # plain listing needs no identity
    assert svc.list_tickets().total == 2


def test_fallback_disabled_rejects_unknown_session_user(make_service):
    svc = make_service("ghost", anonymous_fallback=False)
    with pytest.raises(UnauthenticatedError):
        svc.current_user()


def test_default_identity_is_configurable(make_service):
    svc = make_service(None, default_user_id="3")
    ticket = svc.create_ticket(TicketCreate(title="T", description="D"))
    assert ticket.created_by.name == "Bob Johnson"
