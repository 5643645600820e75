import itertools

import pytest

from ticketdesk.core.errors import ValidationError
from ticketdesk.models import (
    PageRequest,
    SortOrder,
    TicketCreate,
    TicketFilters,
    TicketPriority,
    TicketSort,
    TicketStatus,
    TicketUpdate,
)


def _ids(page):
    return [t.id for t in page.tickets]


@pytest.fixture()
def populated(make_service):
    """Seed tickets 1 and 2 plus a mix created by different users."""
    created = []
    specs = [
        ("1", "Printer jam", "Paper stuck in tray", TicketPriority.LOW, "2"),
        ("2", "VPN down", "Cannot reach the office network", TicketPriority.URGENT, "1"),
        ("3", "Password reset", "Locked out of email", TicketPriority.HIGH, None),
        ("3", "printer toner", "Low toner warning", TicketPriority.MEDIUM, "3"),
        ("2", "Slow laptop", "Takes ages to boot", TicketPriority.HIGH, "2"),
    ]
    for author, title, description, priority, assignee in specs:
        svc = make_service(author)
        created.append(
            svc.create_ticket(
                TicketCreate(title=title, description=description, priority=priority, assigned_to_id=assignee)
            )
        )
    make_service("1").update_ticket(
        created[1].id, TicketUpdate(status=TicketStatus.RESOLVED, assigned_to_id="1")
    )
    return created


def test_default_order_is_newest_first(service, populated):
    page = service.list_tickets(page=PageRequest(limit=50))
    assert _ids(page) == [t.id for t in reversed(populated)] + ["1", "2"]


def test_search_is_case_insensitive_over_title_and_description(service, populated):
    assert {t.title for t in service.list_tickets(TicketFilters(search="PRINTER")).tickets} == {
        "Printer jam",
        "printer toner",
    }
    assert [t.title for t in service.list_tickets(TicketFilters(search="office network")).tickets] == ["VPN down"]
    assert service.list_tickets(TicketFilters(search="")).total == 7


def test_status_and_priority_filters(service, populated):
    resolved = service.list_tickets(TicketFilters(status=TicketStatus.RESOLVED))
    assert [t.title for t in resolved.tickets] == ["VPN down"]

    high = service.list_tickets(TicketFilters(priority=TicketPriority.HIGH))
    assert {t.title for t in high.tickets} == {"Ticket 1", "Password reset", "Slow laptop"}


def test_assigned_and_created_by_me_use_session_user(make_service, populated):
    jane = make_service("2")
    assigned = jane.list_tickets(TicketFilters(assigned_to_me=True), page=PageRequest(limit=50))
    assert {t.title for t in assigned.tickets} == {"Ticket 1", "Printer jam", "Slow laptop"}

    created = jane.list_tickets(TicketFilters(created_by_me=True), page=PageRequest(limit=50))
    assert {t.title for t in created.tickets} == {"Ticket 2", "VPN down", "Slow laptop"}


def test_assigned_to_me_excludes_unassigned(make_service, populated):
    bob = make_service("3")
    titles = {t.title for t in bob.list_tickets(TicketFilters(assigned_to_me=True)).tickets}
    assert "Password reset" not in titles
    assert titles == {"Ticket 2", "printer toner"}


def test_filters_compose_as_intersection(make_service, populated):
    svc = make_service("2")
    everything = PageRequest(limit=100)
    options = {
        "search": [None, "printer", "o"],
        "status": [None, TicketStatus.OPEN, TicketStatus.RESOLVED],
        "priority": [None, TicketPriority.HIGH, TicketPriority.LOW],
        "assigned_to_me": [False, True],
        "created_by_me": [False, True],
    }

    def matches(**kw):
        return set(_ids(svc.list_tickets(TicketFilters(**kw), page=everything)))

    all_ids = matches()
    keys = list(options)
    for combo in itertools.product(*options.values()):
        kw = dict(zip(keys, combo))
        expected = set(all_ids)
        for k, v in kw.items():
            if v:
                expected &= matches(**{k: v})
        assert matches(**kw) == expected, kw


def test_total_does_not_depend_on_pagination(service, populated):
    filters = TicketFilters(search="e")
    expected = service.list_tickets(filters, page=PageRequest(limit=100)).total
    for limit in (1, 2, 3, 10):
        for page in (1, 2, 5):
            result = service.list_tickets(filters, page=PageRequest(page=page, limit=limit))
            assert result.total == expected
            assert len(result.tickets) <= limit


def test_pagination_slices_and_counts_pages(service, populated):
    first = service.list_tickets(page=PageRequest(page=1, limit=3))
    third = service.list_tickets(page=PageRequest(page=3, limit=3))
    beyond = service.list_tickets(page=PageRequest(page=4, limit=3))

    assert len(first.tickets) == 3
    assert _ids(third) == ["2"]
    assert beyond.tickets == []
    assert first.total == third.total == beyond.total == 7
    assert first.total_pages == 3


def test_sort_by_assignee_puts_unassigned_first_in_store_order(service, make_service):
    a = make_service("1").create_ticket(TicketCreate(title="A", description="x"))
    b = make_service("1").create_ticket(TicketCreate(title="B", description="x"))

    page = service.list_tickets(sort=TicketSort(sort_by="assigned_to", sort_order=SortOrder.ASC))
    # b was inserted after a, so it comes first in store order
    assert _ids(page)[:2] == [b.id, a.id]
    assert [t.assigned_to.name for t in page.tickets[2:]] == ["Bob Johnson", "Jane Smith"]


def test_sort_descending_is_stable_for_ties(service, make_service):
    a = make_service("1").create_ticket(TicketCreate(title="A", description="x"))
    b = make_service("1").create_ticket(TicketCreate(title="B", description="x"))

    page = service.list_tickets(sort=TicketSort(sort_by="assigned_to", sort_order=SortOrder.DESC))
    assert [t.assigned_to.name for t in page.tickets[:2]] == ["Jane Smith", "Bob Johnson"]
    assert _ids(page)[2:] == [b.id, a.id]


def test_sort_by_created_at(service, populated):
    asc = service.list_tickets(
        sort=TicketSort(sort_by="created_at", sort_order=SortOrder.ASC), page=PageRequest(limit=50)
    )
    assert _ids(asc)[:2] == ["1", "2"]

    desc = service.list_tickets(
        sort=TicketSort(sort_by="createdAt", sort_order=SortOrder.DESC), page=PageRequest(limit=50)
    )
    assert _ids(desc)[-2:] == ["2", "1"]


def test_sort_by_status_is_lexical(service):
    service.update_ticket("1", TicketUpdate(status=TicketStatus.CLOSED))
    created = service.create_ticket(TicketCreate(title="T", description="D"))
    service.update_ticket(created.id, TicketUpdate(status=TicketStatus.RESOLVED))

    page = service.list_tickets(sort=TicketSort(sort_by="status", sort_order=SortOrder.ASC))
    assert [t.status for t in page.tickets] == [
        TicketStatus.CLOSED,
        TicketStatus.IN_PROGRESS,
        TicketStatus.RESOLVED,
    ]


def test_sort_by_priority_is_lexical(service, populated):
    page = service.list_tickets(
        sort=TicketSort(sort_by="priority", sort_order=SortOrder.ASC), page=PageRequest(limit=50)
    )
    assert [t.priority.value for t in page.tickets] == [
        "HIGH", "HIGH", "HIGH", "LOW", "MEDIUM", "MEDIUM", "URGENT",
    ]


def test_sort_by_creator_name_is_case_insensitive(service, populated):
    page = service.list_tickets(
        sort=TicketSort(sort_by="created_by", sort_order=SortOrder.ASC), page=PageRequest(limit=50)
    )
    names = [t.created_by.name for t in page.tickets]
    assert names == sorted(names, key=str.lower)


def test_unknown_sort_field_is_rejected(service):
    with pytest.raises(ValidationError):
        service.list_tickets(sort=TicketSort(sort_by="color"))


def test_limit_above_maximum_is_rejected(make_service):
    svc = make_service(max_page_size=5)
    with pytest.raises(ValidationError):
        svc.list_tickets(page=PageRequest(limit=6))


def test_listing_does_not_mutate_store(service, store):
    before = [t.model_dump() for t in store.tickets]
    page = service.list_tickets(sort=TicketSort(sort_by="title", sort_order=SortOrder.ASC))
    page.tickets[0].title = "changed"
    assert [t.model_dump() for t in store.tickets] == before
