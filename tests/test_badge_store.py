"""
Badge store tests: creation order, lookup, partial update, cascade delete, reindex.

Run:
----
    pytest tests/test_badge_store.py -v
"""

from badgeboard.services import BadgeService

from .conftest import COMPANY, OTHER_COMPANY


def _create(service: BadgeService, name: str, company_id: str = COMPANY):
    return service.create(company_id, name, "🏅", "#000000", "", "user_admin")


class TestCreate:
    def test_first_badge_gets_order_zero(self, service):
        assert _create(service, "First").order == 0

    def test_orders_follow_highest_existing(self, service):
        a = _create(service, "A")
        b = _create(service, "B")
        service.update(a.id, {"order": 7})
        c = _create(service, "C")
        assert b.order == 1
        assert c.order == 8

    def test_orders_are_per_company(self, service):
        _create(service, "A")
        _create(service, "B")
        other = _create(service, "X", company_id=OTHER_COMPANY)
        assert other.order == 0

    def test_duplicate_names_allowed(self, service):
        a = _create(service, "Same")
        b = _create(service, "Same")
        assert a.id != b.id
        assert len(service.get_by_company(COMPANY)) == 2

    def test_round_trip_through_get_by_id(self, service):
        badge = service.create(COMPANY, "OG", "🏆", "#3B82F6", "Founding member", "user_admin")
        fetched = service.get_by_id(badge.id)
        assert fetched == badge
        assert fetched.company_id == "biz_1"
        assert fetched.name == "OG"
        assert fetched.emoji == "🏆"
        assert fetched.color == "#3B82F6"
        assert fetched.description == "Founding member"
        assert fetched.created_by == "user_admin"
        assert fetched.id and fetched.created_at
        assert fetched.order == 0
        assert service.get_by_id(f"  {badge.id}\n") == badge


class TestLookup:
    def test_blank_ids_are_not_found(self, service):
        _create(service, "A")
        assert service.get_by_id("") is None
        assert service.get_by_id("   ") is None
        assert service.get_by_id(None) is None

    def test_unknown_id_is_not_found(self, service):
        assert service.get_by_id("nope") is None

    def test_get_by_company_sorted_by_order(self, service):
        a = _create(service, "A")
        b = _create(service, "B")
        c = _create(service, "C")
        service.update(a.id, {"order": 5})
        assert [x.id for x in service.get_by_company(COMPANY)] == [b.id, c.id, a.id]

    def test_duplicate_orders_keep_creation_sequence(self, service):
        a = _create(service, "A")
        b = _create(service, "B")
        service.update(b.id, {"order": 0})
        assert [x.id for x in service.get_by_company(COMPANY)] == [a.id, b.id]

    def test_get_by_company_ignores_other_companies(self, service):
        _create(service, "A")
        _create(service, "X", company_id=OTHER_COMPANY)
        assert [b.name for b in service.get_by_company(OTHER_COMPANY)] == ["X"]


class TestUpdate:
    def test_partial_update_keeps_order(self, service):
        badge = _create(service, "A")
        service.update(badge.id, {"order": 3})
        updated = service.update(badge.id, {"name": "X"})
        assert updated.name == "X"
        assert updated.order == 3
        assert service.get_by_id(badge.id).order == 3

    def test_none_order_keeps_order(self, service):
        _create(service, "A")
        badge = _create(service, "B")
        assert service.update(badge.id, {"order": None, "color": "#fff"}).order == 1

    def test_immutable_fields_ignored(self, service):
        badge = _create(service, "A")
        updated = service.update(
            badge.id,
            {"id": "hijack", "created_at": "1999", "company_id": OTHER_COMPANY, "created_by": "x", "emoji": "🔥"},
        )
        assert updated.id == badge.id
        assert updated.created_at == badge.created_at
        assert updated.company_id == COMPANY
        assert updated.created_by == badge.created_by
        assert updated.emoji == "🔥"

    def test_update_trims_id(self, service):
        badge = _create(service, "A")
        assert service.update(f" {badge.id} ", {"name": "B"}).name == "B"

    def test_update_missing_badge(self, service):
        assert service.update("missing", {"name": "B"}) is None
        assert service.update("  ", {"name": "B"}) is None


class TestDelete:
    def test_delete_reports_existence(self, service):
        badge = _create(service, "A")
        assert service.delete(badge.id) is True
        assert service.delete(badge.id) is False
        assert service.get_by_id(badge.id) is None

    def test_delete_cascades_to_assignments(self, service):
        badge = _create(service, "A")
        keep = _create(service, "B")
        service.assign(badge.id, "u1", COMPANY, "user_admin")
        service.assign(badge.id, "u2", COMPANY, "user_admin")
        service.assign(keep.id, "u1", COMPANY, "user_admin")

        service.delete(badge.id)

        assert service.get_assignments_by_badge(badge.id) == []
        assert [b.id for b in service.get_user_badges("u1", COMPANY)] == [keep.id]
        assert service.get_user_badges("u2", COMPANY) == []
        assert len(service.get_user_assignments("u1", COMPANY)) == 1


class TestUpdateOrder:
    def test_reindex(self, service):
        a = _create(service, "A")
        b = _create(service, "B")
        c = _create(service, "C")
        assert service.update_order([c.id, a.id, b.id]) is True
        assert service.get_by_id(c.id).order == 0
        assert service.get_by_id(a.id).order == 1
        assert service.get_by_id(b.id).order == 2
        assert [x.id for x in service.get_by_company(COMPANY)] == [c.id, a.id, b.id]

    def test_unknown_ids_are_skipped(self, service):
        a = _create(service, "A")
        b = _create(service, "B")
        service.update_order(["ghost", b.id, a.id])
        assert service.get_by_id(b.id).order == 1
        assert service.get_by_id(a.id).order == 2

    def test_reorder_keeps_other_fields(self, service):
        a = _create(service, "A")
        service.update_order([a.id])
        assert service.get_by_id(a.id).name == "A"
