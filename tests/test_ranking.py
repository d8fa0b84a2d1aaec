"""
Leaderboard ordering tests.

Run:
----
    pytest tests/test_ranking.py -v
"""

from badgeboard.services import Badge, LeaderboardEntry, rank_entries


def _badge(badge_id: str, order: int) -> Badge:
    return Badge(
        id=badge_id,
        company_id="biz_1",
        name=badge_id,
        emoji="🏅",
        color="#000",
        description="",
        created_at="2026-01-01T00:00:00+00:00",
        created_by="user_admin",
        order=order,
    )


TOP = _badge("top", 0)
MID = _badge("mid", 1)
LOW = _badge("low", 2)


def _names(entries):
    return [e.display_name for e in rank_entries(entries)]


class TestRankEntries:
    def test_badge_holders_before_everyone_else(self):
        entries = [
            LeaderboardEntry("u1", "Aaron"),
            LeaderboardEntry("u2", "Zed", badges=[LOW]),
        ]
        assert _names(entries) == ["Zed", "Aaron"]

    def test_best_badge_wins(self):
        entries = [
            LeaderboardEntry("u1", "A", badges=[MID, LOW]),
            LeaderboardEntry("u2", "B", badges=[TOP]),
        ]
        assert _names(entries) == ["B", "A"]

    def test_more_badges_break_equal_best_badge(self):
        entries = [
            LeaderboardEntry("u1", "Alice", badges=[TOP]),
            LeaderboardEntry("u2", "Bob", badges=[TOP, LOW]),
            LeaderboardEntry("u3", "Carol"),
        ]
        assert _names(entries) == ["Bob", "Alice", "Carol"]

    def test_display_name_breaks_full_tie(self):
        entries = [
            LeaderboardEntry("u1", "bob", badges=[TOP]),
            LeaderboardEntry("u2", "Alice", badges=[TOP]),
            LeaderboardEntry("u3", "Carol"),
        ]
        assert _names(entries) == ["Alice", "bob", "Carol"]

    def test_badgeless_users_alphabetical(self):
        entries = [
            LeaderboardEntry("u1", "@zoe"),
            LeaderboardEntry("u2", "Mia"),
            LeaderboardEntry("u3", "anna"),
        ]
        assert _names(entries) == ["@zoe", "anna", "Mia"]

    def test_order_is_deterministic_for_identical_names(self):
        entries = [
            LeaderboardEntry("u2", "Sam"),
            LeaderboardEntry("u1", "Sam"),
        ]
        assert [e.user_id for e in rank_entries(entries)] == ["u1", "u2"]
        assert [e.user_id for e in rank_entries(list(reversed(entries)))] == ["u1", "u2"]

    def test_duplicate_orders_tolerated(self):
        twin = _badge("twin", 0)
        entries = [
            LeaderboardEntry("u1", "B", badges=[twin]),
            LeaderboardEntry("u2", "A", badges=[TOP]),
        ]
        assert _names(entries) == ["A", "B"]


class TestEntrySerialization:
    def test_badgeless_entry(self):
        data = LeaderboardEntry("u1", "User u1").to_dict()
        assert data["total_badges"] == 0
        assert data["highest_badge"] is None
        assert data["highest_badge_order"] is None

    def test_badged_entry(self):
        data = LeaderboardEntry("u1", "A", badges=[MID, LOW]).to_dict()
        assert data["total_badges"] == 2
        assert data["highest_badge"]["id"] == "mid"
        assert data["highest_badge_order"] == 1
