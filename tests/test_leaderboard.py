"""
Leaderboard assembly tests: candidate sources, profile fallbacks, ranking.

Run:
----
    pytest tests/test_leaderboard.py -v
"""

from badgeboard.services import (
    LocalPlatform,
    MemberProfile,
    PlatformError,
    build_leaderboard,
)

from .conftest import ADMIN, COMPANY, MEMBER, OUTSIDER


class BrokenDirectory(LocalPlatform):
    """Local platform whose directory listing always fails."""

    def list_members(self, company_id):
        raise PlatformError("directory down")


class TestBuildLeaderboard:
    def test_includes_every_source(self, service, platform):
        badge = service.create(COMPANY, "Gold", "🥇", "#FFD700", "", ADMIN)
        service.assign(badge.id, "holder_1", COMPANY, ADMIN)
        service.track_user_access(COMPANY, "tracked_1")

        entries = build_leaderboard(service, platform, COMPANY, "viewer_1")
        ids = {e.user_id for e in entries}

        assert {"viewer_1", "holder_1", "tracked_1", ADMIN, MEMBER, OUTSIDER} <= ids
        assert len(ids) == len(entries)

    def test_viewer_is_tracked(self, service, platform):
        build_leaderboard(service, platform, COMPANY, "viewer_1")
        assert "viewer_1" in service.get_tracked_users(COMPANY)

    def test_badge_holders_rank_first(self, service, platform):
        gold = service.create(COMPANY, "Gold", "🥇", "#FFD700", "", ADMIN)
        silver = service.create(COMPANY, "Silver", "🥈", "#C0C0C0", "", ADMIN)
        service.assign(silver.id, MEMBER, COMPANY, ADMIN)
        service.assign(gold.id, ADMIN, COMPANY, ADMIN)

        entries = build_leaderboard(service, platform, COMPANY, MEMBER)

        assert [e.user_id for e in entries[:2]] == [ADMIN, MEMBER]
        assert entries[0].highest_badge.id == gold.id
        assert all(e.total_badges == 0 for e in entries[2:])

    def test_profiles_and_fallback_names(self, service, platform):
        service.track_user_access(COMPANY, "ghost_user_123")
        entries = {e.user_id: e for e in build_leaderboard(service, platform, COMPANY, MEMBER)}

        assert entries[ADMIN].display_name == "Ada Admin"
        assert entries[ADMIN].username == "boss"
        assert entries[OUTSIDER].display_name == "@olly"
        assert entries["ghost_user_123"].display_name == "User ghost_us"
        assert entries["ghost_user_123"].username is None

    def test_directory_failure_keeps_known_users(self, service):
        platform = BrokenDirectory()
        platform.register_member("elsewhere", MemberProfile(id="u1", name="Una"))
        service.track_user_access(COMPANY, "u1")

        entries = build_leaderboard(service, platform, COMPANY, "viewer_1")

        assert {e.user_id for e in entries} == {"viewer_1", "u1"}
        assert {e.display_name for e in entries} == {"User viewer_1", "Una"}
