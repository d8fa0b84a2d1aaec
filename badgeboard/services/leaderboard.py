"""
Leaderboard assembly.

Candidate users come from four sources, merged in this order: the viewer,
badge holders, users the service has seen in the company, and the platform's
member directory. Each candidate is resolved to a display profile and the
result is ranked with services.ranking.
"""

import logging
from typing import Dict, List

from ..utils import fallback_display_name
from .badge_service import BadgeService
from .platform import MemberProfile, Platform, PlatformError
from .ranking import LeaderboardEntry, rank_entries

logger = logging.getLogger(__name__)


def collect_user_ids(
    service: BadgeService,
    platform: Platform,
    company_id: str,
    viewer_id: str,
    known_profiles: Dict[str, MemberProfile],
) -> List[str]:
    """
    Ordered, de-duplicated candidate ids for a company's leaderboard.

    Profiles returned by the member directory are stored in known_profiles so
    they need not be fetched again.
    """
    ids: Dict[str, None] = {viewer_id: None}
    holders = service.get_all_users_with_badges(company_id)
    tracked = service.get_tracked_users(company_id)
    for summary in holders:
        ids[summary.user_id] = None
    for user_id in tracked:
        ids[user_id] = None

    members: List[MemberProfile] = []
    try:
        members = platform.list_members(company_id)
    except PlatformError as e:
        logger.warning(f"[leaderboard] member directory unavailable for {company_id!r}: {e}")
    for profile in members:
        ids[profile.id] = None
        known_profiles.setdefault(profile.id, profile)

    logger.info(
        f"[leaderboard] company={company_id!r} candidates={len(ids)} "
        f"(with badges={len(holders)}, tracked={len(tracked)}, directory={len(members)})"
    )
    return list(ids)


def _resolve_entry(
    platform: Platform,
    user_id: str,
    known_profiles: Dict[str, MemberProfile],
    badges: list,
) -> LeaderboardEntry:
    profile = known_profiles.get(user_id)
    if profile is None:
        try:
            profile = platform.retrieve_user(user_id)
        except PlatformError as e:
            logger.info(f"[leaderboard] no profile for {user_id!r}: {e}")
    if profile is None:
        return LeaderboardEntry(user_id=user_id, display_name=fallback_display_name(user_id), badges=badges)
    return LeaderboardEntry(
        user_id=user_id,
        display_name=profile.display_name,
        username=profile.username,
        avatar=profile.avatar,
        badges=badges,
    )


def build_leaderboard(
    service: BadgeService,
    platform: Platform,
    company_id: str,
    viewer_id: str,
) -> List[LeaderboardEntry]:
    """Ranked leaderboard for a company as seen by viewer_id (who is tracked)."""
    service.track_user_access(company_id, viewer_id)
    known_profiles: Dict[str, MemberProfile] = {}
    user_ids = collect_user_ids(service, platform, company_id, viewer_id, known_profiles)
    badges_by_user = {s.user_id: s.badges for s in service.get_all_users_with_badges(company_id)}
    entries = [
        _resolve_entry(platform, user_id, known_profiles, badges_by_user.get(user_id, []))
        for user_id in user_ids
    ]
    return rank_entries(entries)
