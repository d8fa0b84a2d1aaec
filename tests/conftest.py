"""Shared fixtures: a fresh badge service, a local platform, and an API client."""

import pytest
from fastapi.testclient import TestClient

from badgeboard.app import create_app
from badgeboard.config import ServerConfig
from badgeboard.services import ACCESS_ADMIN, ACCESS_NONE, BadgeService, LocalPlatform, MemberProfile
from badgeboard.state import AppState, get_state

COMPANY = "biz_1"
OTHER_COMPANY = "biz_2"
ADMIN = "user_admin"
MEMBER = "user_member"
OUTSIDER = "user_outsider"


@pytest.fixture
def service():
    return BadgeService()


@pytest.fixture
def platform():
    local = LocalPlatform()
    admin = MemberProfile(id=ADMIN, username="boss", name="Ada Admin")
    local.register_member(COMPANY, admin, ACCESS_ADMIN)
    local.register_member(OTHER_COMPANY, admin, ACCESS_ADMIN)
    local.register_member(
        COMPANY,
        MemberProfile(id=MEMBER, username="mel", name="Mel Member", email="mel@example.com"),
    )
    local.register_member(COMPANY, MemberProfile(id=OUTSIDER, username="olly"), ACCESS_NONE)
    return local


@pytest.fixture
def state(service, platform):
    return AppState(ServerConfig(), service=service, platform=platform)


@pytest.fixture
def client(state):
    app = create_app(ServerConfig())
    app.dependency_overrides[get_state] = lambda: state
    return TestClient(app)


def as_user(user_id: str) -> dict:
    return {"x-user-id": user_id}
