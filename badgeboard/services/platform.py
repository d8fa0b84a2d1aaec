"""
Platform adapter: identity, access control and the member directory.

Everything the badge service needs from the host platform goes through the
Platform protocol. Implementations: Whop HTTP API (production) and an
in-process directory (local development and tests). Swap via config.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

import requests
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ACCESS_ADMIN = "admin"
ACCESS_CUSTOMER = "customer"
ACCESS_NONE = "no_access"

USER_TOKEN_HEADER = "x-whop-user-token"
LOCAL_USER_HEADER = "x-user-id"
WHOP_TOKEN_ISSUER = "urn:whopcom:exp-proxy"

# Keys seen on platform user payloads, most specific first
_AVATAR_KEYS = ("profile_picture", "profilePicture", "avatar", "avatar_url", "image_url", "image", "picture")
_EMAIL_KEYS = ("email", "email_address", "emailAddress")
_ID_KEYS = ("id", "user_id", "userId")


class PlatformError(Exception):
    """The platform could not answer a request."""


class AuthenticationError(PlatformError):
    """The caller's identity could not be established."""


class AccessDeniedError(PlatformError):
    """The caller has no access to the requested company."""


class MemberNotFoundError(PlatformError):
    """The platform has no such user."""


@dataclass
class AccessResult:
    has_access: bool
    access_level: str

    @property
    def is_admin(self) -> bool:
        return self.has_access and self.access_level == ACCESS_ADMIN


@dataclass
class MemberProfile:
    id: str
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.username:
            return f"@{self.username}"
        return self.id


class Platform(Protocol):
    """Protocol for the host platform. Implement for Whop or local use."""

    def verify_user_token(self, headers: Mapping[str, str]) -> str:
        """Return the calling user's id, or raise AuthenticationError."""
        ...

    def check_access(self, company_id: str, user_id: str) -> AccessResult:
        ...

    def retrieve_user(self, user_id: str) -> MemberProfile:
        """Return the user's profile, or raise MemberNotFoundError / PlatformError."""
        ...

    def find_by_email(self, company_id: str, email: str) -> Optional[MemberProfile]:
        """Return the company member with this email, else None."""
        ...

    def list_members(self, company_id: str) -> List[MemberProfile]:
        ...


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    value = (value or "").strip()
    return value or None


def _first_present(payload: Dict[str, Any], keys: Iterable[str]) -> Optional[Any]:
    for key in keys:
        value = payload.get(key)
        if value:
            return value
    return None


def profile_from_payload(payload: Dict[str, Any]) -> Optional[MemberProfile]:
    """Build a profile from a user or member payload. None when no id is present."""
    if not isinstance(payload, dict):
        return None
    user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
    user_id = _first_present(user, _ID_KEYS)
    if user is not payload and not user_id:
        user_id = payload.get("user_id")
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    avatar = _first_present(user, _AVATAR_KEYS)
    if isinstance(avatar, dict):
        avatar = avatar.get("url")
    email = _first_present(user, _EMAIL_KEYS) or _first_present(payload, _EMAIL_KEYS)
    return MemberProfile(
        id=user_id.strip(),
        username=user.get("username"),
        name=user.get("name"),
        email=email,
        avatar=avatar if isinstance(avatar, str) else None,
    )


def _same_email(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a and b and a.strip().lower() == b.strip().lower())


class WhopPlatform:
    """
    Platform backed by the Whop REST API.

    User tokens arrive in the x-whop-user-token header as JWTs signed by Whop;
    they are verified locally against the app's public key. Directory calls use
    the app API key as a bearer token.
    """

    def __init__(
        self,
        api_key: str,
        app_id: str,
        token_public_key: str,
        token_algorithm: str = "ES256",
        api_base: str = "https://api.whop.com/api/v1",
        timeout: float = 10.0,
        max_member_pages: int = 20,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required for WhopPlatform")
        self._api_key = api_key
        self._app_id = app_id
        self._token_public_key = token_public_key
        self._token_algorithm = token_algorithm
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._max_member_pages = max_member_pages
        self._session = session or requests.Session()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._api_base}{path}"
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise PlatformError(f"Request to {path} failed: {e}") from e
        if response.status_code == 404:
            raise MemberNotFoundError(f"Not found: {path}")
        if response.status_code in (401, 403):
            raise AccessDeniedError(f"Platform refused {path} ({response.status_code})")
        try:
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise PlatformError(f"Bad response from {path}: {e}") from e

    def verify_user_token(self, headers: Mapping[str, str]) -> str:
        token = _header(headers, USER_TOKEN_HEADER)
        if not token:
            raise AuthenticationError(f"Missing {USER_TOKEN_HEADER} header")
        if not self._token_public_key:
            raise AuthenticationError("No token public key configured")
        try:
            claims = jwt.decode(
                token,
                self._token_public_key,
                algorithms=[self._token_algorithm],
                audience=self._app_id,
                issuer=WHOP_TOKEN_ISSUER,
            )
        except JWTError as e:
            raise AuthenticationError(f"Invalid user token: {e}") from e
        user_id = claims.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("User token has no subject")
        return user_id

    def check_access(self, company_id: str, user_id: str) -> AccessResult:
        try:
            payload = self._get(f"/users/{user_id}/access/{company_id}")
        except MemberNotFoundError:
            # Unknown user or company
            return AccessResult(has_access=False, access_level=ACCESS_NONE)
        level = payload.get("access_level") or ACCESS_NONE
        has_access = bool(payload.get("has_access", level != ACCESS_NONE))
        return AccessResult(has_access=has_access, access_level=level)

    def retrieve_user(self, user_id: str) -> MemberProfile:
        payload = self._get(f"/users/{user_id}")
        profile = profile_from_payload(payload)
        if profile is None:
            raise PlatformError(f"User payload for {user_id!r} has no id")
        return profile

    def _member_page(self, company_id: str, extra: Dict[str, Any]) -> tuple:
        payload = self._get("/members", params={"company_id": company_id, **extra})
        if isinstance(payload, list):
            return payload, None
        items = payload.get("data") or payload.get("members") or payload.get("items") or []
        page_info = payload.get("page_info") or {}
        if page_info.get("has_next_page") and page_info.get("end_cursor"):
            return items, {"after": page_info["end_cursor"]}
        if payload.get("has_more") or payload.get("hasMore"):
            return items, {"page": int(extra.get("page", 1)) + 1}
        return items, None

    def list_members(self, company_id: str) -> List[MemberProfile]:
        members: List[MemberProfile] = []
        seen = set()
        params: Optional[Dict[str, Any]] = {}
        pages = 0
        while params is not None and pages < self._max_member_pages:
            items, params = self._member_page(company_id, params)
            pages += 1
            if not items:
                break
            for item in items:
                profile = profile_from_payload(item)
                if profile and profile.id not in seen:
                    seen.add(profile.id)
                    members.append(profile)
        if params is not None:
            logger.warning(f"[platform] member listing for {company_id!r} stopped at {pages} pages")
        return members

    def find_by_email(self, company_id: str, email: str) -> Optional[MemberProfile]:
        # 1. Directory search by email
        try:
            items, _ = self._member_page(company_id, {"query": email})
            for item in items:
                profile = profile_from_payload(item)
                if profile and _same_email(profile.email, email):
                    return profile
        except AccessDeniedError:
            raise
        except PlatformError as e:
            logger.warning(f"[platform] member search failed for company={company_id!r}: {e}")
        # 2. Full member scan
        try:
            members = self.list_members(company_id)
        except MemberNotFoundError as e:
            logger.warning(f"[platform] member directory not found for company={company_id!r}: {e}")
            return None
        for profile in members:
            if _same_email(profile.email, email):
                return profile
        return None


class LocalPlatform:
    """
    In-process platform for development and tests.

    The caller's id is read from the x-user-id header (a raw id in
    x-whop-user-token is accepted too). Every caller can see every company;
    ids in admin_user_ids, or members registered as admins, are admins.
    """

    def __init__(self, admin_user_ids: Iterable[str] = ()):
        self._admin_user_ids = {uid for uid in admin_user_ids if uid}
        self._profiles: Dict[str, MemberProfile] = {}
        self._members: Dict[str, Dict[str, str]] = {}

    def register_member(
        self,
        company_id: str,
        profile: MemberProfile,
        access_level: str = ACCESS_CUSTOMER,
    ) -> MemberProfile:
        self._profiles[profile.id] = profile
        self._members.setdefault(company_id, {})[profile.id] = access_level
        return profile

    def verify_user_token(self, headers: Mapping[str, str]) -> str:
        user_id = _header(headers, LOCAL_USER_HEADER) or _header(headers, USER_TOKEN_HEADER)
        if not user_id:
            raise AuthenticationError(f"Missing {LOCAL_USER_HEADER} header")
        return user_id

    def check_access(self, company_id: str, user_id: str) -> AccessResult:
        if user_id in self._admin_user_ids:
            return AccessResult(has_access=True, access_level=ACCESS_ADMIN)
        level = self._members.get(company_id, {}).get(user_id, ACCESS_CUSTOMER)
        return AccessResult(has_access=level != ACCESS_NONE, access_level=level)

    def retrieve_user(self, user_id: str) -> MemberProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            raise MemberNotFoundError(f"Unknown user {user_id!r}")
        return profile

    def find_by_email(self, company_id: str, email: str) -> Optional[MemberProfile]:
        for profile in self.list_members(company_id):
            if _same_email(profile.email, email):
                return profile
        return None

    def list_members(self, company_id: str) -> List[MemberProfile]:
        return [self._profiles[uid] for uid in self._members.get(company_id, {})]
