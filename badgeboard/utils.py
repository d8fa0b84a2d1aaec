"""Pure helpers: id generation, timestamps, request field checks."""

import re
import time
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

# Basic shape check only; the platform is the authority on real addresses.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def generate_id() -> str:
    """Return an opaque id of the form '<epoch-millis>-<7 hex chars>'."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def clean_id(value: Optional[str]) -> Optional[str]:
    """Strip whitespace from an id; blank or missing ids become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def missing_fields(fields: Dict[str, Optional[str]]) -> List[str]:
    """Names of fields that are None, not a string, or whitespace-only."""
    return [
        name
        for name, value in fields.items()
        if not isinstance(value, str) or not value.strip()
    ]


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_PATTERN.match(email.strip()))


def fallback_display_name(user_id: str) -> str:
    """Display name used when the platform cannot return a profile."""
    return f"User {user_id[:8]}"
