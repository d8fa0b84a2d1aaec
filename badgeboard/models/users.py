"""User-scoped response models."""

from pydantic import BaseModel


class AdminStatusResponse(BaseModel):
    is_admin: bool
    access_level: str
