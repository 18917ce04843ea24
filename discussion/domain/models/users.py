"""User profile projection used inside read models."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """Read-only public profile of a user, joined into thread/message/participant views.

    Profiles are owned by the user-management feature; this layer never writes them.
    """

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    fullname: str | None = None
    avatar_url: str | None = None
