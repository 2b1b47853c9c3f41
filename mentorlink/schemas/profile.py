from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ======================
# PROFILE SCHEMAS
# ======================

class ProfileBase(BaseModel):
    about: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[str] = None
    interests: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(ProfileBase):
    """Editable profile fields. ``None`` leaves the stored value unchanged."""
    pass


class ProfileResponse(ProfileBase):
    """Profile as returned to its owner and to other users.

    Credential fields (email, password hash) are never part of this model.
    """
    id: int
    user_id: int
    username: str
    profile_image: Optional[str] = Field(None, description="base64 data URI")

    model_config = ConfigDict(from_attributes=True)


class ProfileImageResponse(BaseModel):
    username: str
    profileImage: Optional[str] = None
