from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from mentorlink import models
from mentorlink.services.profile_service import serialize_profile


def discover(
    db: Session,
    *,
    caller_id: int,
    role: Optional[str] = None,
    skills: Optional[str] = None,
    interests: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List every other user's profile matching the given filters.

    Filters are ANDed: exact match on role, case-insensitive substring match
    on skills and interests. Empty filters are ignored.
    """
    query = (
        db.query(models.Profile, models.User.username)
        .join(models.User, models.Profile.user_id == models.User.id)
        .filter(models.Profile.user_id != caller_id)
    )

    if role:
        query = query.filter(models.Profile.role == role)
    if skills:
        query = query.filter(models.Profile.skills.ilike(f"%{skills}%"))
    if interests:
        query = query.filter(models.Profile.interests.ilike(f"%{interests}%"))

    return [serialize_profile(profile, username) for profile, username in query.all()]
