from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mentorlink.database import get_db
from mentorlink.schemas import Identity, ProfileResponse
from mentorlink.services import discovery_service
from mentorlink.utils.security import get_current_user

router = APIRouter(tags=["Discover"])


@router.get("/discover", response_model=List[ProfileResponse])
def discover_profiles(
    role: Optional[str] = None,
    skills: Optional[str] = None,
    interests: Optional[str] = None,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return discovery_service.discover(
        db,
        caller_id=current_user.id,
        role=role,
        skills=skills,
        interests=interests,
    )
