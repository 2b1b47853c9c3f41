from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from mentorlink.database import get_db
from mentorlink.schemas import Identity, MessageResponse, ProfileImageResponse, ProfileResponse, ProfileUpdate
from mentorlink.services import identity_service, profile_service
from mentorlink.utils.security import get_current_user

router = APIRouter(prefix="/profile", tags=["Profiles"])


# ======================
# GET: Current user profile
# ======================
@router.get("", response_model=ProfileResponse)
def get_my_profile(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return profile_service.get_profile_with_username(db, current_user.id)


# ======================
# PUT: Create or update profile
# ======================
@router.put("", response_model=ProfileResponse)
async def edit_profile(
    role: Optional[str] = Form(None),
    skills: Optional[str] = Form(None),
    interests: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    about: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    image = None
    content_type = None
    if profile_image is not None:
        image = await profile_image.read()
        content_type = profile_image.content_type

    return profile_service.update_profile(
        db,
        current_user.id,
        ProfileUpdate(role=role, skills=skills, interests=interests, bio=bio, about=about),
        image=image or None,
        image_content_type=content_type,
    )


# ======================
# DELETE: Profile and account
# ======================
@router.delete("", response_model=MessageResponse)
def delete_profile_and_user(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    identity_service.delete_account(db, user_id=current_user.id)
    return {"message": "Profile and user deleted successfully"}


# ======================
# GET: Current user image
# ======================
@router.get("/image", response_model=ProfileImageResponse)
def get_profile_image(
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return profile_service.get_profile_image(db, current_user.id)


# ======================
# GET: Public profile by username
# ======================
@router.get("/{username}", response_model=ProfileResponse)
def get_user_profile(username: str, db: Session = Depends(get_db)):
    return profile_service.get_profile_by_username(db, username)
