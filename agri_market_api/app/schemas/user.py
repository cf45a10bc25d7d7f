"""
Pydantic models for marketplace users.

Every user has exactly one role.  Farmers additionally carry a profile
(farm name, bio, address), a list of certifications and a verification
status reviewed by administrators.  ``UserInDB`` is the stored record
and is the only model that carries the password hash; it is never
returned through the API.
"""

import re
from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Role(str, Enum):
    ADMIN = "admin"
    FARMER = "farmer"
    BUYER = "buyer"
    MIDDLEMAN = "middleman"
    TRANSPORTER = "transporter"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    full_name: str = Field(..., min_length=1)
    email: str
    phone: Optional[str] = None
    role: Role = Role.BUYER
    location: Optional[str] = None
    farm_name: Optional[str] = None
    farm_bio: Optional[str] = None
    farm_address: Optional[str] = None
    verification_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please enter a valid email")
        return v


class UserCreate(UserBase):
    """Registration payload."""

    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")


class UserRead(UserBase):
    """User as returned by the API."""

    id: int
    profile_picture: Optional[str] = None
    certifications: List[str] = Field(default_factory=list)
    verification_status: VerificationStatus = VerificationStatus.PENDING
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class UserInDB(UserRead):
    password_hash: str

    def public(self) -> UserRead:
        return UserRead.model_validate(self.model_dump(exclude={"password_hash"}))


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class FarmerProfileUpdate(BaseModel):
    """Partial update of a farmer's public profile.

    Only supplied fields are changed.
    """

    farm_name: Optional[str] = None
    farm_bio: Optional[str] = None
    farm_address: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None


class VerificationSubmit(BaseModel):
    verification_id: str = Field(..., min_length=1, description="Government ID or farm association ID")

    @field_validator("verification_id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Verification ID cannot be empty")
        return v


class CertificationUpdate(BaseModel):
    action: Literal["add", "remove"]
    certification: str = Field(..., min_length=1, description="e.g. organic, fair trade")

    @field_validator("certification")
    @classmethod
    def strip_certification(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Certification cannot be empty")
        return v


class VerificationReview(BaseModel):
    status: Literal["verified", "rejected"]
