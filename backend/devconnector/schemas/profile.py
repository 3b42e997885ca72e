"""
Schemas for developer profiles.
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.schemas.common import require_text

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileUpsert(BaseModel):
    """
    Body of POST /api/profile (create or update).

    `skills` accepts either a comma-separated string ("python, sql") or a list;
    it is stored as a trimmed list without empty entries.
    """
    status: str = Field(default="", validate_default=True)
    skills: List[str] = Field(default_factory=list, validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return require_text(v, "Status is required")

    @field_validator("skills", mode="before")
    @classmethod
    def validate_skills(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            raise ValueError("Skills is required")
        skills = [str(skill).strip() for skill in v if str(skill).strip()]
        if not skills:
            raise ValueError("Skills is required")
        return skills

    def social_links(self) -> Dict[str, str]:
        """Only the social networks the client actually filled in."""
        links = {}
        for network in SOCIAL_NETWORKS:
            value = getattr(self, network)
            if value:
                links[network] = value
        return links


class ProfileOwner(BaseModel):
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    id: uuid.UUID
    user: ProfileOwner
    status: str
    skills: List[str]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Dict[str, str] = Field(default_factory=dict)
    date: datetime = Field(validation_alias="created_at")

    model_config = {"from_attributes": True, "populate_by_name": True}
