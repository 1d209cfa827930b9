"""
Request bodies for the backend API.

Field names follow the wire format the server validates, so a model dumps
straight into a JSON body.
"""
import re
from typing import List

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class BasicOnboardingInfo(BaseModel):
    """First-run registration details."""

    firstname: str
    lastname: str
    dob: str
    contact: str
    city: str
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not EMAIL_PATTERN.match(v):
            raise ValueError(f"Invalid email address: {v!r}")
        return v


class FootballProfileRegister(BaseModel):
    """A player's football profile."""

    userId: int
    role: str
    experience: str
    nickname: str


class FootballTeamCreate(BaseModel):
    """A new football team and its initial roster."""

    name: str
    location: str
    createdByUserId: int
    maxPlayers: int
    playerIds: List[int] = Field(default_factory=list)
