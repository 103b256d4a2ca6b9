"""
Pydantic models for API endpoint input validation.

Request bodies use the camelCase keys the web client sends; required text
fields are trimmed and rejected when blank so handlers never see them empty.
"""

from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================
# ENUMS
# ============================================

class GoalStatus(str, Enum):
    """Valid goal statuses."""
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


def _trim_or_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    stripped = v.strip()
    return stripped or None


# ============================================
# GOALS
# ============================================

class GoalCreate(BaseModel):
    """Input validation for creating goals."""
    title: str = Field(default="", max_length=500, validate_default=True)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        stripped = (v or "").strip()
        if not stripped:
            raise ValueError("Title is required")
        return stripped

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _trim_or_none(v)


class GoalUpdate(BaseModel):
    """Partial goal update. Only fields present in the body are applied."""
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)
    status: Optional[GoalStatus] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        stripped = (v or "").strip()
        if not stripped:
            raise ValueError("Title cannot be empty")
        return stripped

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _trim_or_none(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is None:
            raise ValueError("Status cannot be null")
        return v

    def changes(self) -> dict:
        """Fields explicitly sent by the client, as column values."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = data["status"].value
        return data


# ============================================
# SPARKS
# ============================================

class SparkGenerateRequest(BaseModel):
    """Input validation for generating the next spark."""
    model_config = ConfigDict(populate_by_name=True)

    goal_id: str = Field(default="", alias="goalId", validate_default=True)
    goal_title: str = Field(default="", alias="goalTitle", max_length=500, validate_default=True)
    goal_description: Optional[str] = Field(None, alias="goalDescription", max_length=5000)

    @field_validator("goal_id", "goal_title")
    @classmethod
    def validate_required(cls, v):
        stripped = (v or "").strip()
        if not stripped:
            raise ValueError("Goal ID and title are required")
        return stripped

    @field_validator("goal_description")
    @classmethod
    def validate_description(cls, v):
        return _trim_or_none(v)


class SparkCompleteRequest(BaseModel):
    """Input validation for completing a spark."""
    model_config = ConfigDict(populate_by_name=True)

    spark_id: str = Field(default="", alias="sparkId", validate_default=True)
    goal_id: str = Field(default="", alias="goalId", validate_default=True)
    session_id: str = Field(default="", alias="sessionId", validate_default=True)
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator("spark_id", "goal_id", "session_id")
    @classmethod
    def validate_required(cls, v):
        stripped = (v or "").strip()
        if not stripped:
            raise ValueError("Spark ID, goal ID, and session ID are required")
        return stripped

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return _trim_or_none(v)
