# models/interview.py

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Topic(str, Enum):
    ARRAYS = "Arrays"
    DP = "DP"
    GRAPHS = "Graphs"
    LLD = "LLD"
    SYSTEM_DESIGN = "System Design"
    ALGORITHMS = "Algorithms"
    BEHAVIORAL = "Behavioral"


class RoundType(str, Enum):
    OA = "OA"
    TECHNICAL = "Technical"
    DESIGN = "Design"
    HR = "HR"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Position(str, Enum):
    INTERN = "Intern"
    SDE1 = "SDE1"
    SDE2 = "SDE2"
    SENIOR = "Senior"
    LEAD = "Lead"


DEFAULT_FREQUENCY = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Question(BaseModel):
    """One interview question, embedded by value in its Interview."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    text: str = Field(min_length=1)
    topic: Topic
    round_type: RoundType = Field(alias="roundType")
    difficulty: Difficulty
    # strict: booleans and numeric strings are not frequencies
    frequency: int = Field(default=DEFAULT_FREQUENCY, ge=1, le=5, strict=True)
    recency: datetime = Field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Interview(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    company: str = Field(min_length=1)
    role: str = Field(min_length=1)
    position: Position
    experience: str = Field(min_length=1)
    year: str = Field(min_length=1)
    questions: List[Question] = Field(default_factory=list)

    @field_validator("company", "role", "experience", "year")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        # searches trim their input, so a whitespace-only value could never be found
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class StoredInterview(Interview):
    # assigned by the store on insert
    id: int
