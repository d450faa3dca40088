# models/search.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.interview import Question


class SearchCriteria(BaseModel):
    """
    Raw search input. Identity fields are optional here so that a missing
    one surfaces as a MissingParameterError from the aggregator instead of
    a schema error.
    """

    company: Optional[str] = None
    role: Optional[str] = None
    position: Optional[str] = None
    year: Optional[str] = None
    topic: Optional[str] = None
    difficulty: Optional[str] = None


class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_results: int = Field(alias="totalResults")
    total_questions: int = Field(alias="totalQuestions")
    questions: List[Question]

    def to_dict(self):
        return self.model_dump(mode="json", by_alias=True)
