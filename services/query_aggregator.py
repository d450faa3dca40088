# services/query_aggregator.py
import logging
from typing import Iterable, List, Optional

from models.interview import Question
from models.search import SearchCriteria, SearchResult
from services.errors import MissingParameterError, NotFoundError
from utils.normalize import clean

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ("company", "role", "position", "year")

MISSING_PARAMETERS = "All parameters (company, role, position, year) are required."
NO_INTERVIEWS = "No matching data found."
NO_QUESTIONS = "No questions found for the given filters."


def filter_questions(questions: Iterable[Question], topic: Optional[str] = None,
                     difficulty: Optional[str] = None) -> List[Question]:
    """Keep questions matching every supplied filter (exact, case-sensitive)."""
    def match(q: Question) -> bool:
        if topic and q.topic.value != topic:
            return False
        if difficulty and q.difficulty.value != difficulty:
            return False
        return True

    return [q for q in questions if match(q)]


class QueryAggregator:
    def __init__(self, store):
        self.store = store

    def search(self, criteria: SearchCriteria) -> SearchResult:
        identity = {field: clean(getattr(criteria, field)) for field in IDENTITY_FIELDS}
        missing = [field for field, value in identity.items() if not value]
        if missing:
            raise MissingParameterError(MISSING_PARAMETERS, details={"missing": missing})

        interviews = self.store.find_matching(**identity)
        if not interviews:
            raise NotFoundError(NO_INTERVIEWS)

        questions: List[Question] = []
        for interview in interviews:
            questions.extend(filter_questions(interview.questions, criteria.topic, criteria.difficulty))

        if not questions:
            raise NotFoundError(NO_QUESTIONS)

        logger.debug("search %s topic=%r difficulty=%r -> %d interviews, %d questions",
                     identity, criteria.topic, criteria.difficulty, len(interviews), len(questions))
        return SearchResult(
            total_results=len(interviews),
            total_questions=len(questions),
            questions=questions,
        )
