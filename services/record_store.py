# services/record_store.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import JSON, Column, DateTime, Integer, String, create_engine, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from models.interview import Interview, StoredInterview
from services.errors import StoreUnavailableError, ValidationError
from utils.normalize import normalize_key

logger = logging.getLogger(__name__)

Base = declarative_base()


class InterviewRow(Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    position = Column(String(32), nullable=False)
    experience = Column(String(255), nullable=False)
    year = Column(String(32), nullable=False)
    # questions are owned by value: a JSON list, never a separate table
    questions = Column(JSON, nullable=False, default=list)

    # case-folded copies of the identity fields, used for exact matching
    company_key = Column(String(255), nullable=False, index=True)
    role_key = Column(String(255), nullable=False)
    position_key = Column(String(32), nullable=False)
    year_key = Column(String(32), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False,
                        default=lambda: datetime.now(timezone.utc))


REQUIRED_QUESTION_FIELDS = ("text", "topic", "roundType", "difficulty")
QUESTION_SHAPE_ERROR = "Each question must have text, topic, roundType, and difficulty"


def _has_question_shape(question: Any) -> bool:
    return isinstance(question, dict) and all(question.get(f) for f in REQUIRED_QUESTION_FIELDS)


def _apply_question_defaults(question: Dict[str, Any]) -> Dict[str, Any]:
    # falsy frequency/recency fall back to the model defaults (3 / now)
    cleaned = dict(question)
    for field in ("frequency", "recency"):
        if not cleaned.get(field):
            cleaned.pop(field, None)
    return cleaned


def _describe_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def validate_interview(payload: Any) -> Interview:
    """
    Turn a raw create payload into an Interview, or raise ValidationError.

    The question-shape check runs before schema validation so a missing
    required question field always yields the same message.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    questions = payload.get("questions")
    if not isinstance(questions, list) or not all(_has_question_shape(q) for q in questions):
        raise ValidationError(QUESTION_SHAPE_ERROR)

    candidate = dict(payload)
    candidate["questions"] = [_apply_question_defaults(q) for q in questions]
    try:
        return Interview.model_validate(candidate)
    except PydanticValidationError as exc:
        raise ValidationError("Interview record failed validation",
                              details=_describe_errors(exc)) from exc


def _to_interview(row: InterviewRow) -> StoredInterview:
    return StoredInterview.model_validate({
        "id": row.id,
        "company": row.company,
        "role": row.role,
        "position": row.position,
        "experience": row.experience,
        "year": row.year,
        "questions": row.questions or [],
    })


class RecordStore:
    """SQLAlchemy-backed persistence for interview records."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def connect(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Unable to connect to the interview store",
                                        details=str(exc)) from exc
        logger.info("Interview store is connected (%s)", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self.engine.dispose()

    def create(self, record: Union[Interview, Dict[str, Any]]) -> StoredInterview:
        interview = record if isinstance(record, Interview) else validate_interview(record)

        row = InterviewRow(
            company=interview.company,
            role=interview.role,
            position=interview.position.value,
            experience=interview.experience,
            year=interview.year,
            questions=[q.to_dict() for q in interview.questions],
            company_key=normalize_key(interview.company),
            role_key=normalize_key(interview.role),
            position_key=normalize_key(interview.position.value),
            year_key=normalize_key(interview.year),
        )
        try:
            with self._session_factory() as session:
                with session.begin():
                    session.add(row)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to save data", details=str(exc)) from exc

        logger.info("Stored interview %s (%s / %s / %s / %s) with %d questions",
                    row.id, row.company, row.role, row.position, row.year, len(row.questions))
        return _to_interview(row)

    def find_matching(self, company: str, role: str, position: str, year: str) -> List[StoredInterview]:
        """
        Records whose four identity fields equal the given values, ignoring
        case and surrounding whitespace. Returned in insertion order.
        """
        stmt = (
            select(InterviewRow)
            .where(
                InterviewRow.company_key == normalize_key(company),
                InterviewRow.role_key == normalize_key(role),
                InterviewRow.position_key == normalize_key(position),
                InterviewRow.year_key == normalize_key(year),
            )
            .order_by(InterviewRow.id)
        )
        try:
            with self._session_factory() as session:
                rows = session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Failed to query interview store", details=str(exc)) from exc
        return [_to_interview(row) for row in rows]
