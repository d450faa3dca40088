import logging

from flask import Blueprint, current_app, jsonify, request

from models.search import SearchCriteria
from services.errors import InterviewBankError, NotFoundError

logger = logging.getLogger(__name__)

interview_bp = Blueprint("interview", __name__)


def _error_response(err: InterviewBankError):
    return jsonify(err.to_dict()), err.status_code


def _internal_error():
    return _error_response(InterviewBankError("Internal Server Error"))


@interview_bp.route("/api/interview", methods=["POST"])
def create_interview():
    try:
        payload = request.get_json(silent=True)
        record = current_app.extensions["record_store"].create(payload)
        return jsonify({"message": "Interview data saved successfully", "data": record.to_dict()}), 201
    except InterviewBankError as e:
        log = logger.error if e.status_code >= 500 else logger.warning
        log("[/api/interview] %s: %s %s", e.category, e.message, e.details or "")
        return _error_response(e)
    except Exception:
        logger.exception("[/api/interview] unexpected failure")
        return _internal_error()


@interview_bp.route("/api/interview/search", methods=["GET"])
def search_interviews():
    try:
        criteria = SearchCriteria(
            company=request.args.get("company"),
            role=request.args.get("role"),
            position=request.args.get("position"),
            year=request.args.get("year"),
            topic=request.args.get("topic"),
            difficulty=request.args.get("difficulty"),
        )
        result = current_app.extensions["query_aggregator"].search(criteria)
        return jsonify(result.to_dict()), 200
    except NotFoundError as e:
        logger.info("[/api/interview/search] %s", e.message)
        return _error_response(e)
    except InterviewBankError as e:
        log = logger.error if e.status_code >= 500 else logger.warning
        log("[/api/interview/search] %s: %s %s", e.category, e.message, e.details or "")
        return _error_response(e)
    except Exception:
        logger.exception("[/api/interview/search] unexpected failure")
        return _internal_error()
