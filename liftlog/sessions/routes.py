# liftlog/sessions/routes.py

from flask import Blueprint, request, jsonify

from liftlog.auth.utils import token_required, current_user_id
from liftlog.errors import InvalidRequest
from liftlog.profiles.service import get_or_create_profile
from liftlog.schemas import (
    CompletionRequest,
    DraftExerciseRequest,
    DraftStart,
    SessionDraft,
    validate_body,
)
from liftlog.sessions.service import (
    complete_session,
    dashboard_summary,
    list_sessions,
    save_session,
    session_detail,
)

sessions_bp = Blueprint('sessions', __name__)


@sessions_bp.route("/draft", methods=["POST"])
@token_required
def start_draft():
    """
    Starts a manual (non-AI) draft with an empty plan.

    Duration falls back to the profile's default_duration, intent to 'form'.
    """
    body = validate_body(DraftStart, request.get_json(silent=True) or {})
    duration = body.duration
    if duration is None:
        profile = get_or_create_profile(current_user_id(), request.current_user.get("email"))
        duration = profile.get("default_duration")
    draft = SessionDraft(duration=duration, intent=body.intent)
    return jsonify(draft.model_dump()), 200


@sessions_bp.route("/draft/exercises", methods=["POST"])
@token_required
def add_draft_exercise():
    body = validate_body(DraftExerciseRequest, request.get_json(silent=True))
    draft = body.draft.with_exercise(body.exercise_name)
    return jsonify(draft.model_dump()), 200


@sessions_bp.route("/save", methods=["POST"])
@token_required
def save():
    draft = validate_body(SessionDraft, request.get_json(silent=True))
    session_id = save_session(current_user_id(), draft)
    return jsonify({"sessionId": session_id}), 201


@sessions_bp.route("/", methods=["GET"], strict_slashes=False)
@token_required
def history():
    limit = request.args.get("limit")
    if limit is not None:
        try:
            limit = int(limit)
        except ValueError:
            raise InvalidRequest("limit must be an integer.")
        if limit < 1:
            raise InvalidRequest("limit must be positive.")
    return jsonify({"sessions": list_sessions(current_user_id(), limit=limit)}), 200


@sessions_bp.route("/summary", methods=["GET"])
@token_required
def summary():
    return jsonify(dashboard_summary(current_user_id(), request.current_user.get("email"))), 200


@sessions_bp.route("/<session_id>", methods=["GET"])
@token_required
def detail(session_id):
    return jsonify(session_detail(current_user_id(), session_id)), 200


@sessions_bp.route("/<session_id>/complete", methods=["POST"])
@token_required
def complete(session_id):
    completion = validate_body(CompletionRequest, request.get_json(silent=True) or {})
    actual = complete_session(
        current_user_id(),
        session_id,
        completion,
        email=request.current_user.get("email"),
    )
    return jsonify({"session_id": session_id, "actual": actual}), 200
