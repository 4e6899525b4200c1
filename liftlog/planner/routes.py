# liftlog/planner/routes.py

from flask import Blueprint, request, jsonify, current_app

from liftlog.auth.utils import token_required, current_user_id
from liftlog.extensions import limiter
from liftlog.planner.service import generate_plan
from liftlog.schemas import PlanRequest, validate_body

planner_bp = Blueprint('planner', __name__)


@planner_bp.route("/generate-plan", methods=["POST"])
@limiter.limit(lambda: current_app.config["PLAN_RATE_LIMIT"])
@token_required
def generate_plan_route():
    """
    Asks the model for a workout sized to {duration, intent}.

    The plan is returned, not stored; the client saves it via /sessions/save.
    """
    body = validate_body(PlanRequest, request.get_json(silent=True))
    draft = generate_plan(
        current_user_id(),
        body.duration,
        body.intent,
        email=request.current_user.get("email"),
    )
    return jsonify(draft.model_dump()), 200
