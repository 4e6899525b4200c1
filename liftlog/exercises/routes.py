# liftlog/exercises/routes.py
from flask import Blueprint, request, jsonify

from liftlog.auth.utils import token_required, current_user_id
from liftlog.exercises.service import list_exercises, create_exercise
from liftlog.schemas import ExerciseCreate, validate_body

exercises_bp = Blueprint('exercises', __name__)


@exercises_bp.route("/", methods=["GET"], strict_slashes=False)
@token_required
def get_exercises():
    exercises = list_exercises(current_user_id(), search=request.args.get("q"))
    return jsonify({"exercises": exercises}), 200


@exercises_bp.route("/", methods=["POST"], strict_slashes=False)
@token_required
def add_exercise():
    body = validate_body(ExerciseCreate, request.get_json(silent=True))
    exercise = create_exercise(
        current_user_id(),
        body.name,
        category=body.category,
        equipment=body.equipment,
    )
    return jsonify({"exercise": exercise}), 201
