# liftlog/profiles/routes.py
from flask import Blueprint, request, jsonify

from liftlog.auth.utils import token_required, current_user_id
from liftlog.profiles.service import get_or_create_profile, update_profile, RPE_SCALE
from liftlog.schemas import ProfileUpdate, validate_body

profiles_bp = Blueprint('profiles', __name__)


@profiles_bp.route("/", methods=["GET"], strict_slashes=False)
@token_required
def get_profile():
    profile = get_or_create_profile(current_user_id(), request.current_user.get("email"))
    return jsonify({"profile": profile}), 200


@profiles_bp.route("/", methods=["PUT"], strict_slashes=False)
@token_required
def put_profile():
    updates = validate_body(ProfileUpdate, request.get_json(silent=True))
    profile = update_profile(current_user_id(), updates, request.current_user.get("email"))
    return jsonify({"profile": profile}), 200


@profiles_bp.route("/rpe-scale", methods=["GET"])
@token_required
def get_rpe_scale():
    return jsonify({"scale": RPE_SCALE}), 200
