# liftlog/auth/routes.py
import logging
from datetime import timedelta

from flask import Blueprint, request, jsonify, current_app
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from liftlog.errors import InvalidRequest, PersistenceFailure, Unauthenticated
from liftlog.schemas import Credentials, validate_body
from liftlog.supabase_client import supabase
from liftlog.utils.db import execute, first_row, utc_now_iso

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)


def _find_user(username):
    res = execute(supabase.table("users").select("*").eq("username", username), "looking up user")
    return first_row(res)


@auth_bp.route("/register", methods=["POST"])
def register():
    creds = validate_body(Credentials, request.get_json(silent=True))

    if _find_user(creds.username):
        raise InvalidRequest("Username already exists.")

    user_doc = {
        "username": creds.username,
        "email": creds.email,
        "password": generate_password_hash(creds.password),
        "created_at": utc_now_iso(),
    }
    user = first_row(execute(supabase.table("users").insert(user_doc), "registering user"))
    if not user:
        raise PersistenceFailure("Registration failed.")

    logger.info(f"Registered user {user['id']}")
    return jsonify({"message": "User registered successfully.", "user_id": user["id"]}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    creds = validate_body(Credentials, request.get_json(silent=True))

    user = _find_user(creds.username)
    if not user or not check_password_hash(user["password"], creds.password):
        raise Unauthenticated("Invalid username or password.")

    expires = timedelta(minutes=current_app.config["TOKEN_EXPIRATION_MINUTES"])
    access_token = create_access_token(identity=str(user["id"]), expires_delta=expires)
    return jsonify({"token": access_token}), 200
