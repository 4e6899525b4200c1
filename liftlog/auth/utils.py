from functools import wraps

from flask import request
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from liftlog.errors import Unauthenticated
from liftlog.supabase_client import supabase
from liftlog.utils.db import execute, first_row


def token_required(f):
    """
    Verify the bearer token and load the user it names.

    The user row is attached as request.current_user; every query made by the
    wrapped view is scoped by its id.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if request.method == 'OPTIONS':
            return f(*args, **kwargs)

        try:
            verify_jwt_in_request()
        except (JWTExtendedException, PyJWTError) as e:
            raise Unauthenticated(details=str(e))

        user_identity = get_jwt_identity()
        user = first_row(execute(
            supabase.table("users").select("*").eq("id", user_identity),
            "loading current user",
        ))
        if not user:
            raise Unauthenticated("User not found")

        request.current_user = user
        return f(*args, **kwargs)

    return decorated


def current_user_id():
    return str(request.current_user["id"])
