import os

# Must be set before liftlog.supabase_client is imported.
os.environ["MOCK_DB"] = "true"
os.environ.setdefault("FLASK_ENV", "testing")

import json
from unittest.mock import MagicMock, patch

import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from liftlog import create_app
from liftlog.config import TestingConfig
from liftlog.supabase_client import supabase


@pytest.fixture
def db():
    supabase.reset()
    return supabase


@pytest.fixture
def app(db):
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(db, username="lifter", password="password123"):
    res = db.table("users").insert({
        "username": username,
        "email": f"{username}@example.com",
        "password": generate_password_hash(password),
    }).execute()
    return res.data[0]


def auth_header_for(app, user):
    with app.app_context():
        token = create_access_token(identity=str(user["id"]))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def auth_header(app, user):
    return auth_header_for(app, user)


@pytest.fixture
def add_exercise(db):
    def _add(user, name, last_used_at=None, category=None, equipment=None):
        return db.table("exercises").insert({
            "user_id": str(user["id"]),
            "name": name,
            "category": category,
            "equipment": equipment,
            "last_used_at": last_used_at,
        }).execute().data[0]
    return _add


def completion_for(content):
    """A chat.completions response object whose first choice carries `content`."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    completion = MagicMock()
    completion.choices = [choice]
    return completion


@pytest.fixture
def fake_llm():
    """
    Patches the OpenAI client used for plan generation.

    Call the fixture with a dict (sent as JSON) or a raw string; the returned
    mock exposes the create() call for assertions.
    """
    with patch("liftlog.planner.llm.OpenAI") as openai_cls:
        create = openai_cls.return_value.chat.completions.create

        def _reply(content):
            if not isinstance(content, str):
                content = json.dumps(content)
            create.return_value = completion_for(content)
            return create

        _reply.openai_cls = openai_cls
        yield _reply


@pytest.fixture
def other_auth_header(app, db):
    return auth_header_for(app, make_user(db, username="someone_else"))
