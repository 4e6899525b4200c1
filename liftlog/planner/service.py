# liftlog/planner/service.py

import logging

from flask import current_app

from liftlog.exercises.service import list_exercises
from liftlog.planner.builder import build_messages, build_prompt
from liftlog.planner.llm import generate_json_response
from liftlog.planner.validator import parse_plan
from liftlog.profiles.service import get_or_create_profile
from liftlog.schemas import SessionDraft
from liftlog.sessions.service import recent_history

logger = logging.getLogger(__name__)


def generate_plan(user_id, duration, intent, email=None):
    """
    Generates a workout for today and returns it as an unsaved SessionDraft.

    Reads the profile (creating it if needed), the last three sessions and the
    catalog, asks the model once, and validates the reply. Nothing is written
    except the lazily created profile.
    """
    profile = get_or_create_profile(user_id, email)
    history = recent_history(user_id)
    catalog = list_exercises(user_id, columns="name, category, equipment")

    prompt = build_prompt(
        goal=profile.get("goal"),
        unit=profile.get("unit"),
        duration=duration,
        intent=intent,
        recent_sessions=history,
        catalog=catalog,
    )

    response_text = generate_json_response(build_messages(prompt))

    plan = parse_plan(
        response_text,
        catalog_names=[ex["name"] for ex in catalog],
        enforce_catalog=current_app.config["ENFORCE_CATALOG_NAMES"],
    )
    logger.info(f"Generated plan with {len(plan.exercises)} exercises for user {user_id}")
    return SessionDraft(duration=duration, intent=intent, plan=plan)
