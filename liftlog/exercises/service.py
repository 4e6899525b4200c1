# liftlog/exercises/service.py

import logging

from liftlog.errors import PersistenceFailure
from liftlog.supabase_client import supabase
from liftlog.utils.db import execute, first_row, utc_now_iso

logger = logging.getLogger(__name__)


def list_exercises(user_id, search=None, columns="*"):
    """
    Returns the user's catalog, most recently used first (never-used last).
    """
    query = (
        supabase.table("exercises")
        .select(columns)
        .eq("user_id", user_id)
        .order("last_used_at", desc=True, nullsfirst=False)
        .order("name")
    )
    rows = execute(query, "fetching exercises").data or []
    if search:
        needle = search.strip().lower()
        rows = [r for r in rows if needle in (r.get("name") or "").lower()]
    return rows


def create_exercise(user_id, name, category=None, equipment=None, last_used_at=None):
    exercise_doc = {
        "user_id": user_id,
        "name": name,
        "category": category,
        "equipment": equipment,
        "last_used_at": last_used_at,
    }
    res = execute(supabase.table("exercises").insert(exercise_doc), "creating exercise")
    exercise = first_row(res)
    if not exercise:
        raise PersistenceFailure("Failed to create exercise")
    return exercise


def find_exercise_by_name(user_id, name):
    res = execute(
        supabase.table("exercises")
        .select("*")
        .eq("user_id", user_id)
        .eq("name", name)
        .order("last_used_at", desc=True, nullsfirst=False)
        .limit(1),
        "looking up exercise",
    )
    return first_row(res)


def get_or_create_exercise(user_id, name):
    """
    Exact-name lookup under the user, creating the row if absent.

    Returns (exercise, created).
    """
    exercise = find_exercise_by_name(user_id, name)
    if exercise:
        return exercise, False
    logger.info(f"Adding '{name}' to catalog of user {user_id}")
    return create_exercise(user_id, name, last_used_at=utc_now_iso()), True


def touch_exercises(user_id, exercise_ids, used_at):
    """Sets last_used_at on every listed exercise owned by the user."""
    if not exercise_ids:
        return
    execute(
        supabase.table("exercises")
        .update({"last_used_at": used_at})
        .eq("user_id", user_id)
        .in_("id", list(exercise_ids)),
        "updating exercise recency",
    )


def delete_exercises(user_id, exercise_ids):
    if not exercise_ids:
        return
    execute(
        supabase.table("exercises").delete().eq("user_id", user_id).in_("id", list(exercise_ids)),
        "deleting exercises",
    )
