# liftlog/sessions/service.py

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from enum import Enum

from liftlog.errors import InvalidRequest, NotFound, PersistenceFailure, SessionConflict
from liftlog.exercises.service import delete_exercises, get_or_create_exercise, touch_exercises
from liftlog.profiles.service import get_or_create_profile
from liftlog.schemas import DEFAULT_ACTUAL_RPE, DEFAULT_REPS, DEFAULT_REST_SECONDS, DEFAULT_SETS
from liftlog.supabase_client import supabase
from liftlog.utils.db import execute, first_row, utc_now_iso, utc_today

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    STARTED = "started"        # duration + intent chosen (client side)
    PREVIEWED = "previewed"    # draft plan held by the client
    SAVED = "saved"            # session + plan rows stored
    COMPLETED = "completed"    # actual rows appended


def derive_state(session, actual_rows):
    if session.get("completed_at") or actual_rows:
        return SessionState.COMPLETED
    return SessionState.SAVED


# --- reads ---

def get_session(user_id, session_id):
    # ids are uuid columns; anything else would be a Postgres syntax error, not a miss
    try:
        uuid.UUID(str(session_id))
    except ValueError:
        raise NotFound("Session not found.")

    res = execute(
        supabase.table("sessions").select("*").eq("id", session_id).eq("user_id", user_id),
        "fetching session",
    )
    session = first_row(res)
    if not session:
        raise NotFound("Session not found.")
    return session


def _rows_for_sessions(user_id, session_ids, is_plan=None):
    """session_exercises rows for the given sessions, each with exercise_name attached."""
    if not session_ids:
        return []

    query = (
        supabase.table("session_exercises")
        .select("*")
        .in_("session_id", list(session_ids))
        .order("order_index")
    )
    if is_plan is not None:
        query = query.eq("is_plan", is_plan)
    rows = execute(query, "fetching session exercises").data or []

    exercise_ids = sorted({r["exercise_id"] for r in rows})
    names = {}
    if exercise_ids:
        ex_res = execute(
            supabase.table("exercises").select("id, name").eq("user_id", user_id).in_("id", exercise_ids),
            "fetching exercise names",
        )
        names = {str(ex["id"]): ex["name"] for ex in (ex_res.data or [])}

    for row in rows:
        row["exercise_name"] = names.get(str(row["exercise_id"]), "")
    return rows


def session_detail(user_id, session_id):
    session = get_session(user_id, session_id)
    rows = _rows_for_sessions(user_id, [session["id"]])
    plan = [r for r in rows if r.get("is_plan")]
    actual = [r for r in rows if not r.get("is_plan")]
    return {
        "session": session,
        "state": derive_state(session, actual).value,
        "plan": plan,
        "actual": actual,
    }


def _recent_sessions(user_id, limit=None, since=None):
    query = (
        supabase.table("sessions")
        .select("*")
        .eq("user_id", user_id)
        .order("date", desc=True)
        .order("created_at", desc=True)
    )
    if since:
        query = query.gte("date", since)
    if limit:
        query = query.limit(limit)
    return execute(query, "fetching sessions").data or []


def list_sessions(user_id, limit=None):
    """History view: newest first, with the names of the exercises actually performed."""
    sessions = _recent_sessions(user_id, limit=limit)
    rows = _rows_for_sessions(user_id, [s["id"] for s in sessions], is_plan=False)

    by_session = {}
    for row in rows:
        by_session.setdefault(str(row["session_id"]), []).append(row)

    for session in sessions:
        performed = by_session.get(str(session["id"]), [])
        session["exercise_names"] = [r["exercise_name"] for r in performed if r["exercise_name"]]
        session["state"] = derive_state(session, performed).value
    return sessions


def dashboard_summary(user_id, email=None):
    profile = get_or_create_profile(user_id, email)
    recent = _recent_sessions(user_id, limit=5)

    first_of_month = datetime.now(timezone.utc).replace(day=1).strftime("%Y-%m-%d")
    count_res = execute(
        supabase.table("sessions").select("id", count="exact").eq("user_id", user_id).gte("date", first_of_month),
        "counting sessions",
    )
    monthly_count = count_res.count if count_res.count is not None else len(count_res.data or [])

    return {
        "goal": profile.get("goal"),
        "recent_sessions": recent,
        "monthly_count": monthly_count,
    }


def recent_history(user_id, limit=3):
    """
    The last sessions in the shape the plan-request builder expects.

    Performed values are preferred; sessions never completed fall back to
    their plan rows.
    """
    sessions = _recent_sessions(user_id, limit=limit)
    rows = _rows_for_sessions(user_id, [s["id"] for s in sessions])

    history = []
    for session in sessions:
        mine = [r for r in rows if str(r["session_id"]) == str(session["id"])]
        actual = [r for r in mine if not r.get("is_plan")]
        chosen = actual or [r for r in mine if r.get("is_plan")]
        history.append({
            "date": session.get("date"),
            "exercises": [
                {
                    "name": r["exercise_name"],
                    "sets": r.get("sets"),
                    "reps": r.get("reps"),
                    "weight": r.get("weight"),
                }
                for r in chosen
            ],
        })
    return history


# --- writes ---

def _delete_rows(table, ids):
    if ids:
        execute(supabase.table(table).delete().in_("id", list(ids)), f"rolling back {table}")


def save_session(user_id, draft):
    """
    Stores a draft as a session with one plan row per exercise.

    Exercises are looked up by exact name under the user and created when
    missing. If any write fails, everything this call wrote is deleted again
    and PersistenceFailure is raised.

    Returns:
        str: The new session id.
    """
    session_doc = {
        "user_id": user_id,
        "date": utc_today(),
        "duration": draft.duration,
        "intent": draft.intent,
        "notes": draft.plan.overall_notes or "",
        "completed_at": None,
    }
    session = first_row(execute(supabase.table("sessions").insert(session_doc), "creating session"))
    if not session:
        raise PersistenceFailure("Failed to save session")

    created_exercise_ids = []
    plan_row_ids = []
    try:
        for index, entry in enumerate(draft.plan.exercises):
            exercise, created = get_or_create_exercise(user_id, entry.exercise_name)
            if created:
                created_exercise_ids.append(exercise["id"])

            row_doc = {
                "session_id": session["id"],
                "exercise_id": exercise["id"],
                "order_index": index,
                "is_plan": True,
                "sets": entry.sets,
                "reps": entry.reps,
                "weight": entry.weight,
                "rest_seconds": entry.rest_seconds,
                "target_rpe": entry.target_rpe,
                "notes": entry.notes,
            }
            row = first_row(execute(supabase.table("session_exercises").insert(row_doc), "creating plan row"))
            if not row:
                raise PersistenceFailure("Failed to save session")
            plan_row_ids.append(row["id"])
    except PersistenceFailure:
        logger.error(
            f"Saving session {session['id']} failed after {len(plan_row_ids)} of "
            f"{len(draft.plan.exercises)} exercises; rolling back"
        )
        _compensate(
            ("session_exercises", plan_row_ids),
            ("sessions", [session["id"]]),
        )
        _compensate_exercises(user_id, created_exercise_ids)
        raise

    logger.info(f"Saved session {session['id']} with {len(plan_row_ids)} planned exercises")
    return session["id"]


def _actual_row(plan_row, edit):
    """Performed values for one plan row: edited value, else plan value, else default."""
    provided = edit.model_fields_set if edit else set()

    def pick(field, default):
        if field in provided and getattr(edit, field) is not None:
            return getattr(edit, field)
        value = plan_row.get(field)
        return default if value is None else value

    sets = pick("sets", DEFAULT_SETS)
    if edit and edit.set_details and "sets" not in provided:
        sets = len(edit.set_details)

    if "weight" in provided:
        weight = edit.weight
    else:
        weight = plan_row.get("weight")

    return {
        "session_id": plan_row["session_id"],
        "exercise_id": plan_row["exercise_id"],
        "order_index": plan_row["order_index"],
        "is_plan": False,
        "sets": sets,
        "reps": pick("reps", DEFAULT_REPS),
        "weight": weight,
        "rest_seconds": pick("rest_seconds", DEFAULT_REST_SECONDS),
        "actual_rpe": pick("actual_rpe", DEFAULT_ACTUAL_RPE),
        "notes": pick("notes", ""),
    }


def _set_docs(actual_row_id, set_details, rpe_input_mode):
    docs = []
    last = len(set_details)
    for number, detail in enumerate(set_details, start=1):
        rpe = detail.rpe
        if rpe_input_mode == "last_set_only" and number != last:
            rpe = None
        docs.append({
            "session_exercise_id": actual_row_id,
            "set_number": number,
            "reps": detail.reps,
            "weight": detail.weight,
            "rpe": rpe,
        })
    return docs


def complete_session(user_id, session_id, completion, email=None):
    """
    Records what was actually performed for a saved session.

    Writes exactly one is_plan=false row per plan row (plus optional per-set
    rows), marks the session completed and bumps last_used_at on every
    exercise involved. Plan rows are never modified. On failure everything
    this call wrote is undone and PersistenceFailure is raised.

    Returns:
        list: The actual rows written, in plan order.
    """
    session = get_session(user_id, session_id)
    if session.get("completed_at"):
        raise SessionConflict()

    rows = _rows_for_sessions(user_id, [session["id"]])
    plan_rows = [r for r in rows if r.get("is_plan")]
    if any(not r.get("is_plan") for r in rows):
        raise SessionConflict()

    counts = Counter(e.id for e in completion.exercises)
    duplicates = sorted(i for i, n in counts.items() if n > 1)
    if duplicates:
        raise InvalidRequest("Duplicate session exercise ids.", details={"duplicate_ids": duplicates})

    edits = {e.id: e for e in completion.exercises}
    unknown = sorted(set(edits) - {str(r["id"]) for r in plan_rows})
    if unknown:
        raise InvalidRequest("Unknown session exercise ids.", details={"unknown_ids": unknown})

    rpe_input_mode = get_or_create_profile(user_id, email).get("rpe_input_mode")
    completed_at = utc_now_iso()

    actual_rows = []
    set_ids = []
    marked_complete = False
    try:
        for plan_row in plan_rows:
            edit = edits.get(str(plan_row["id"]))
            row = first_row(execute(
                supabase.table("session_exercises").insert(_actual_row(plan_row, edit)),
                "creating actual row",
            ))
            if not row:
                raise PersistenceFailure("Failed to complete session")
            row["exercise_name"] = plan_row.get("exercise_name", "")
            actual_rows.append(row)

            if edit and edit.set_details:
                set_res = execute(
                    supabase.table("session_sets").insert(_set_docs(row["id"], edit.set_details, rpe_input_mode)),
                    "creating session sets",
                )
                set_ids.extend(s["id"] for s in (set_res.data or []))

        execute(
            supabase.table("sessions").update({"completed_at": completed_at}).eq("id", session["id"]).eq("user_id", user_id),
            "marking session completed",
        )
        marked_complete = True

        touch_exercises(user_id, {r["exercise_id"] for r in plan_rows}, completed_at)
    except PersistenceFailure:
        logger.error(f"Completing session {session['id']} failed; rolling back {len(actual_rows)} rows")
        _compensate(
            ("session_sets", set_ids),
            ("session_exercises", [r["id"] for r in actual_rows]),
        )
        if marked_complete:
            _compensate_completion(user_id, session["id"])
        raise

    logger.info(f"Completed session {session['id']} with {len(actual_rows)} exercises")
    return actual_rows


# --- compensation ---

def _compensate(*targets):
    """Best-effort deletes after a failed write; failures here are logged, the original error wins."""
    for table, ids in targets:
        try:
            _delete_rows(table, ids)
        except PersistenceFailure:
            logger.error(f"Rollback of {len(ids)} {table} rows failed; manual cleanup needed for ids {list(ids)}")


def _compensate_exercises(user_id, exercise_ids):
    try:
        delete_exercises(user_id, exercise_ids)
    except PersistenceFailure:
        logger.error(f"Rollback of created exercises failed; manual cleanup needed for ids {exercise_ids}")


def _compensate_completion(user_id, session_id):
    try:
        execute(
            supabase.table("sessions").update({"completed_at": None}).eq("id", session_id).eq("user_id", user_id),
            "reopening session",
        )
    except PersistenceFailure:
        logger.error(f"Could not clear completed_at on session {session_id}")
