# liftlog/profiles/service.py

import logging

from liftlog.errors import PersistenceFailure
from liftlog.supabase_client import supabase
from liftlog.utils.db import execute, first_row, utc_now_iso

logger = logging.getLogger(__name__)

PROFILE_DEFAULTS = {
    "unit": "kg",
    "goal": "hypertrophy",
    "default_duration": 30,
    "rpe_input_mode": "all_sets",
    "rpe_quick_chips": [3, 5, 7, 8, 9],
}

# Reference scale shown next to RPE inputs (RIR = reps in reserve).
RPE_SCALE = [
    {"value": 1, "label": "Very easy", "rir": "9+ reps left"},
    {"value": 2, "label": "Easy", "rir": "8 reps left"},
    {"value": 3, "label": "Fairly easy", "rir": "7 reps left"},
    {"value": 4, "label": "Somewhat easy", "rir": "6 reps left"},
    {"value": 5, "label": "Moderate", "rir": "5 reps left"},
    {"value": 6, "label": "Somewhat hard", "rir": "4 reps left"},
    {"value": 7, "label": "Hard", "rir": "3 reps left"},
    {"value": 8, "label": "Very hard", "rir": "2 reps left"},
    {"value": 9, "label": "Extremely hard", "rir": "1 rep left"},
    {"value": 10, "label": "Max effort", "rir": "0 reps left"},
]


def get_or_create_profile(user_id, email=None):
    """
    Returns the user's profile, creating it with PROFILE_DEFAULTS on first access.
    """
    res = execute(
        supabase.table("profiles").select("*").eq("id", user_id),
        "fetching profile",
    )
    profile = first_row(res)
    if profile:
        return profile

    now = utc_now_iso()
    new_profile = {
        "id": user_id,
        "email": email,
        **PROFILE_DEFAULTS,
        "rpe_quick_chips": list(PROFILE_DEFAULTS["rpe_quick_chips"]),
        "created_at": now,
        "updated_at": now,
    }
    res = execute(supabase.table("profiles").insert(new_profile), "creating profile")
    created = first_row(res)
    if not created:
        raise PersistenceFailure("Failed to create profile")

    logger.info(f"Created default profile for user {user_id}")
    return created


def update_profile(user_id, updates, email=None):
    """Applies a validated ProfileUpdate; fields left unset are untouched."""
    profile = get_or_create_profile(user_id, email)
    changes = updates.model_dump(exclude_none=True)
    if not changes:
        return profile

    changes["updated_at"] = utc_now_iso()
    res = execute(
        supabase.table("profiles").update(changes).eq("id", user_id),
        "updating profile",
    )
    return first_row(res) or {**profile, **changes}
