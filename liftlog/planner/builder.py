"""
Plan-request builder.

Turns the user's goal, the requested duration/intent, recent history and the
exercise catalog into the instruction text sent to the model. Pure: same
inputs, same prompt.
"""
from typing import Iterable, List, Mapping, Optional, Sequence

from liftlog.planner.prompts import (
    CATALOG_SECTION_HEADER,
    DEFAULT_LOADS,
    DEFAULT_RPE_BAND,
    GOAL_GUIDANCE,
    HISTORY_SECTION_HEADER,
    INTENT_GUIDANCE,
    INTENT_RPE,
    PLAN_PROMPT_TEMPLATE,
    SELECTION_RULE_WITH_CATALOG,
    SELECTION_RULE_WITHOUT_CATALOG,
    SYSTEM_PROMPT,
)

MAX_HISTORY_SESSIONS = 3


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _catalog_names(catalog: Iterable) -> List[str]:
    names = []
    for entry in catalog:
        name = entry.get("name") if isinstance(entry, Mapping) else entry
        if name and name not in names:
            names.append(name)
    return names


def _catalog_section(names: Sequence[str]) -> str:
    if not names:
        return ""
    lines = "".join(f"- {name}\n" for name in names)
    return f"\n\n{CATALOG_SECTION_HEADER}\n{lines}"


def _history_section(recent_sessions: Sequence[Mapping], unit: str) -> str:
    sessions = list(recent_sessions)[:MAX_HISTORY_SESSIONS]
    if not sessions:
        return ""

    out = f"\n\n{HISTORY_SECTION_HEADER}\n"
    for idx, session in enumerate(sessions, start=1):
        out += f"{idx}. {session.get('date')}:\n"
        for ex in session.get("exercises") or []:
            if not ex.get("name"):
                continue
            out += f"  - {ex['name']}: {ex.get('sets')} sets x {ex.get('reps')} reps"
            if ex.get("weight"):
                out += f" @ {_format_number(ex['weight'])}{unit}"
            out += "\n"
    return out


def _goal_table() -> str:
    rows = []
    for guidance in GOAL_GUIDANCE.values():
        rows.append(
            f"   - {guidance['label']}: {guidance['style']} "
            f"({guidance['reps']} reps, {guidance['rest']}s rest)"
        )
    return "\n".join(rows)


def build_prompt(
    goal: str,
    unit: str,
    duration: int,
    intent: str,
    recent_sessions: Optional[Sequence[Mapping]] = None,
    catalog: Optional[Iterable] = None,
) -> str:
    """
    Build the user prompt for plan generation.

    Args:
        goal: Profile goal ('cutting', 'hypertrophy' or 'strength').
        unit: 'kg' or 'lb'.
        duration: Minutes available.
        intent: 'time_saving', 'weight', 'volume' or 'form'.
        recent_sessions: Newest first, each {"date": ..., "exercises": [{"name", "sets", "reps", "weight"}]}.
            Only the first three are used.
        catalog: Exercise rows (with "name") or plain names, in display order.

    Returns:
        str: The prompt text.
    """
    goal_guidance = GOAL_GUIDANCE.get(goal, GOAL_GUIDANCE["hypertrophy"])
    loads = DEFAULT_LOADS.get(unit, DEFAULT_LOADS["kg"])
    names = _catalog_names(catalog or [])

    return PLAN_PROMPT_TEMPLATE.format(
        goal_text=f"{goal_guidance['label']} ({goal_guidance['style']})",
        unit=unit,
        duration=duration,
        intent_text=INTENT_GUIDANCE.get(intent, intent),
        catalog_section=_catalog_section(names),
        history_section=_history_section(recent_sessions or [], unit),
        selection_rule=SELECTION_RULE_WITH_CATALOG if names else SELECTION_RULE_WITHOUT_CATALOG,
        goal_table=_goal_table(),
        rpe_band=INTENT_RPE.get(intent, DEFAULT_RPE_BAND),
        barbell_load=loads["barbell"],
        dumbbell_load=loads["dumbbell"],
        machine_load=loads["machine"],
    )


def build_messages(prompt: str) -> List[dict]:
    """The role-tagged pair sent to the model."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
