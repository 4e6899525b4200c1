from liftlog.planner.builder import build_messages, build_prompt
from liftlog.planner.prompts import (
    CATALOG_SECTION_HEADER,
    HISTORY_SECTION_HEADER,
    SYSTEM_PROMPT,
)

CATALOG = [
    {"name": "Bench Press", "category": "chest", "equipment": "barbell"},
    {"name": "Lat Pulldown", "category": "back", "equipment": "machine"},
    {"name": "Goblet Squat", "category": "legs", "equipment": "dumbbell"},
]


def _catalog_lines(prompt):
    """Names listed in the catalog section, in order."""
    lines = prompt.split(CATALOG_SECTION_HEADER, 1)[1].lstrip("\n").splitlines()
    names = []
    for line in lines:
        if not line.startswith("- "):
            break
        names.append(line[2:])
    return names


def test_catalog_names_listed_verbatim_and_only_those():
    prompt = build_prompt("hypertrophy", "kg", 45, "volume", [], CATALOG)

    assert _catalog_lines(prompt) == ["Bench Press", "Lat Pulldown", "Goblet Squat"]
    for other in ["Deadlift", "Squat (legs) [barbell]", "Leg Press"]:
        assert other not in prompt


def test_catalog_accepts_plain_names_and_skips_duplicates():
    prompt = build_prompt("strength", "kg", 60, "weight", [], ["Deadlift", "Deadlift", "Overhead Press"])
    assert _catalog_lines(prompt) == ["Deadlift", "Overhead Press"]


def test_empty_catalog_form_session_is_still_well_formed():
    prompt = build_prompt("hypertrophy", "kg", 30, "form", [], [])

    assert CATALOG_SECTION_HEADER not in prompt
    assert HISTORY_SECTION_HEADER not in prompt
    assert "Available time: 30 minutes" in prompt
    assert "Form first (lighter weights, lower RPE)" in prompt
    assert "aim for RPE 6-7" in prompt
    assert '"exercises"' in prompt and '"overall_notes"' in prompt


def test_goal_and_intent_lookup_tables():
    prompt = build_prompt("cutting", "kg", 20, "time_saving", [], CATALOG)

    assert "Goal: Fat loss (high reps, short rest)" in prompt
    assert "Save time (fewer exercises, efficient)" in prompt
    assert "(12-15 reps, 60-90s rest)" in prompt
    assert "(8-12 reps, 90-120s rest)" in prompt
    assert "(4-6 reps, 180-240s rest)" in prompt
    assert "aim for RPE 7-8" in prompt

    heavy = build_prompt("strength", "kg", 60, "weight", [], CATALOG)
    assert "aim for RPE 8-9" in heavy


def test_recent_history_anchors_weights_and_is_capped_at_three():
    history = [
        {"date": f"2026-10-{18 - i:02d}", "exercises": [
            {"name": "Bench Press", "sets": 3, "reps": 8, "weight": 60.0 + i},
            {"name": "Lat Pulldown", "sets": 3, "reps": 10, "weight": None},
        ]}
        for i in range(5)
    ]
    prompt = build_prompt("hypertrophy", "kg", 45, "weight", history, CATALOG)

    assert HISTORY_SECTION_HEADER in prompt
    assert "1. 2026-10-18:" in prompt
    assert "3. 2026-10-16:" in prompt
    assert "2026-10-15" not in prompt
    assert "  - Bench Press: 3 sets x 8 reps @ 60kg" in prompt
    assert "  - Bench Press: 3 sets x 8 reps @ 61kg" in prompt
    assert "  - Lat Pulldown: 3 sets x 10 reps\n" in prompt


def test_default_loads_follow_unit():
    kg = build_prompt("hypertrophy", "kg", 45, "volume", [], CATALOG)
    assert "Barbell exercises: 20kg (empty bar)" in kg
    assert "Dumbbell exercises: 5-10kg" in kg
    assert "Machine exercises: 10-20kg" in kg

    lb = build_prompt("hypertrophy", "lb", 45, "volume", [], CATALOG)
    assert "Barbell exercises: 45lb (empty bar)" in lb
    assert "Unit: lb" in lb


def test_prompt_is_deterministic():
    history = [{"date": "2026-10-18", "exercises": [{"name": "Bench Press", "sets": 3, "reps": 8, "weight": 60}]}]
    first = build_prompt("hypertrophy", "kg", 45, "volume", history, CATALOG)
    second = build_prompt("hypertrophy", "kg", 45, "volume", history, CATALOG)
    assert first == second


def test_messages_are_system_then_user():
    messages = build_messages("do a workout")
    assert messages == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "do a workout"},
    ]
