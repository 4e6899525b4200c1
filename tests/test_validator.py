import json

import pytest

from liftlog.errors import MalformedPlan
from liftlog.planner.validator import parse_plan

CATALOG = ["Bench Press", "Lat Pulldown", "Goblet Squat"]


def entry(**overrides):
    base = {
        "exercise_name": "Bench Press",
        "sets": 4,
        "reps": 10,
        "weight": 40,
        "rest_seconds": 90,
        "target_rpe": 8,
        "notes": "Control the descent",
    }
    base.update(overrides)
    return base


def reply(*entries, overall_notes="Good session"):
    return json.dumps({"exercises": list(entries), "overall_notes": overall_notes})


def test_accepts_well_formed_plan():
    plan = parse_plan(reply(entry(), entry(exercise_name="Lat Pulldown", weight=None)), CATALOG)

    assert [e.exercise_name for e in plan.exercises] == ["Bench Press", "Lat Pulldown"]
    assert plan.exercises[0].weight == 40
    assert plan.exercises[1].weight is None
    assert plan.overall_notes == "Good session"


def test_tolerates_markdown_code_fence():
    raw = "```json\n" + reply(entry()) + "\n```"
    plan = parse_plan(raw, CATALOG)
    assert len(plan.exercises) == 1


@pytest.mark.parametrize("rpe", [1, 7.5, 10])
def test_target_rpe_bounds_accepted(rpe):
    plan = parse_plan(reply(entry(target_rpe=rpe)), CATALOG)
    assert 1 <= plan.exercises[0].target_rpe <= 10


@pytest.mark.parametrize("rpe", [0, 0.5, 11, -3])
def test_target_rpe_out_of_range_rejected(rpe):
    with pytest.raises(MalformedPlan):
        parse_plan(reply(entry(target_rpe=rpe)), CATALOG)


@pytest.mark.parametrize("raw", [
    "",
    "not json at all",
    "[1, 2, 3]",
    json.dumps({"overall_notes": "missing exercises"}),
    json.dumps({"exercises": "Bench Press"}),
])
def test_unparseable_shapes_rejected(raw):
    with pytest.raises(MalformedPlan):
        parse_plan(raw, CATALOG)


@pytest.mark.parametrize("bad", [
    {"reps": "8-10"},
    {"sets": 0},
    {"weight": -5},
    {"rest_seconds": -1},
    {"exercise_name": "   "},
])
def test_insane_numbers_and_blank_names_rejected(bad):
    with pytest.raises(MalformedPlan):
        parse_plan(reply(entry(**bad)), CATALOG)


def test_missing_notes_default_to_empty():
    raw = entry()
    del raw["notes"]
    plan = parse_plan(json.dumps({"exercises": [raw], "overall_notes": None}), CATALOG)
    assert plan.exercises[0].notes == ""
    assert plan.overall_notes == ""


def test_empty_exercise_list_rejected():
    with pytest.raises(MalformedPlan):
        parse_plan(reply(), CATALOG)


def test_names_normalized_to_catalog_spelling():
    plan = parse_plan(reply(entry(exercise_name="  bench   press ")), CATALOG)
    assert plan.exercises[0].exercise_name == "Bench Press"


def test_name_outside_catalog_rejected():
    with pytest.raises(MalformedPlan) as exc:
        parse_plan(reply(entry(), entry(exercise_name="Bench Press (chest) [barbell]")), CATALOG)
    assert exc.value.details == {"unknown_exercises": ["Bench Press (chest) [barbell]"]}


def test_catalog_check_can_be_disabled():
    plan = parse_plan(reply(entry(exercise_name="Cable Fly")), CATALOG, enforce_catalog=False)
    assert plan.exercises[0].exercise_name == "Cable Fly"


def test_empty_catalog_accepts_any_name():
    plan = parse_plan(reply(entry(exercise_name="Push-up")), [])
    assert plan.exercises[0].exercise_name == "Push-up"


def test_missing_overall_notes_key_defaults_to_empty():
    plan = parse_plan(json.dumps({"exercises": [entry()]}), CATALOG)
    assert plan.overall_notes == ""
