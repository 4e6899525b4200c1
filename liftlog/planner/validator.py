"""
Plan-response validator/normalizer.

Accepts the raw text returned by the model and either returns a WorkoutPlan or
raises MalformedPlan. Nothing here touches storage.
"""
import logging

from pydantic import ValidationError

from liftlog.errors import MalformedPlan
from liftlog.schemas import WorkoutPlan
from liftlog.utils.helpers import normalize_name, parse_json_object

logger = logging.getLogger(__name__)


def _match_catalog(plan, catalog_names):
    """Rewrite names to their catalog spelling; returns (plan, unknown_names)."""
    exact = set(catalog_names)
    by_key = {}
    for name in catalog_names:
        by_key.setdefault(normalize_name(name), name)

    exercises = []
    unknown = []
    for entry in plan.exercises:
        if entry.exercise_name in exact:
            exercises.append(entry)
            continue
        canonical = by_key.get(normalize_name(entry.exercise_name))
        if canonical is None:
            unknown.append(entry.exercise_name)
            continue
        logger.debug(f"Normalized exercise name '{entry.exercise_name}' -> '{canonical}'")
        exercises.append(entry.model_copy(update={"exercise_name": canonical}))

    return plan.model_copy(update={"exercises": exercises}), unknown


def parse_plan(raw_text, catalog_names=None, enforce_catalog=True):
    """
    Parse and validate a generated plan.

    Args:
        raw_text (str): Model output; a surrounding Markdown code fence is tolerated.
        catalog_names (list): The user's exercise names. Empty or None disables the
            catalog check, since there is nothing to match against.
        enforce_catalog (bool): Reject names that do not match the catalog.

    Returns:
        WorkoutPlan: The accepted plan, names rewritten to catalog spelling.

    Raises:
        MalformedPlan: The text is not a JSON object of the expected shape, a value is
            out of range (e.g. target_rpe outside 1-10), the plan is empty, or a name is
            not in the catalog.
    """
    if not raw_text:
        raise MalformedPlan(details="Empty response from model")

    try:
        data = parse_json_object(raw_text)
    except ValueError as e:
        logger.warning(f"Model reply is not a JSON object: {e}")
        raise MalformedPlan(details=str(e)) from e

    try:
        plan = WorkoutPlan.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Model reply failed plan validation: {e}")
        raise MalformedPlan(
            details=e.errors(include_url=False, include_context=False, include_input=False)
        ) from e

    if not plan.exercises:
        raise MalformedPlan(details="Plan contains no exercises")

    if enforce_catalog and catalog_names:
        plan, unknown = _match_catalog(plan, list(catalog_names))
        if unknown:
            logger.warning(f"Model proposed exercises outside the catalog: {unknown}")
            raise MalformedPlan(details={"unknown_exercises": unknown})

    return plan
