"""
Request and plan payload models.

Plain dicts are what flows to and from Supabase; these models only guard the
API boundary and the language-model output.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from liftlog.errors import InvalidRequest

Unit = Literal["kg", "lb"]
Goal = Literal["cutting", "hypertrophy", "strength"]
Intent = Literal["time_saving", "weight", "volume", "form"]
RpeInputMode = Literal["all_sets", "last_set_only"]

RPE_MIN = 1
RPE_MAX = 10

# Values used when a plan entry is added by hand or a field is left blank.
DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_REST_SECONDS = 90
DEFAULT_TARGET_RPE = 7
DEFAULT_ACTUAL_RPE = 7


class PlanExercise(BaseModel):
    exercise_name: str = Field(min_length=1)
    sets: int = Field(ge=1, le=20)
    reps: int = Field(ge=1, le=100)
    weight: Optional[float] = Field(default=None, ge=0)
    rest_seconds: int = Field(ge=0, le=900)
    target_rpe: float = Field(ge=RPE_MIN, le=RPE_MAX)
    notes: str = ""

    @field_validator("exercise_name")
    @classmethod
    def strip_name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("exercise_name must not be blank")
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def none_notes(cls, value):
        return "" if value is None else value


class WorkoutPlan(BaseModel):
    exercises: List[PlanExercise]
    overall_notes: str = ""

    @field_validator("overall_notes", mode="before")
    @classmethod
    def none_overall_notes(cls, value):
        return "" if value is None else value


class PlanRequest(BaseModel):
    duration: int = Field(ge=1, le=300)
    intent: Intent


class SessionDraft(BaseModel):
    """A plan held by the client between generation (or manual start) and save."""

    duration: int = Field(ge=1, le=300)
    intent: Intent = "form"
    plan: WorkoutPlan = Field(default_factory=lambda: WorkoutPlan(exercises=[]))

    def with_exercise(self, exercise_name):
        entry = PlanExercise(
            exercise_name=exercise_name,
            sets=DEFAULT_SETS,
            reps=DEFAULT_REPS,
            weight=None,
            rest_seconds=DEFAULT_REST_SECONDS,
            target_rpe=DEFAULT_TARGET_RPE,
        )
        plan = self.plan.model_copy(update={"exercises": [*self.plan.exercises, entry]})
        return self.model_copy(update={"plan": plan})


class DraftStart(BaseModel):
    duration: Optional[int] = Field(default=None, ge=1, le=300)
    intent: Intent = "form"


class DraftExerciseRequest(BaseModel):
    draft: SessionDraft
    exercise_name: str = Field(min_length=1)

    @field_validator("exercise_name")
    @classmethod
    def strip_name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("exercise_name must not be blank")
        return value


class SetDetail(BaseModel):
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    rpe: Optional[float] = Field(default=None, ge=RPE_MIN, le=RPE_MAX)


class ActualExercise(BaseModel):
    id: str
    sets: Optional[int] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    rest_seconds: Optional[int] = Field(default=None, ge=0)
    actual_rpe: Optional[float] = Field(default=None, ge=RPE_MIN, le=RPE_MAX)
    notes: Optional[str] = None
    set_details: List[SetDetail] = Field(default_factory=list)


class CompletionRequest(BaseModel):
    exercises: List[ActualExercise] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    unit: Optional[Unit] = None
    goal: Optional[Goal] = None
    default_duration: Optional[int] = Field(default=None, ge=1, le=300)
    rpe_input_mode: Optional[RpeInputMode] = None
    rpe_quick_chips: Optional[List[int]] = Field(default=None, max_length=10)

    @field_validator("rpe_quick_chips")
    @classmethod
    def chips_in_range(cls, value):
        if value is None:
            return value
        for chip in value:
            if chip < RPE_MIN or chip > RPE_MAX:
                raise ValueError(f"RPE chips must be between {RPE_MIN} and {RPE_MAX}")
        return sorted(set(value))


class ExerciseCreate(BaseModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None
    equipment: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("category", "equipment")
    @classmethod
    def blank_to_none(cls, value):
        if value is None:
            return None
        return value.strip() or None


class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    password: str = Field(min_length=1)
    email: Optional[str] = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("username must not be blank")
        return value


def validate_body(model, data):
    """Validate a request body, raising InvalidRequest with pydantic's errors."""
    if data is None:
        raise InvalidRequest("No data provided.")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidRequest(details=e.errors(include_url=False, include_context=False, include_input=False))
