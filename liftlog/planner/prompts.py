# liftlog/planner/prompts.py

SYSTEM_PROMPT = (
    "You are an experienced fitness trainer. Taking the user's goal, available time, "
    "training intent and past history into account, propose the best workout for today. "
    "Always choose exercises from the user's registered exercise list and copy each "
    "exercise name exactly. Answer in JSON."
)

# goal -> how the session should be dosed
GOAL_GUIDANCE = {
    "cutting": {
        "label": "Fat loss",
        "style": "high reps, short rest",
        "reps": "12-15",
        "rest": "60-90",
    },
    "hypertrophy": {
        "label": "Muscle growth",
        "style": "moderate reps, moderate rest",
        "reps": "8-12",
        "rest": "90-120",
    },
    "strength": {
        "label": "Strength",
        "style": "low reps, long rest",
        "reps": "4-6",
        "rest": "180-240",
    },
}

# intent -> emphasis for this one session
INTENT_GUIDANCE = {
    "time_saving": "Save time (fewer exercises, efficient)",
    "weight": "Heavy loads (high load, low reps)",
    "volume": "Volume (more sets)",
    "form": "Form first (lighter weights, lower RPE)",
}

INTENT_RPE = {
    "form": "6-7",
    "weight": "8-9",
}
DEFAULT_RPE_BAND = "7-8"

# First-time loads when the history has nothing for an exercise.
DEFAULT_LOADS = {
    "kg": {"barbell": "20kg (empty bar)", "dumbbell": "5-10kg", "machine": "10-20kg"},
    "lb": {"barbell": "45lb (empty bar)", "dumbbell": "10-20lb", "machine": "20-45lb"},
}

CATALOG_SECTION_HEADER = (
    "Available exercises (exercise_name MUST be copied exactly from this list):"
)
HISTORY_SECTION_HEADER = "Recent training history (use it as the reference for weights):"

SELECTION_RULE_WITH_CATALOG = """1. **Exercise selection (required)**:
   - Copy exercise_name character for character from the "Available exercises" list above
   - Do not add brackets, muscle groups, equipment or any other text to the name"""

SELECTION_RULE_WITHOUT_CATALOG = """1. **Exercise selection**:
   - The user has no registered exercises yet; choose common, well-known exercises
   - Use the plain exercise name only, without brackets, muscle groups or equipment"""

PLAN_PROMPT_TEMPLATE = """Propose a workout under the following conditions.

## User
- Goal: {goal_text}
- Unit: {unit}
- Available time: {duration} minutes
- Intent for this session: {intent_text}
{catalog_section}{history_section}

## Guidelines
{selection_rule}
2. **Number of exercises**: choose 3-5 exercises depending on the available time
3. **Balance**: avoid training the same muscle group in consecutive exercises and keep the whole body balanced
4. **Sets and reps**: set them according to the goal and intent
{goal_table}
5. **RPE (1-10)**: set a target RPE for every exercise
   - Form first: RPE 6-7
   - Normal: RPE 7-8
   - Heavy loads: RPE 8-9
   - For this session aim for RPE {rpe_band}
6. **Weight**:
   - If the history contains the same exercise, base the weight on it
   - **Without history, suggest a very light weight, safety first**
     - Barbell exercises: {barbell_load}
     - Dumbbell exercises: {dumbbell_load}
     - Machine exercises: {machine_load}
   - Whatever the intent (heavy loads included), the first time always starts light to check form
   - Use null only when the weight is completely unknown
7. **reps**: always a number (never a range such as "8-10")
8. **notes**: a short tip for each exercise

## Response format
Reply with JSON in exactly this shape:

{{
  "exercises": [
    {{
      "exercise_name": "name copied exactly from the list",
      "sets": 4,
      "reps": 10,
      "weight": null,
      "rest_seconds": 90,
      "target_rpe": 8,
      "notes": "tip for this exercise"
    }}
  ],
  "overall_notes": "advice for the session as a whole"
}}"""
