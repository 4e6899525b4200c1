import sys

from liftlog import create_app
from liftlog.exercises.service import create_exercise, find_exercise_by_name
from liftlog.supabase_client import supabase

# name, category, equipment
STARTER_CATALOG = [
    ("Back Squat", "legs", "barbell"),
    ("Goblet Squat", "legs", "dumbbell"),
    ("Romanian Deadlift", "legs", "barbell"),
    ("Leg Press", "legs", "machine"),
    ("Bench Press", "chest", "barbell"),
    ("Incline Dumbbell Press", "chest", "dumbbell"),
    ("Overhead Press", "shoulders", "barbell"),
    ("Lateral Raise", "shoulders", "dumbbell"),
    ("Lat Pulldown", "back", "machine"),
    ("Seated Row", "back", "machine"),
    ("Pull-up", "back", "bodyweight"),
    ("Biceps Curl", "arms", "dumbbell"),
    ("Triceps Pushdown", "arms", "cable"),
    ("Plank", "core", "bodyweight"),
]


def seed(username):
    res = supabase.table("users").select("id, username").eq("username", username).execute()
    if not res.data:
        print(f"User {username} not found")
        return 1

    user_id = str(res.data[0]["id"])
    added = 0
    for name, category, equipment in STARTER_CATALOG:
        if find_exercise_by_name(user_id, name):
            continue
        create_exercise(user_id, name, category=category, equipment=equipment)
        added += 1
    print(f"Added {added} exercises to {username}'s catalog")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python scripts/seed_catalog.py <username>")
        sys.exit(2)
    with create_app().app_context():
        sys.exit(seed(sys.argv[1]))
