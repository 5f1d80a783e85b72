"""Catalog seed data: exercises, achievements and programs.

Rows are keyed by stable slugs; ids are derived with uuid5 so re-seeding
updates in place instead of duplicating.
"""

import uuid

SEED_NAMESPACE = uuid.UUID("6f1c2a8e-3b7d-4f1e-9a55-0c2d9e7b4a10")


def seed_uuid(slug: str) -> uuid.UUID:
    return uuid.uuid5(SEED_NAMESPACE, slug)


# (slug, name, category, difficulty, calories_per_min, target_muscles, equipment, description)
EXERCISES: list[tuple[str, str, str, str, float, list[str], list[str], str]] = [
    # STRENGTH
    ("ex-pushup", "Push-ups", "STRENGTH", "BEGINNER", 8.0, ["chest", "shoulders", "triceps"], [],
     "Classic upper body exercise targeting chest, shoulders, and triceps. Keep body straight, lower chest to the floor."),
    ("ex-squat", "Squats", "STRENGTH", "BEGINNER", 9.0, ["quads", "glutes", "hamstrings"], [],
     "Fundamental lower body movement for building leg strength and power. Keep chest up, knees tracking over toes."),
    ("ex-lunge", "Lunges", "STRENGTH", "BEGINNER", 7.5, ["quads", "glutes"], [],
     "Unilateral leg exercise that improves balance, coordination, and lower body strength."),
    ("ex-dips", "Tricep Dips", "STRENGTH", "INTERMEDIATE", 7.0, ["triceps", "chest", "shoulders"], ["bench"],
     "Bodyweight exercise targeting the triceps, chest, and anterior deltoids using a chair or bench."),
    ("ex-glute", "Glute Bridges", "STRENGTH", "BEGINNER", 6.0, ["glutes", "hamstrings"], ["mat"],
     "Hip extension exercise activating glutes and hamstrings. Drive hips toward the ceiling from lying down."),
    ("ex-pike", "Pike Push-ups", "STRENGTH", "ADVANCED", 8.5, ["shoulders", "triceps"], [],
     "Advanced shoulder exercise. Form an inverted V and lower your head toward the floor."),
    # CARDIO
    ("ex-burpee", "Burpees", "CARDIO", "INTERMEDIATE", 12.0, ["full body"], [],
     "High-intensity full-body exercise combining a squat, push-up, and jump. One of the best calorie burners."),
    ("ex-jjack", "Jumping Jacks", "CARDIO", "BEGINNER", 8.0, ["full body"], [],
     "Classic full-body cardio warm-up. Elevates heart rate and improves coordination. Great for all levels."),
    ("ex-hknees", "High Knees", "CARDIO", "BEGINNER", 10.0, ["hip flexors", "quads"], [],
     "Running in place while driving knees up to hip level. Excellent cardio and hip flexor activation."),
    ("ex-bkicks", "Butt Kicks", "CARDIO", "BEGINNER", 9.0, ["hamstrings"], [],
     "Jogging in place while kicking heels toward glutes. Improves hamstring flexibility and cardio fitness."),
    # CORE
    ("ex-plank", "Plank", "CORE", "BEGINNER", 5.0, ["abs", "shoulders"], ["mat"],
     "Isometric core exercise building full-body endurance and stability. Hold a push-up position on forearms."),
    ("ex-mclimb", "Mountain Climbers", "CORE", "INTERMEDIATE", 11.0, ["abs", "hip flexors"], [],
     "Dynamic core and cardio exercise. From plank, alternate driving knees toward your chest at speed."),
    ("ex-crunch", "Crunches", "CORE", "BEGINNER", 5.5, ["abs"], ["mat"],
     "Classic abdominal exercise targeting the rectus abdominis. Lie on back, knees bent, curl upper body up."),
    ("ex-rtwist", "Russian Twists", "CORE", "INTERMEDIATE", 6.5, ["obliques", "abs"], ["mat"],
     "Rotational core exercise targeting obliques. Sit with feet elevated, lean back, and rotate side to side."),
    ("ex-lraise", "Leg Raises", "CORE", "INTERMEDIATE", 5.0, ["abs", "hip flexors"], ["mat"],
     "Lower ab exercise. Lie flat, raise straight legs to 90 degrees then slowly lower without touching the floor."),
    # HIIT
    ("ex-sqjmp", "Jump Squats", "HIIT", "INTERMEDIATE", 14.0, ["quads", "glutes", "calves"], [],
     "Explosive plyometric squat. Squat down then explode upward into a jump, landing softly and immediately re-squatting."),
    ("ex-boxjmp", "Box Jumps", "HIIT", "ADVANCED", 13.0, ["quads", "glutes", "calves"], ["box"],
     "Jump onto a sturdy platform to build explosive leg power. Step down carefully between reps."),
    ("ex-sprint", "Sprint Intervals", "HIIT", "ADVANCED", 16.0, ["full body"], [],
     "Alternate between maximum effort sprints and walking recovery. Massively effective for fat loss."),
    # FLEXIBILITY
    ("ex-ddog", "Downward Dog", "FLEXIBILITY", "BEGINNER", 3.5, ["hamstrings", "calves", "shoulders"], ["mat"],
     "Foundational yoga pose stretching hamstrings, calves, and shoulders while strengthening arms and legs."),
    ("ex-child", "Child's Pose", "FLEXIBILITY", "BEGINNER", 2.0, ["lower back", "hips"], ["mat"],
     "Restorative yoga pose that gently stretches the hips, thighs, and lower back. Perfect for recovery."),
    ("ex-hipfx", "Hip Flexor Stretch", "FLEXIBILITY", "BEGINNER", 2.5, ["hip flexors"], ["mat"],
     "Kneeling lunge stretch opening up hip flexors, which get tight from prolonged sitting."),
]

ACHIEVEMENTS: list[dict] = [
    {"name": "First Workout", "description": "Complete your very first workout", "icon": "🎯",
     "category": "MILESTONE", "requirement": {"type": "total_workouts", "value": 1}, "points": 10},
    {"name": "Week Warrior", "description": "Complete 7 consecutive days of workouts", "icon": "🔥",
     "category": "STREAK", "requirement": {"type": "streak_days", "value": 7}, "points": 50},
    {"name": "Century Club", "description": "Log 100 total workouts", "icon": "💯",
     "category": "MILESTONE", "requirement": {"type": "total_workouts", "value": 100}, "points": 200},
    {"name": "Calorie Crusher", "description": "Burn 10,000 total calories", "icon": "🔥",
     "category": "CALORIES", "requirement": {"type": "total_calories", "value": 10000}, "points": 100},
    {"name": "Iron Will", "description": "Maintain a 30-day workout streak", "icon": "💪",
     "category": "STREAK", "requirement": {"type": "streak_days", "value": 30}, "points": 250},
    {"name": "Early Bird", "description": "Complete 10 workouts before 8am", "icon": "🌅",
     "category": "HABIT", "requirement": {"type": "early_workouts", "value": 10}, "points": 75},
    {"name": "Strength Seeker", "description": "Complete 25 strength training sessions", "icon": "🏋️",
     "category": "CATEGORY", "requirement": {"type": "category_workouts", "category": "STRENGTH", "value": 25},
     "points": 100},
    {"name": "Cardio King", "description": "Complete 25 cardio sessions", "icon": "🏃",
     "category": "CATEGORY", "requirement": {"type": "category_workouts", "category": "CARDIO", "value": 25},
     "points": 100},
    {"name": "Core Master", "description": "Complete 25 core workouts", "icon": "🧘",
     "category": "CATEGORY", "requirement": {"type": "category_workouts", "category": "CORE", "value": 25},
     "points": 100},
    {"name": "Program Graduate", "description": "Complete your first full training program", "icon": "🎓",
     "category": "PROGRAM", "requirement": {"type": "programs_completed", "value": 1}, "points": 300},
]

# slug -> program definition; "week" is the day template repeated for every week
PROGRAMS: list[dict] = [
    {
        "slug": "prog-beginner",
        "title": "Beginner Foundation",
        "description": "Perfect for beginners. Master fundamental movements, build confidence, and establish "
        "a sustainable fitness habit over 4 weeks.",
        "difficulty": "BEGINNER",
        "category": "STRENGTH",
        "duration_weeks": 4,
        "week": [
            ["ex-pushup", "ex-dips", "ex-plank"],  # Upper
            ["ex-squat", "ex-lunge", "ex-glute"],  # Lower
            ["ex-crunch", "ex-jjack", "ex-plank"],  # Core & cardio
        ],
    },
    {
        "slug": "prog-hiit",
        "title": "Fat Burn HIIT",
        "description": "High-intensity interval training to maximise calorie burn and boost your metabolism. "
        "For intermediate athletes ready to push their limits.",
        "difficulty": "INTERMEDIATE",
        "category": "HIIT",
        "duration_weeks": 6,
        "week": [
            ["ex-burpee", "ex-sqjmp", "ex-mclimb"],
            ["ex-hknees", "ex-bkicks", "ex-jjack"],
            ["ex-sprint", "ex-boxjmp", "ex-burpee"],
            ["ex-sqjmp", "ex-mclimb", "ex-plank"],
        ],
    },
    {
        "slug": "prog-core",
        "title": "Core Power",
        "description": "Focused 4-week core training to build a strong, stable midsection. "
        "Suitable for all fitness levels.",
        "difficulty": "BEGINNER",
        "category": "CORE",
        "duration_weeks": 4,
        "week": [
            ["ex-plank", "ex-crunch", "ex-lraise"],
            ["ex-mclimb", "ex-rtwist", "ex-plank"],
            ["ex-lraise", "ex-crunch", "ex-rtwist"],
        ],
    },
    {
        "slug": "prog-strength",
        "title": "Full Body Strength",
        "description": "Comprehensive 8-week bodyweight strength program with progressive overload built in. "
        "For intermediate athletes.",
        "difficulty": "INTERMEDIATE",
        "category": "STRENGTH",
        "duration_weeks": 8,
        "week": [
            ["ex-pushup", "ex-pike", "ex-dips"],  # Upper push
            ["ex-squat", "ex-lunge", "ex-glute"],  # Lower
            ["ex-plank", "ex-crunch", "ex-mclimb"],  # Core
            ["ex-burpee", "ex-jjack", "ex-hknees"],  # Cardio
            ["ex-pushup", "ex-squat", "ex-plank"],  # Full body
        ],
    },
    {
        "slug": "prog-flex",
        "title": "Mobility & Flexibility",
        "description": "Improve range of motion, reduce injury risk, and recover faster. "
        "Perfect for athletes with tight hips and hamstrings.",
        "difficulty": "BEGINNER",
        "category": "FLEXIBILITY",
        "duration_weeks": 3,
        "week": [
            ["ex-ddog", "ex-hipfx", "ex-child"],
            ["ex-hipfx", "ex-ddog", "ex-child"],
            ["ex-child", "ex-ddog", "ex-hipfx"],
            ["ex-ddog", "ex-child", "ex-hipfx"],
        ],
    },
]
