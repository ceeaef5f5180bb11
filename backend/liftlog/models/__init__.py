from liftlog.models.category import Category
from liftlog.models.exercise import Exercise
from liftlog.models.session import WorkoutSession
from liftlog.models.session_exercise import SessionExercise
from liftlog.models.exercise_set import ExerciseSet
from liftlog.models.routine import Routine, RoutineExercise, RoutineSet
from liftlog.models.user_goal import UserGoal, WEEKLY_WORKOUTS

__all__ = [
    "Category",
    "Exercise",
    "WorkoutSession",
    "SessionExercise",
    "ExerciseSet",
    "Routine",
    "RoutineExercise",
    "RoutineSet",
    "UserGoal",
    "WEEKLY_WORKOUTS",
]
