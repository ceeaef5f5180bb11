from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import AbstractSet

from sqlalchemy.orm import Session

from liftlog.models import ExerciseSet, Routine, SessionExercise
from liftlog.repositories.base import numbered_sets
from liftlog.repositories.session_repo import SessionRepository

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplyResult:
    added: int = 0
    skipped: int = 0
    session_id: int | None = None


def apply_routine(
    db: Session,
    routine: Routine,
    session_id: int,
    existing_exercise_ids: AbstractSet[int],
) -> ApplyResult:
    """Copy the routine's exercises and template sets into a session.

    Exercises already in ``existing_exercise_ids`` are skipped, as are repeats
    of an exercise the routine lists more than once. Each copied
    exercise is committed on its own: if one insert fails the error propagates
    and the exercises copied before it stay in the session.
    """
    repo = SessionRepository(db)
    result = ApplyResult(session_id=session_id)
    order_num = repo.next_order_num(SessionExercise.order_num, SessionExercise.session_id == session_id) - 1
    # one entry per exercise per session
    present = set(existing_exercise_ids)

    for template in sorted(routine.exercises, key=lambda e: e.order_num):
        if template.exercise_id in present:
            result.skipped += 1
            continue
        present.add(template.exercise_id)

        order_num += 1
        entry = SessionExercise(session_id=session_id, exercise_id=template.exercise_id, order_num=order_num)
        entry.sets = numbered_sets(ExerciseSet, sorted(template.sets, key=lambda s: s.set_number))
        db.add(entry)
        db.commit()
        result.added += 1

    log.info("applied routine=%s to session=%s added=%d skipped=%d",
             routine.id, session_id, result.added, result.skipped)
    return result


def apply_routine_to_day(db: Session, user_id: str, routine: Routine, day: date) -> ApplyResult:
    """Apply to the user's session on ``day``, creating the session if needed."""
    repo = SessionRepository(db)
    sess = repo.get_or_create(user_id, day)
    return apply_routine(db, routine, sess.id, repo.exercise_ids(sess.id))
