import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.repositories.catalog_repo import CatalogRepository
from liftlog.repositories.session_repo import SessionRepository
from liftlog.schemas.exercise_set import SetsReplace
from liftlog.schemas.session import (
    CalendarDayRead,
    DeleteResult,
    MemoUpdate,
    PreviousRecordRead,
    SessionExerciseCreate,
    SessionExerciseRead,
    SessionRead,
)
from liftlog.security import CurrentUser
from liftlog.services import stats

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.get("/calendar", response_model=list[CalendarDayRead])
def month_calendar(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    start, end = stats.month_bounds(year, month)
    rows = SessionRepository(db).calendar_rows(current.id, start, end)
    return stats.build_calendar(rows)

@router.get("/by-date/{day}", response_model=SessionRead)
def get_day(day: dt.date, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    sess = SessionRepository(db).get_by_date(current.id, day)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No session on this date")
    return sess

@router.put("/by-date/{day}", response_model=SessionRead)
def open_day(day: dt.date, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return SessionRepository(db).get_or_create(current.id, day)

@router.patch("/{session_id}", response_model=SessionRead)
def update_session_memo(
    session_id: int,
    payload: MemoUpdate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = SessionRepository(db)
    sess = repo.get(session_id, current.id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return repo.update_memo(sess, memo=payload.memo)

@router.post("/{session_id}/exercises", response_model=SessionExerciseRead, status_code=status.HTTP_201_CREATED)
def add_exercise(
    session_id: int,
    payload: SessionExerciseCreate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = SessionRepository(db)
    sess = repo.get(session_id, current.id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    if not CatalogRepository(db).get_exercise(payload.exercise_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")

    return repo.add_exercise(sess, exercise_id=payload.exercise_id, sets=payload.sets, memo=payload.memo)

@router.put("/exercises/{entry_id}/sets", response_model=SessionExerciseRead)
def replace_sets(
    entry_id: int,
    payload: SetsReplace,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = SessionRepository(db)
    entry = repo.get_entry(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session exercise not found")
    return repo.replace_sets(entry, payload.sets)

@router.patch("/exercises/{entry_id}", response_model=SessionExerciseRead)
def update_exercise_memo(
    entry_id: int,
    payload: MemoUpdate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = SessionRepository(db)
    entry = repo.get_entry(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session exercise not found")
    return repo.update_entry_memo(entry, memo=payload.memo)

@router.delete("/exercises/{entry_id}", response_model=DeleteResult)
def delete_exercise(entry_id: int, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    repo = SessionRepository(db)
    entry = repo.get_entry(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session exercise not found")
    session_id = repo.delete_entry(entry)
    return DeleteResult(session_deleted=repo.delete_if_empty(session_id))

@router.get("/previous/{exercise_id}", response_model=PreviousRecordRead)
def previous_record(
    exercise_id: int,
    before: dt.date = Query(...),
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    entry = SessionRepository(db).previous_record(current.id, exercise_id, before)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No earlier record")
    return PreviousRecordRead.model_validate(
        {"date": entry.session.date, "memo": entry.memo, "sets": entry.sets},
        from_attributes=True,
    )
