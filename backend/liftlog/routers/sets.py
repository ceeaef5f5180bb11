from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.repositories.session_repo import SessionRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.schemas.exercise_set import SetRead
from liftlog.schemas.session import DeleteResult
from liftlog.security import CurrentUser

router = APIRouter(prefix="/sets", tags=["sets"])

@router.get("/{set_id}", response_model=SetRead)
def get_set(set_id: int, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    s = SetRepository(db).get(set_id, current.id)
    if not s:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")
    return s

@router.delete("/{set_id}", response_model=DeleteResult)
def delete_set(set_id: int, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    set_repo = SetRepository(db)
    s = set_repo.get(set_id, current.id)
    if not s:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")

    entry_id, session_id = set_repo.delete(s)

    # an exercise without sets leaves the day; a day without exercises goes too
    sessions = SessionRepository(db)
    sessions.delete_entry_if_empty(entry_id)
    return DeleteResult(session_deleted=sessions.delete_if_empty(session_id))
