from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.repositories.catalog_repo import CatalogRepository
from liftlog.repositories.routine_repo import RoutineRepository
from liftlog.schemas.exercise_set import SetsReplace
from liftlog.schemas.routine import (
    ApplyRoutineRequest,
    ApplyRoutineResult,
    ReorderRequest,
    RoutineCreate,
    RoutineExerciseCreate,
    RoutineExerciseRead,
    RoutineRead,
    RoutineUpdate,
)
from liftlog.security import CurrentUser
from liftlog.services.routine_service import apply_routine_to_day

router = APIRouter(prefix="/routines", tags=["routines"])

def _owned_routine(repo: RoutineRepository, routine_id: int, current: CurrentUser):
    routine = repo.get(routine_id, current.id)
    if not routine:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine not found")
    return routine

@router.get("", response_model=list[RoutineRead])
def list_routines(db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return RoutineRepository(db).list_by_user(current.id)

@router.post("", response_model=RoutineRead, status_code=status.HTTP_201_CREATED)
def create_routine(payload: RoutineCreate, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return RoutineRepository(db).create(current.id, name=payload.name, description=payload.description)

@router.get("/by-exercise/{exercise_id}", response_model=list[RoutineRead])
def routines_with_exercise(
    exercise_id: int,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return RoutineRepository(db).list_by_exercise(current.id, exercise_id)

@router.get("/{routine_id}", response_model=RoutineRead)
def get_routine(routine_id: int, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return _owned_routine(RoutineRepository(db), routine_id, current)

@router.patch("/{routine_id}", response_model=RoutineRead)
def update_routine(
    routine_id: int,
    payload: RoutineUpdate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = RoutineRepository(db)
    routine = _owned_routine(repo, routine_id, current)
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("name") is None:
        fields.pop("name", None)
    repo.update(routine, **fields)
    return repo.get(routine_id, current.id)

@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_routine(routine_id: int, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    repo = RoutineRepository(db)
    repo.delete(_owned_routine(repo, routine_id, current))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{routine_id}/exercises", response_model=RoutineExerciseRead, status_code=status.HTTP_201_CREATED)
def add_routine_exercise(
    routine_id: int,
    payload: RoutineExerciseCreate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = RoutineRepository(db)
    routine = _owned_routine(repo, routine_id, current)
    if not CatalogRepository(db).get_exercise(payload.exercise_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return repo.add_exercise(routine, exercise_id=payload.exercise_id, sets=payload.sets)

@router.put("/exercises/{entry_id}/sets", response_model=RoutineExerciseRead)
def replace_routine_sets(
    entry_id: int,
    payload: SetsReplace,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = RoutineRepository(db)
    entry = repo.get_entry(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine exercise not found")
    return repo.replace_sets(entry, payload.sets)

@router.delete("/exercises/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_routine_exercise(entry_id: int, db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    repo = RoutineRepository(db)
    entry = repo.get_entry(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine exercise not found")
    repo.remove_exercise(entry)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.put("/{routine_id}/order", response_model=RoutineRead)
def reorder_routine(
    routine_id: int,
    payload: ReorderRequest,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = RoutineRepository(db)
    repo.reorder(_owned_routine(repo, routine_id, current), payload.ordered_ids)
    return repo.get(routine_id, current.id)

@router.post("/{routine_id}/apply", response_model=ApplyRoutineResult)
def apply_routine(
    routine_id: int,
    payload: ApplyRoutineRequest,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    routine = _owned_routine(RoutineRepository(db), routine_id, current)
    return apply_routine_to_day(db, current.id, routine, payload.date)
