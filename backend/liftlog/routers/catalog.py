from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.repositories.catalog_repo import CatalogRepository
from liftlog.schemas.catalog import CategoryRead, ExerciseCreate, ExerciseRead
from liftlog.security import CurrentUser

router = APIRouter(tags=["catalog"])

@router.get("/categories", response_model=list[CategoryRead])
def list_categories(db: Session = Depends(get_db), _current: CurrentUser = Depends(get_current_user)):
    return CatalogRepository(db).list_categories()

@router.get("/exercises", response_model=list[ExerciseRead])
def list_exercises(
    category_id: int | None = Query(None),
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return CatalogRepository(db).list_exercises(current.id, category_id=category_id)

@router.post("/exercises", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(
    payload: ExerciseCreate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    repo = CatalogRepository(db)
    if not repo.get_category(payload.category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return repo.create_custom_exercise(current.id, category_id=payload.category_id, name=payload.name)
