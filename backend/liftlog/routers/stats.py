import datetime as dt
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.schemas.stats import (
    BalanceRead,
    HeatmapRead,
    MonthlySummaryRead,
    PRRead,
    ProgressRead,
    StreakRead,
    UserExerciseRead,
    WeeklyGoalRead,
    WeeklyGoalUpdate,
)
from liftlog.security import CurrentUser
from liftlog.services.stats_service import StatsService

router = APIRouter(tags=["stats"])

Year = Annotated[int, Query(ge=1970, le=9999)]
Month = Annotated[int, Query(ge=1, le=12)]

@router.get("/stats/streak", response_model=StreakRead)
def streak(db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return StatsService(db).streak(current.id)

@router.get("/stats/prs", response_model=list[PRRead])
def personal_records(
    limit: int = Query(3, ge=1, le=50),
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return StatsService(db).personal_records(current.id, limit=limit)

@router.get("/stats/monthly", response_model=MonthlySummaryRead)
def monthly_summary(
    year: Year,
    month: Month,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return StatsService(db).monthly_summary(current.id, year, month)

@router.get("/stats/heatmap", response_model=list[HeatmapRead])
def heatmap(
    year: Year,
    month: Month,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return StatsService(db).heatmap(current.id, year, month)

@router.get("/stats/balance", response_model=list[BalanceRead])
def balance(
    start: dt.date | None = Query(None),
    end: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return StatsService(db).balance(current.id, start=start, end=end)

@router.get("/stats/progress/{exercise_id}", response_model=ProgressRead)
def progress(
    exercise_id: int,
    start: dt.date | None = Query(None),
    end: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    data = StatsService(db).progress(current.id, exercise_id, start=start, end=end)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No weighted sets for this exercise")
    return data

@router.get("/stats/exercises", response_model=list[UserExerciseRead])
def logged_exercises(db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return [UserExerciseRead(id=ex_id, name=name) for ex_id, name in StatsService(db).user_exercises(current.id)]

@router.get("/goals/weekly", response_model=WeeklyGoalRead)
def weekly_goal(db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return StatsService(db).weekly_goal(current.id)

@router.put("/goals/weekly", response_model=WeeklyGoalRead)
def save_weekly_goal(
    payload: WeeklyGoalUpdate,
    db: Session = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    svc = StatsService(db)
    svc.save_weekly_goal(current.id, payload.target_value)
    return svc.weekly_goal(current.id)
