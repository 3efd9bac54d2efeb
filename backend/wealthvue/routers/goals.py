"""Financial goal API router."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from wealthvue.database import get_db
from wealthvue.schemas.goal import Goal, GoalUpdate
from wealthvue.services.repositories.goal_repository import GoalRepository

router = APIRouter(prefix="/api/goal", tags=["goal"])


@router.get("", response_model=Goal | None)
async def get_goal(db: Session = Depends(get_db)):
    """The current net-worth target, or null when none is set."""
    return GoalRepository(db).find()


@router.put("", response_model=Goal)
async def set_goal(goal: GoalUpdate, db: Session = Depends(get_db)):
    """Create or replace the net-worth target."""
    return GoalRepository(db).save(goal.target_amount, goal.currency)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_goal(db: Session = Depends(get_db)):
    """Remove the net-worth target."""
    if not GoalRepository(db).clear():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No goal set")
    return None
