"""Financial goal data access layer."""

from decimal import Decimal

from sqlalchemy.orm import Session

from wealthvue.models import FinancialGoal

GOAL_KEY = "default"


class GoalRepository:
    """Stores the single financial goal."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find(self) -> FinancialGoal | None:
        return self._db.get(FinancialGoal, GOAL_KEY)

    def save(self, target_amount: Decimal, currency: str) -> FinancialGoal:
        goal = self.find()
        if goal is None:
            goal = FinancialGoal(key=GOAL_KEY, target_amount=target_amount, currency=currency)
            self._db.add(goal)
        else:
            goal.target_amount = target_amount
            goal.currency = currency
        self._db.commit()
        self._db.refresh(goal)
        return goal

    def clear(self) -> bool:
        """Remove the goal. Returns False when none was set."""
        goal = self.find()
        if goal is None:
            return False
        self._db.delete(goal)
        self._db.commit()
        return True
