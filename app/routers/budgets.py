import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import InvalidInput, PersistenceFailure
from app.db import dynamo
from app.models.budget import BudgetCreate, BudgetCreated, BudgetInDB, ShadowPreview
from app.utils.shadow import simulate

router = APIRouter()
logger = logging.getLogger(__name__)


def _run_simulation(budget: BudgetCreate):
    try:
        return simulate(budget.income, budget.expenses)
    except InvalidInput as e:
        logger.warning(f"Rejected budget input: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/", response_model=BudgetCreated, status_code=status.HTTP_201_CREATED)
def create_budget(budget: BudgetCreate):
    """
    Run the shadow simulation, store the resulting snapshot and return the
    advisory tip together with the stored snapshot.
    """
    result = _run_simulation(budget)

    budget_db = BudgetInDB(
        income=budget.income,
        expenses=budget.expenses,
        total_expenses=result.total_expenses,
        original_balance=result.original_balance,
        shadow_expenses=result.to_dict()["shadow_expenses"],
        shadow_balance=result.shadow_balance,
    )

    try:
        dynamo.put_budget(budget_db.model_dump())
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Stored budget {budget_db.budget_id}, highest category: {result.highest_category}")
    return BudgetCreated(shadow_tip=result.tip, budget=budget_db)


@router.post("/preview", response_model=ShadowPreview)
def preview_budget(budget: BudgetCreate):
    """Same simulation as create_budget, without storing anything."""
    return ShadowPreview(**_run_simulation(budget).to_dict())


@router.get("/", response_model=List[BudgetInDB])
def list_budgets():
    try:
        return dynamo.list_budgets()
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{budget_id}", response_model=BudgetInDB)
def get_budget(budget_id: str):
    try:
        budget = dynamo.get_budget(budget_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget
