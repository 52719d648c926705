from pydantic import BaseModel, Field
from typing import List
from uuid import uuid4
from datetime import datetime


class ExpenseItem(BaseModel):
    category: str
    amount: float


class ShadowExpenseItem(BaseModel):
    category: str
    amount: int


class BudgetCreate(BaseModel):
    income: float
    expenses: List[ExpenseItem]


class BudgetInDB(BaseModel):
    budget_id: str = Field(default_factory=lambda: str(uuid4()))
    income: float
    expenses: List[ExpenseItem]
    total_expenses: float
    original_balance: float
    shadow_expenses: List[ShadowExpenseItem]
    shadow_balance: float
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class BudgetCreated(BaseModel):
    shadow_tip: str
    budget: BudgetInDB


class ShadowPreview(BaseModel):
    total_expenses: float
    original_balance: float
    shadow_expenses: List[ShadowExpenseItem]
    shadow_total: int
    shadow_balance: float
    highest_category: str
    tip: str
