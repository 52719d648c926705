from __future__ import annotations

import logging
import math
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence, Tuple

from app.core.exceptions import InvalidInput

logger = logging.getLogger(__name__)

# Category -> multiplier applied to build the shadow scenario (exact match)
REDUCTION_RULES: Mapping[str, Decimal] = MappingProxyType({
    "Subscriptions": Decimal("0.5"),
    "Transport": Decimal("0.6"),
    "Food": Decimal("0.75"),
})

CATEGORY_TIPS: Mapping[str, str] = MappingProxyType({
    "Food": "🍱 Try home cooking or meal prep to cut down food expenses!",
    "Transport": "🚌 Consider public transport or carpooling to save money.",
    "Subscriptions": "📺 Review your subscriptions, do you use them all?",
    "Entertainment": "🎮 Reduce entertainment costs by opting for free activities.",
    "Shopping": "🛍️ Try a no-spend challenge or buy only what you need.",
    "Utilities": "💡 Save on electricity with energy-efficient habits!",
})

DEFAULT_TIP = "💡 Consider reviewing your expenses to boost savings!"


@dataclass(frozen=True)
class ShadowExpense:
    category: str
    amount: int


@dataclass(frozen=True)
class ShadowResult:
    """Everything the engine derives from one (income, expenses) pair."""

    total_expenses: float
    original_balance: float
    shadow_expenses: Tuple[ShadowExpense, ...]
    shadow_total: int
    shadow_balance: float
    highest_category: str
    tip: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["shadow_expenses"] = [asdict(item) for item in self.shadow_expenses]
        return data


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def reduce_amount(category: str, amount: float) -> int:
    multiplier = REDUCTION_RULES.get(category)
    if multiplier is None:
        return round_half_up(Decimal(str(amount)))
    return round_half_up(Decimal(str(amount)) * multiplier)


def highest_spending_category(expenses: Sequence[Tuple[str, float]]) -> str:
    """
    Category of the largest original expense. A later entry only takes over
    when strictly greater, so the first of several equal maxima wins.
    """
    if not expenses:
        raise InvalidInput("At least one expense is required")

    best_category, best_amount = expenses[0]
    for category, amount in expenses[1:]:
        if amount > best_amount:
            best_category, best_amount = category, amount
    return best_category


def tip_for_category(category: str) -> str:
    return CATEGORY_TIPS.get(category, DEFAULT_TIP)


def _is_finite_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def _field(expense: Any, name: str) -> Any:
    if isinstance(expense, Mapping):
        return expense.get(name)
    return getattr(expense, name, None)


def _normalize(income: Any, expenses: Any) -> Tuple[float, Tuple[Tuple[str, float], ...]]:
    if not _is_finite_number(income):
        raise InvalidInput(f"Income must be a finite number, got {income!r}")
    if expenses is None or len(expenses) == 0:
        raise InvalidInput("At least one expense is required")

    rows = []
    for index, expense in enumerate(expenses):
        category = _field(expense, "category")
        amount = _field(expense, "amount")
        if not isinstance(category, str):
            raise InvalidInput(f"Expense #{index} has no category")
        if not _is_finite_number(amount):
            raise InvalidInput(f"Expense #{index} ({category}) amount must be a finite number")
        if amount < 0:
            raise InvalidInput(f"Expense #{index} ({category}) amount must not be negative")
        rows.append((category, amount))
    return income, tuple(rows)


def simulate(income: float, expenses: Sequence[Any]) -> ShadowResult:
    """
    Build the shadow ("what if you cut back") scenario for a budget.

    Each expense is scaled by its category multiplier from REDUCTION_RULES and
    rounded half-up; unlisted categories keep their amount. The advisory tip
    is picked from the highest *original* expense, never from the shadow one.

    Raises InvalidInput for an empty expense list or a non-finite, missing or
    negative amount, for a non-finite income, and when the totals overflow
    the float range.
    """
    income, rows = _normalize(income, expenses)

    shadow_expenses = tuple(
        ShadowExpense(category=category, amount=reduce_amount(category, amount))
        for category, amount in rows
    )
    total_expenses = sum(amount for _, amount in rows)
    shadow_total = sum(item.amount for item in shadow_expenses)

    try:
        original_balance = income - total_expenses
        shadow_balance = income - shadow_total
        in_range = all(
            math.isfinite(value)
            for value in (total_expenses, original_balance, shadow_balance)
        )
    except OverflowError:
        in_range = False
    if not in_range:
        raise InvalidInput("Expense amounts are too large to compute a balance")

    highest_category = highest_spending_category(rows)
    tip = tip_for_category(highest_category)

    logger.debug(
        f"Shadow simulation: {len(rows)} expenses, total={total_expenses}, "
        f"shadow_total={shadow_total}, highest={highest_category}"
    )

    return ShadowResult(
        total_expenses=total_expenses,
        original_balance=original_balance,
        shadow_expenses=shadow_expenses,
        shadow_total=shadow_total,
        shadow_balance=shadow_balance,
        highest_category=highest_category,
        tip=tip,
    )
