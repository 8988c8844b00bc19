"""Scripted assistant replies used when no live completion backend is available"""

import random
from typing import Any, Dict

SIMULATED_RESPONSES = [
    "Based on your recent data, your revenue is growing steadily. Consider increasing marketing spend.",
    "Cash flow looks positive this month. Good job keeping expenses low.",
    "You have a few overdue debts. I recommend sending a friendly reminder to your customers.",
    "Your top expense category is 'Inventory'. You might want to negotiate better rates with suppliers.",
    "Profit margin is currently at 20%. Industry average is 15%, so you are doing well!",
]

NEGATIVE_INCOME_RESPONSE = (
    "Your net income is currently negative. Review your recent expenses to find areas for cost cutting."
)

FALLBACK_PREFIX = "I'm having trouble connecting to the AI brain right now. "


def _net_income(context: Dict[str, Any]) -> float | None:
    metrics = (context or {}).get("metrics")
    if not isinstance(metrics, dict):
        return None
    try:
        return float(metrics.get("netIncome"))
    except (TypeError, ValueError):
        return None


def scripted_reply(context: Dict[str, Any], rng: random.Random | None = None) -> str:
    """Warn about negative net income, otherwise pick a canned tip"""
    net_income = _net_income(context)
    if net_income is not None and net_income < 0:
        return NEGATIVE_INCOME_RESPONSE
    return (rng or random).choice(SIMULATED_RESPONSES)
