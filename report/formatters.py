"""
Display formatting — Indian digit grouping (12,34,567.89), rupee prefix,
signed percentages.
"""
from __future__ import annotations

from typing import Optional


def _group_indian(digits: str) -> str:
    """'1234567' → '12,34,567' (last three digits, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number(num: float, max_decimals: int = 3) -> str:
    """Indian-grouped number with up to max_decimals (trailing zeros dropped)."""
    text = f"{abs(num):.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    int_part, _, frac = text.partition(".")
    sign = "-" if num < 0 and text != "0" else ""
    grouped = _group_indian(int_part)
    return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"


def format_currency(amount: float) -> str:
    """₹ + Indian grouping, 0–2 decimals: 123456.5 → '₹1,23,456.5', -50 → '-₹50'."""
    text = format_number(amount, max_decimals=2)
    if text.startswith("-"):
        return f"-₹{text[1:]}"
    return f"₹{text}"


def format_percentage(percentage: float) -> str:
    """Always signed, two decimals: 6.666 → '+6.67%', -4.5 → '-4.50%'."""
    return f"{'+' if percentage >= 0 else ''}{percentage:.2f}%"


def format_optional(value: Optional[float], fmt=format_number) -> str:
    return "—" if value is None else fmt(value)
