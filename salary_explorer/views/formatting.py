from __future__ import annotations

import math
from typing import List, Tuple

from salary_explorer.core.dataset import Row


def salary_tick(value: float) -> str:
    """Axis tick label: 120000 -> '$120k', 12500 -> '$12.5k'."""
    return f"${value / 1000:g}k"


def salary_rounded(value: float) -> str:
    """Bar label: nearest thousand, halves rounded up."""
    return f"${int(math.floor(value / 1000 + 0.5))}k"


def salary_full(value: float) -> str:
    return f"${value:,.0f}"


def row_details(row: Row) -> List[Tuple[str, str]]:
    """Label/value pairs shown when hovering a job."""
    return [
        ("Experience", row.experience_level),
        ("Remote", f"{row.remote_ratio}%"),
        ("Company Size", row.company_size),
        ("Salary", salary_full(row.salary_in_usd)),
        ("Location", row.company_location),
    ]
