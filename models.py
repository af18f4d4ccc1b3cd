"""
Data models for Financey application
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ExpenseRecord:
    """Single expense awaiting or after classification"""
    name: Optional[str] = None
    cost: Optional[float] = None  # positive means money spent
    date: Optional[str] = None  # "N/A" for manually added items


@dataclass
class LedgerState:
    """Classification state for one session"""
    pending: List[ExpenseRecord] = field(default_factory=list)
    cursor: int = 0  # index of the next unclassified record in pending
    personal: List[ExpenseRecord] = field(default_factory=list)
    shared: List[ExpenseRecord] = field(default_factory=list)
    my_total: float = 0.0
    owed_total: float = 0.0
