"""
Expense Tracker - Source Package

Client side of a personal expense tracker: a list of all expenses fetched
from a remote collection, and a form that adds, edits or deletes one.

DESIGN PRINCIPLES:
1. The remote collection is the source of truth
2. The session store is only replaced by a full fetch
3. Every failure is shown to the user, never retried silently
4. Every remote operation is audited
"""

__version__ = "1.0.0"
