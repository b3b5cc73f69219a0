"""Domain type definitions for monthlies.

These NewTypes provide semantic clarity and help with type checking:
- ExpenseId: Row id assigned by the store
- Amount: Monthly cost as a plain float (two-decimal display only)
- Description: Free-form expense description
- CategoryName: Category label (free text)
- Month: Month in YYYY-MM format
"""

from typing import NewType

ExpenseId = NewType("ExpenseId", int)

# Amounts keep ordinary double precision; rounding happens only for display
Amount = NewType("Amount", float)

Description = NewType("Description", str)

CategoryName = NewType("CategoryName", str)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)
