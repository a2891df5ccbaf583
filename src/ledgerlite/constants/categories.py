"""
Centralized value sets and defaults shared by models, repositories and seeding.
These lists are the single source of truth for validation and the first-run seed.
"""

# Transaction flows
FLOW_EXPENSE = "expense"
FLOW_INCOME = "income"
FLOW_ADJUSTMENT = "adjustment"

TRANSACTION_FLOWS = (FLOW_EXPENSE, FLOW_INCOME, FLOW_ADJUSTMENT)

# Payment methods (informational only, never used in aggregation)
PAYMENT_METHODS = ("cash", "upi", "card", "other")

# Category kinds: which flows may reference the category
CATEGORY_KINDS = ("expense", "income", "both")

THEMES = ("light", "dark", "system")

SETTINGS_ID = "default"

MONTH_START_DAY_MIN = 1
MONTH_START_DAY_MAX = 28

DEFAULT_SETTINGS = {
    "currency_symbol": "₹",
    "default_payment_method": "upi",
    "month_start_day": 1,
    "accent_color": "#FB923C",
    "require_passcode": False,
    "theme": "dark",
}

# Fallback display values for transactions pointing at a deleted category
UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_COLOR = "#6B7280"

# First-run categories: 9 expense, 3 income
DEFAULT_CATEGORIES = [
    # Expenses
    {"name": "Food", "color": "#FB923C", "emoji": "🍔", "kind": "expense"},
    {"name": "Transport", "color": "#22C55E", "emoji": "🚌", "kind": "expense"},
    {"name": "Bills", "color": "#A855F7", "emoji": "📄", "kind": "expense"},
    {"name": "Entertainment", "color": "#EF4444", "emoji": "🎬", "kind": "expense"},
    {"name": "Shopping", "color": "#EC4899", "emoji": "🛍️", "kind": "expense"},
    {"name": "Health", "color": "#10B981", "emoji": "💊", "kind": "expense"},
    {"name": "Education", "color": "#3B82F6", "emoji": "📚", "kind": "expense"},
    {"name": "Home", "color": "#F59E0B", "emoji": "🏠", "kind": "expense"},
    {"name": "Miscellaneous", "color": "#6B7280", "emoji": "✨", "kind": "expense"},
    # Income
    {"name": "Salary", "color": "#16A34A", "emoji": "💼", "kind": "income"},
    {"name": "Gift", "color": "#F97316", "emoji": "🎁", "kind": "income"},
    {"name": "Refund", "color": "#0EA5E9", "emoji": "↩️", "kind": "income"},
]



def is_valid_month_start_day(value: object) -> bool:
    """Check that a month start day is an int within 1..28."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MONTH_START_DAY_MIN <= value <= MONTH_START_DAY_MAX
