"""
Budget Errors

Error kinds raised by the budget core. Every error is a caller-input defect
and is recoverable by supplying corrected input.
"""


class ValidationError(ValueError):
    """Malformed or inconsistent input (bad weights, dates or amounts)."""


class DivisionError(ZeroDivisionError):
    """Percentage computed against a zero base."""
