"""Formatting utilities for currency display."""

from __future__ import annotations

from typing import Union


def format_currency(amount: Union[float, int], include_sign: bool = False) -> str:
    """Format a currency amount with grouping and exactly two decimals.

    Args:
        amount: The amount to format
        include_sign: Whether to prefix the dollar sign

    Returns:
        Formatted currency string (e.g., "1,234.56" or "$1,234.56")

    Example:
        >>> format_currency(1234.5)
        '1,234.50'
        >>> format_currency(1234.56, include_sign=True)
        '$1,234.56'
        >>> format_currency(-12.3, include_sign=True)
        '-$12.30'
    """
    formatted = f"{abs(amount):,.2f}"
    if include_sign:
        formatted = f"${formatted}"
    return f"-{formatted}" if amount < 0 and formatted.strip("$0.,") else formatted


def format_signed(amount: Union[float, int]) -> str:
    """Format an amount with an explicit leading ``+`` when non-negative.

    Example:
        >>> format_signed(12.5)
        '+12.50'
        >>> format_signed(-3)
        '-3.00'
    """
    prefix = "+" if amount >= 0 else ""
    return f"{prefix}{format_currency(amount)}"


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX delimiter, so the sign is
    escaped.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\\\$1,234.56'
    """
    return format_currency(amount, include_sign=True).replace("$", "\\$")
