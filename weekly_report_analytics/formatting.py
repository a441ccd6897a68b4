"""Display formatting for dashboard cards and insight values (en-US style)."""


def format_currency(value: float) -> str:
    """Whole-dollar currency: 140000 -> "$140,000", -1234.4 -> "-$1,234"."""
    sign = "-" if round(value) < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_percent(value: float) -> str:
    """Fraction to percent with two decimals: 0.357 -> "35.70%"."""
    return f"{value * 100:,.2f}%"


def format_number(value: float) -> str:
    """Thousands separators, at most two decimals, no trailing zeros."""
    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_signed(value: float, decimals: int = 2, suffix: str = "") -> str:
    """Signed change for metric cards: 2.5 -> "+2.50%" with suffix="%"."""
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{decimals}f}{suffix}"
