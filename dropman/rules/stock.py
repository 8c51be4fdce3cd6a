"""
Stock classifier — stock level status and price display.

All functions take plain integers; callers pass article.stock and
article.min_stock. Inputs are expected to be non-negative.

Usage:
    from dropman.rules.stock import calculate_stock_status

    calculate_stock_status(0, 5)   # StockStatus.OUT
    calculate_stock_status(5, 5)   # StockStatus.LOW
    calculate_stock_status(10, 5)  # StockStatus.OK
"""

from dataclasses import dataclass

from dropman.enums import ArticleStatus, StockStatus


@dataclass(frozen=True)
class RuleCheck:
    """Outcome of an eligibility rule, with a French reason when refused."""

    allowed: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


@dataclass(frozen=True)
class StockChangeCheck:
    """Outcome of a stock adjustment check."""

    valid: bool
    error: str | None = None


_STATUS_TEXT = {
    StockStatus.OUT: 'Rupture de stock',
    StockStatus.LOW: 'Stock faible',
    StockStatus.OK: 'En stock',
}


def is_out_of_stock(stock: int) -> bool:
    """True iff nothing is left."""
    return stock == 0


def is_low_stock(stock: int, min_stock: int) -> bool:
    """
    True iff stock is at or below the threshold.

    Out of stock is a subset of low stock: is_low_stock(0, n) is True.
    """
    return stock <= min_stock


def calculate_stock_status(stock: int, min_stock: int) -> StockStatus:
    """Classify a stock level. OUT is checked first so zero is never LOW."""
    if is_out_of_stock(stock):
        return StockStatus.OUT
    if is_low_stock(stock, min_stock):
        return StockStatus.LOW
    return StockStatus.OK


def stock_status_text(status: StockStatus) -> str:
    """French badge label for a status."""
    return _STATUS_TEXT[StockStatus(status)]


def stock_percentage(stock: int, min_stock: int) -> float:
    """Current stock relative to the threshold, capped at 100."""
    if min_stock == 0:
        return 100.0
    return min(100.0, stock / min_stock * 100)


def format_price(amount: int) -> str:
    """
    Render an amount with space-separated groups of three digits.

    >>> format_price(1000000)
    '1 000 000'
    """
    return f"{amount:,}".replace(',', ' ')


def can_update_stock(current: int, change: int) -> StockChangeCheck:
    """A stock adjustment is valid unless it would go negative."""
    if current + change < 0:
        return StockChangeCheck(valid=False, error='Le stock ne peut pas être négatif')
    return StockChangeCheck(valid=True)


def calculate_discount(original_price: int, discounted_price: int) -> int:
    """Rounded discount percentage (0 for a non-positive original price)."""
    if original_price <= 0:
        return 0
    return round((original_price - discounted_price) / original_price * 100)


def can_add_to_drop(article) -> RuleCheck:
    """
    Whether an article may be put in a drop.

    Args:
        article: Any object with .status and .stock
    """
    if article.status != ArticleStatus.AVAILABLE:
        return RuleCheck(False, "L'article n'est pas disponible")
    if is_out_of_stock(article.stock):
        return RuleCheck(False, "L'article est en rupture de stock")
    return RuleCheck(True)


def can_be_ordered(article, quantity: int = 1) -> RuleCheck:
    """Whether an article may be ordered in the given quantity."""
    if article.status != ArticleStatus.AVAILABLE:
        return RuleCheck(False, "L'article n'est pas disponible")
    if article.stock < quantity:
        return RuleCheck(False, f"Stock insuffisant (disponible: {article.stock})")
    return RuleCheck(True)
