"""
Django Dropman — WhatsApp drops, tickets and pickup.

Usage:
    from dropman import drops, orders, DropmanError

    check = drops.check(drop)          # same-day rule per group
    if check.can_send:
        drops.send(drop)

    order = orders.confirm_payment(order)   # issues TKT-YYYYMMDD-NNNN
    orders.pickup(order.ticket_code)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'drops':
        from dropman.services.drops import DropSends
        return DropSends
    elif name == 'orders':
        from dropman.services.orders import OrderLifecycle
        return OrderLifecycle
    elif name == 'catalog':
        from dropman.services.catalog import Catalog
        return Catalog
    elif name == 'DropmanError':
        from dropman.exceptions import DropmanError
        return DropmanError
    elif name == 'Article':
        from dropman.models.article import Article
        return Article
    elif name == 'WhatsAppGroup':
        from dropman.models.group import WhatsAppGroup
        return WhatsAppGroup
    elif name == 'Drop':
        from dropman.models.drop import Drop
        return Drop
    elif name == 'DropHistory':
        from dropman.models.drop import DropHistory
        return DropHistory
    elif name == 'Order':
        from dropman.models.order import Order
        return Order
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'drops',
    'orders',
    'catalog',
    'DropmanError',
    'Article',
    'WhatsAppGroup',
    'Drop',
    'DropHistory',
    'Order',
]

__version__ = '0.1.0'
