"""
Dropman services — the workflows that call the rule engines.

    from dropman.services import Catalog, DropSends, OrderLifecycle
"""

from dropman.services.catalog import Catalog
from dropman.services.drops import DropSends
from dropman.services.orders import OrderLifecycle

__all__ = [
    'Catalog',
    'DropSends',
    'OrderLifecycle',
]
