"""
Dropman Models.

- Article: Catalog item with stock and threshold
- WhatsAppGroup: Broadcast target
- Drop: Campaign sending articles to groups
- DropHistory: Ledger of (group, article) sends, read by the same-day rule
- Order: Purchase with payment, ticket and pickup state
"""

from dropman.models.article import Article
from dropman.models.drop import Drop, DropHistory
from dropman.models.group import WhatsAppGroup
from dropman.models.order import Order

__all__ = [
    'Article',
    'WhatsAppGroup',
    'Drop',
    'DropHistory',
    'Order',
]
