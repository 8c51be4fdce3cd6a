"""
Dropman Admin.

- Article: editable, with stock status badge text
- WhatsAppGroup: editable
- Drop: editable while DRAFT/SCHEDULED, with "send" action
- DropHistory: read-only send ledger
- Order: read-only with "mark picked up" and "cancel" actions
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from dropman.exceptions import DropmanError
from dropman.models import Article, Drop, DropHistory, Order, WhatsAppGroup
from dropman.rules.stock import stock_status_text
from dropman.rules.tickets import check_pickup

logger = logging.getLogger(__name__)


# =========================================================================
# ARTICLE ADMIN
# =========================================================================

@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    """Article admin — stock changes should go through Catalog.adjust_stock."""

    list_display = ['code', 'name', 'price_display', 'stock', 'min_stock',
                    'stock_status_display', 'status']
    list_filter = ['status']
    search_fields = ['code', 'name']
    readonly_fields = ['code', 'created_at', 'updated_at']

    @admin.display(description=_('Prix'))
    def price_display(self, obj):
        return obj.price_display

    @admin.display(description=_('Niveau de stock'))
    def stock_status_display(self, obj):
        return stock_status_text(obj.stock_status)


# =========================================================================
# GROUP ADMIN
# =========================================================================

@admin.register(WhatsAppGroup)
class WhatsAppGroupAdmin(admin.ModelAdmin):
    list_display = ['name', 'waha_group_id', 'member_count', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'waha_group_id']


# =========================================================================
# DROP ADMIN
# =========================================================================

@admin.register(Drop)
class DropAdmin(admin.ModelAdmin):
    """Drop admin — send action applies the same-day rule."""

    list_display = ['name', 'status', 'scheduled_for', 'sent_at',
                    'total_articles_sent', 'total_groups_sent']
    list_filter = ['status']
    search_fields = ['name']
    filter_horizontal = ['articles', 'groups']
    readonly_fields = ['sent_at', 'total_articles_sent', 'total_groups_sent',
                       'created_by', 'created_at', 'updated_at']
    actions = ['send_drops']

    def has_change_permission(self, request, obj=None):
        if obj is not None and not obj.is_editable:
            return False
        return super().has_change_permission(request, obj)

    @admin.action(description=_('Envoyer les drops sélectionnés'))
    def send_drops(self, request, queryset):
        from dropman import drops

        count = 0
        for drop in queryset:
            try:
                drops.send(drop)
                count += 1
            except DropmanError as exc:
                logger.warning("send_drops: %s not sent: %s", drop.pk, exc.message)
                self.message_user(request, f'{drop}: {exc.message}', level='warning')

        self.message_user(request, _('{count} drop(s) envoyé(s).').format(count=count))


# =========================================================================
# DROP HISTORY ADMIN (read-only ledger)
# =========================================================================

@admin.register(DropHistory)
class DropHistoryAdmin(admin.ModelAdmin):
    """Send ledger — read-only. The same-day rule depends on it."""

    list_display = ['sent_at', 'drop', 'group', 'article', 'message_id']
    list_filter = ['group', 'sent_at']
    date_hierarchy = 'sent_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# ORDER ADMIN
# =========================================================================

@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Order admin — read-only, transitions only through actions."""

    list_display = ['order_number', 'customer_name', 'article', 'amount',
                    'payment_status', 'pickup_status', 'ticket_code', 'status_display']
    list_filter = ['payment_status', 'pickup_status', 'payment_method']
    search_fields = ['order_number', 'ticket_code', 'customer_name', 'customer_phone']
    readonly_fields = [f.name for f in Order._meta.fields]
    actions = ['mark_picked_up', 'cancel_orders']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('État'))
    def status_display(self, obj):
        return obj.status_text

    @admin.action(description=_('Marquer comme récupéré'))
    def mark_picked_up(self, request, queryset):
        from dropman import orders

        count = 0
        for order in queryset:
            if not order.ticket_code:
                reason = check_pickup(order).reason or _('aucun ticket émis')
                self.message_user(request, f'{order}: {reason}', level='warning')
                continue
            try:
                orders.pickup(order.ticket_code, user=request.user)
                count += 1
            except DropmanError as exc:
                logger.warning("mark_picked_up: %s refused: %s", order.order_number, exc.reason)
                self.message_user(request, f'{order}: {exc.reason}', level='warning')

        self.message_user(request, _('{count} commande(s) récupérée(s).').format(count=count))

    @admin.action(description=_('Annuler les commandes'))
    def cancel_orders(self, request, queryset):
        from dropman import orders

        count = 0
        for order in queryset:
            try:
                orders.cancel(order)
                count += 1
            except DropmanError as exc:
                logger.warning("cancel_orders: %s refused: %s", order.order_number, exc.message)
                self.message_user(request, f'{order}: {exc.message} ({order.status_text})', level='warning')

        self.message_user(request, _('{count} commande(s) annulée(s).').format(count=count))
