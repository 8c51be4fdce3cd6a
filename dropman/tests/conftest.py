"""
Pytest fixtures for Dropman tests.
"""

import pytest
from django.contrib.auth import get_user_model

from dropman.adapters import NoopMessagingGateway, reset_messaging_gateway
from dropman.enums import ArticleStatus
from dropman.models import Article, Drop, WhatsAppGroup


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user (pickup counter operator)."""
    return User.objects.create_user(
        username='caissier',
        password='testpass123'
    )


@pytest.fixture
def article(db):
    """Article comfortably in stock."""
    return Article.objects.create(
        name='Robe wax',
        price=15000,
        stock=10,
        min_stock=5,
    )


@pytest.fixture
def low_article(db):
    """Article at its minimum stock."""
    return Article.objects.create(
        name='Sac en cuir',
        price=850000,
        stock=2,
        min_stock=5,
    )


@pytest.fixture
def empty_article(db):
    """Article with nothing left."""
    return Article.objects.create(
        name='Montre',
        price=25000,
        stock=0,
        min_stock=5,
        status=ArticleStatus.OUT_OF_STOCK,
    )


@pytest.fixture
def group(db):
    return WhatsAppGroup.objects.create(
        name='Bonamoussadi Deals',
        waha_group_id='120363000000000001@g.us',
        member_count=250,
    )


@pytest.fixture
def other_group(db):
    return WhatsAppGroup.objects.create(
        name='Akwa Shopping',
        waha_group_id='120363000000000002@g.us',
        member_count=120,
    )


@pytest.fixture
def drop(db, article, low_article, group, other_group):
    """Draft drop: two articles to two groups."""
    drop = Drop.objects.create(name='Drop du matin')
    drop.articles.add(article, low_article)
    drop.groups.add(group, other_group)
    return drop


@pytest.fixture
def gateway():
    """Fresh in-memory gateway."""
    return NoopMessagingGateway()


@pytest.fixture(autouse=True)
def _reset_gateway():
    reset_messaging_gateway()
    yield
    reset_messaging_gateway()
