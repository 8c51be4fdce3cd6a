"""
Initial migration for Dropman models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Dropman models: Article, WhatsAppGroup, Drop, DropHistory, Order."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Article',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(blank=True, help_text='Généré automatiquement (ART-YYYYMMDD-XXXX)', max_length=20, unique=True, verbose_name='Code')),
                ('name', models.CharField(max_length=100, verbose_name='Nom')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('price', models.PositiveIntegerField(help_text='En FCFA, sans décimales', verbose_name='Prix')),
                ('stock', models.PositiveIntegerField(default=0, verbose_name='Stock')),
                ('min_stock', models.PositiveIntegerField(default=5, help_text='Alerte "stock faible" à ce niveau ou en dessous', verbose_name='Stock minimum')),
                ('status', models.CharField(choices=[('AVAILABLE', 'Disponible'), ('OUT_OF_STOCK', 'Rupture'), ('ARCHIVED', 'Archivé')], db_index=True, default='AVAILABLE', max_length=20, verbose_name='Statut')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Article',
                'verbose_name_plural': 'Articles',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='WhatsAppGroup',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nom')),
                ('waha_group_id', models.CharField(help_text='Ex: 120363012345678901@g.us', max_length=100, unique=True, verbose_name='Identifiant WhatsApp')),
                ('member_count', models.PositiveIntegerField(default=0, verbose_name='Membres')),
                ('is_active', models.BooleanField(default=True, verbose_name='Actif')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Groupe WhatsApp',
                'verbose_name_plural': 'Groupes WhatsApp',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Drop',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nom')),
                ('status', models.CharField(choices=[('DRAFT', 'Brouillon'), ('SCHEDULED', 'Programmé'), ('SENDING', "En cours d'envoi"), ('SENT', 'Envoyé'), ('FAILED', 'Échoué')], db_index=True, default='DRAFT', max_length=20, verbose_name='Statut')),
                ('scheduled_for', models.DateTimeField(blank=True, null=True, verbose_name='Programmé pour')),
                ('sent_at', models.DateTimeField(blank=True, null=True, verbose_name='Envoyé le')),
                ('total_articles_sent', models.PositiveIntegerField(default=0, verbose_name='Articles envoyés')),
                ('total_groups_sent', models.PositiveIntegerField(default=0, verbose_name='Groupes atteints')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('articles', models.ManyToManyField(blank=True, related_name='drops', to='dropman.article', verbose_name='Articles')),
                ('groups', models.ManyToManyField(blank=True, related_name='drops', to='dropman.whatsappgroup', verbose_name='Groupes')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Créé par')),
            ],
            options={
                'verbose_name': 'Drop',
                'verbose_name_plural': 'Drops',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DropHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('message_id', models.CharField(blank=True, default='', max_length=100, verbose_name='ID message')),
                ('sent_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Envoyé le')),
                ('drop', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='history', to='dropman.drop', verbose_name='Drop')),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sends', to='dropman.whatsappgroup', verbose_name='Groupe')),
                ('article', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sends', to='dropman.article', verbose_name='Article')),
            ],
            options={
                'verbose_name': 'Envoi',
                'verbose_name_plural': 'Historique des envois',
                'ordering': ['-sent_at'],
                'indexes': [models.Index(fields=['group', 'sent_at'], name='dropman_send_group_day_idx')],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_number', models.CharField(max_length=20, unique=True, verbose_name='Numéro')),
                ('customer_name', models.CharField(max_length=100, verbose_name='Client')),
                ('customer_phone', models.CharField(max_length=20, verbose_name='Téléphone')),
                ('amount', models.PositiveIntegerField(verbose_name='Montant')),
                ('payment_method', models.CharField(blank=True, choices=[('MTN_MOMO', 'MTN Mobile Money'), ('ORANGE_MONEY', 'Orange Money')], default='', max_length=20, verbose_name='Moyen de paiement')),
                ('payment_status', models.CharField(choices=[('PENDING', 'En attente'), ('PAID', 'Payé'), ('FAILED', 'Échoué'), ('REFUNDED', 'Remboursé')], db_index=True, default='PENDING', max_length=20, verbose_name='Paiement')),
                ('pickup_status', models.CharField(choices=[('PENDING', 'En attente'), ('PICKED_UP', 'Récupéré'), ('CANCELLED', 'Annulé')], db_index=True, default='PENDING', max_length=20, verbose_name='Retrait')),
                ('ticket_code', models.CharField(blank=True, max_length=20, null=True, unique=True, verbose_name='Code ticket')),
                ('ticket_expires_at', models.DateTimeField(blank=True, null=True, verbose_name='Ticket expire le')),
                ('paid_at', models.DateTimeField(blank=True, null=True, verbose_name='Payé le')),
                ('picked_up_at', models.DateTimeField(blank=True, null=True, verbose_name='Récupéré le')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('article', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='dropman.article', verbose_name='Article')),
                ('validated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Validé par')),
            ],
            options={
                'verbose_name': 'Commande',
                'verbose_name_plural': 'Commandes',
                'ordering': ['-created_at'],
            },
        ),
    ]
