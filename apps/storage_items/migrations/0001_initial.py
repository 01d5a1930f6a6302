import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StorageLocation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Storage location",
                "verbose_name_plural": "Storage locations",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="StorageItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "translations",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text='Localised names, e.g. {"en": {"item_name": "Tent"}, "fi": {"item_name": "Teltta"}}.',
                    ),
                ),
                ("items_number_total", models.PositiveIntegerField(default=0)),
                ("items_number_currently_in_storage", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "location",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items",
                        to="storage_items.storagelocation",
                    ),
                ),
            ],
            options={
                "verbose_name": "Storage item",
                "verbose_name_plural": "Storage items",
                "ordering": ["-created_at"],
            },
        ),
    ]
