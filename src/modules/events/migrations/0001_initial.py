import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("date", models.DateField()),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=2)),
                ("pickup_zip_code", models.CharField(blank=True, default="", max_length=8)),
                ("available", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "events",
                "ordering": ["date", "name"],
                "indexes": [
                    models.Index(
                        fields=["available", "date"], name="events_available_date_idx"
                    )
                ],
            },
        ),
    ]
