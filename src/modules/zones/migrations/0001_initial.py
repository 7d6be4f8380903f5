import django.core.validators
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CepZone",
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
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "priority",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="1 is the highest precedence when ranges overlap.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("active", models.BooleanField(default=True)),
                ("cep_ranges", models.JSONField(default=list)),
            ],
            options={
                "db_table": "cep_zones",
                "ordering": ["priority", "id"],
            },
        ),
    ]
