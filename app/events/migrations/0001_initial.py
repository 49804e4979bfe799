import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("general", "General"),
                            ("crowdfunding", "Crowdfunding"),
                            ("charity", "Charity"),
                        ],
                        default="general",
                        max_length=20,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(blank=True, null=True)),
                ("location", models.CharField(blank=True, default="", max_length=500)),
                ("target_amount_paise", models.PositiveBigIntegerField(blank=True, null=True)),
                ("raised_amount_paise", models.PositiveBigIntegerField(default=0, editable=False)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["start_date", "id"],
                "indexes": [
                    models.Index(
                        fields=["organization", "start_date"],
                        name="event_org_start_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("event_type__in", ("crowdfunding", "charity")), _negated=True
                        )
                        | models.Q(("target_amount_paise__gt", 0)),
                        name="event_target_required_for_fundraising",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("end_date__isnull", True))
                        | models.Q(("end_date__gte", models.F("start_date"))),
                        name="event_end_not_before_start",
                    ),
                ],
            },
        ),
    ]
