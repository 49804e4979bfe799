import django.db.models.deletion
import django_fsm
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("devotees", "0001_initial"),
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Donation",
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
                    "amount_paise",
                    models.PositiveBigIntegerField(
                        help_text="Donation amount in paise (INR minor units)"
                    ),
                ),
                ("currency", models.CharField(default="INR", max_length=3)),
                (
                    "gateway_order_id",
                    models.CharField(
                        help_text="Razorpay order id (order_xxx); one donation per order",
                        max_length=64,
                        unique=True,
                    ),
                ),
                ("gateway_payment_id", models.CharField(blank=True, max_length=64, null=True)),
                ("gateway_signature", models.CharField(blank=True, max_length=128, null=True)),
                (
                    "utr",
                    models.CharField(
                        blank=True,
                        help_text="Acquirer reference (UTR / RRN) reported by the gateway",
                        max_length=64,
                        null=True,
                    ),
                ),
                ("bank_transaction_id", models.CharField(blank=True, max_length=64, null=True)),
                ("payment_method", models.CharField(blank=True, max_length=32, null=True)),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=[
                            ("pending", "Pending"),
                            ("captured", "Captured"),
                            ("failed", "Failed"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=50,
                        protected=True,
                    ),
                ),
                ("captured_at", models.DateTimeField(blank=True, null=True)),
                ("failed_at", models.DateTimeField(blank=True, null=True)),
                ("failure_reason", models.CharField(blank=True, default="", max_length=255)),
                (
                    "devotee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="donations",
                        to="devotees.devotee",
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="donations",
                        to="events.event",
                    ),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="donations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["devotee", "created_at"], name="donation_devotee_created_idx"
                    ),
                    models.Index(
                        fields=["devotee", "status"], name="donation_devotee_status_idx"
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount_paise__gt", 0)),
                        name="donation_amount_positive",
                    ),
                ],
            },
        ),
    ]
