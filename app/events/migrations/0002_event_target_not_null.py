from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.RemoveConstraint(
            model_name="event",
            name="event_target_required_for_fundraising",
        ),
        migrations.AddConstraint(
            model_name="event",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    ("event_type__in", ("crowdfunding", "charity")), _negated=True
                )
                | models.Q(
                    ("target_amount_paise__isnull", False), ("target_amount_paise__gt", 0)
                ),
                name="event_target_required_for_fundraising",
            ),
        ),
    ]
