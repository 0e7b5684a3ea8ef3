from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Device",
            fields=[
                ("device_id", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("device_type", models.CharField(max_length=255)),
                ("owner", models.CharField(db_index=True, max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                ("registered_at", models.BigIntegerField()),
            ],
        ),
        migrations.CreateModel(
            name="EnergyRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("day_bucket", models.BigIntegerField()),
                ("energy_usage", models.PositiveBigIntegerField()),
                ("data_source", models.CharField(max_length=255)),
                ("metadata", models.TextField(blank=True)),
                ("recorded_at", models.BigIntegerField()),
                (
                    "device",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="records",
                        to="ledger.device",
                    ),
                ),
            ],
            options={
                "ordering": ["device", "day_bucket", "id"],
                "indexes": [
                    models.Index(fields=["device", "day_bucket", "id"], name="ledger_record_device_day"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MonthlyAggregate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("month_bucket", models.BigIntegerField()),
                ("total_energy_usage", models.PositiveBigIntegerField(default=0)),
                ("days_recorded", models.PositiveIntegerField(default=0)),
                (
                    "device",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="monthly_aggregates",
                        to="ledger.device",
                    ),
                ),
            ],
            options={
                "ordering": ["device", "month_bucket"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("device", "month_bucket"),
                        name="ledger_unique_device_month_bucket",
                    ),
                ],
            },
        ),
    ]
