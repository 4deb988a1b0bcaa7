"""Data models for metal rate settings and their change history."""

from tortoise import fields, models

from ...common.models import generate_ksuid


class MetalRate(models.Model):
    """Current price of one metal; a single row per metal."""

    id = fields.IntField(primary_key=True)
    metal = fields.CharField(max_length=20, unique=True)  # "gold" or "silver"
    price = fields.FloatField()
    last_updated = fields.DatetimeField()

    def __str__(self):
        return f"{self.metal}: {self.price:.2f}"

    class Meta:
        table = "metal_rates"


class RateHistoryEntry(models.Model):  # No TimestampMixin
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    gold = fields.FloatField()
    silver = fields.FloatField()
    updated_by = fields.CharField(max_length=255, null=True)
    timestamp = fields.DatetimeField(auto_now_add=True)

    def __str__(self):
        return f"Rates gold={self.gold} silver={self.silver} at {self.timestamp}"

    class Meta:
        table = "rate_history"
        ordering = ["-timestamp"]
