"""Data model for jewelry items held in stock."""

from tortoise import fields

from ...common.models import PublicDocument


class JewelryItem(PublicDocument):
    name = fields.CharField(max_length=255)
    sku = fields.CharField(max_length=100, null=True)
    category = fields.CharField(max_length=100, null=True, db_index=True)
    metal_type = fields.CharField(max_length=50, null=True)
    purity = fields.CharField(max_length=20, null=True)
    weight = fields.FloatField(null=True, description="Weight in grams")
    cost_price = fields.FloatField(null=True)
    selling_price = fields.FloatField(null=True)
    quantity = fields.IntField(null=True)
    min_stock_level = fields.IntField(null=True)
    # "active", "sold" or anything else; unset items count as neither
    status = fields.CharField(max_length=20, null=True)
    description = fields.TextField(null=True)
    # Acquisition time carried over from imported records
    timestamp = fields.DatetimeField(null=True)

    def __str__(self):
        return f"{self.name} ({self.category or 'uncategorized'}, {self.status or 'no status'})"

    class Meta:
        table = "jewelry_items"
