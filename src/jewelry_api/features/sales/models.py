"""Data model for recorded sales."""

from tortoise import fields

from ...common.models import PublicDocument


class Sale(PublicDocument):
    # Public ids are stored by value so a sale outlives the referenced records
    jewelry_item_id = fields.CharField(max_length=27, null=True, db_index=True)
    jewelry_item_name = fields.CharField(max_length=255, null=True)
    customer_id = fields.CharField(max_length=27, null=True)
    customer_name = fields.CharField(max_length=255, null=True)
    quantity = fields.IntField(null=True)
    unit_price = fields.FloatField(null=True)
    total_amount = fields.FloatField(null=True)
    payment_method = fields.CharField(max_length=50, null=True)
    notes = fields.TextField(null=True)
    sale_date = fields.DatetimeField(db_index=True)

    def __str__(self):
        return f"Sale {self.public_id}: {self.quantity or 0} x {self.jewelry_item_name or 'Unknown Item'} = {self.total_amount or 0}"

    class Meta:
        table = "sales"
