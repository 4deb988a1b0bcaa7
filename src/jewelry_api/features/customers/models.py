"""Data model for customers."""

from tortoise import fields

from ...common.models import PublicDocument


class Customer(PublicDocument):
    name = fields.CharField(max_length=255, db_index=True)
    email = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=50, null=True)
    address = fields.TextField(null=True)
    notes = fields.TextField(null=True)
    # Acquisition time carried over from imported records; created_at wins when both exist
    timestamp = fields.DatetimeField(null=True)

    def __str__(self):
        return self.name

    class Meta:
        table = "customers"
