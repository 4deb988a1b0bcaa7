from tortoise import fields

from jewelry_api.common.models import PublicDocument
from jewelry_api.core.config import DEFAULT_ROLE


class User(PublicDocument):
    """Staff account; ``public_id`` is the token subject."""

    email = fields.CharField(max_length=255, unique=True, db_index=True)
    name = fields.CharField(max_length=255, default="")
    phone = fields.CharField(max_length=50, default="")
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharField(max_length=50, null=True)  # E.g., "admin", "superadmin", "worker"

    @property
    def effective_role(self) -> str:
        return self.role or DEFAULT_ROLE

    def __str__(self):
        return f"{self.email} ({self.effective_role})"

    class Meta:
        table = "users"
