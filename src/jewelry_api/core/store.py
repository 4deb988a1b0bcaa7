"""Record Store handle.

The store wraps the Tortoise ORM lifecycle. One instance is built when the
process starts and opened/closed by the application lifespan; the CLI and the
test suite use the same class as an async context manager.
"""
import logging
from typing import Any

from tortoise import Tortoise

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

MODEL_MODULES = [
    "jewelry_api.features.auth.models",
    "jewelry_api.features.jewelry.models",
    "jewelry_api.features.sales.models",
    "jewelry_api.features.customers.models",
    "jewelry_api.features.rates.models",
    "aerich.models",  # For Aerich migrations
]


def build_tortoise_config(db_url: str) -> dict[str, Any]:
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


# Module-level config consumed by aerich (see [tool.aerich] in pyproject.toml)
TORTOISE_ORM_CONFIG = build_tortoise_config(DATABASE_URL)


class RecordStore:
    def __init__(self, db_url: str = DATABASE_URL, generate_schemas: bool = False):
        self.db_url = db_url
        self.generate_schemas = generate_schemas
        self.config = build_tortoise_config(db_url)
        self.is_open = False

    async def open(self) -> "RecordStore":
        await Tortoise.init(config=self.config)
        if self.generate_schemas:
            await Tortoise.generate_schemas(safe=True)
        self.is_open = True
        logger.info("Record store opened.")
        return self

    async def close(self) -> None:
        if not self.is_open:
            return
        await Tortoise.close_connections()
        self.is_open = False
        logger.info("Record store connections have been closed.")

    async def ping(self) -> bool:
        """Round-trips a trivial query; False when the store is unreachable."""
        if not self.is_open:
            return False
        try:
            await Tortoise.get_connection("default").execute_query("SELECT 1")
        except Exception as e:
            logger.error(f"Record store ping failed: {e}")
            return False
        return True

    async def __aenter__(self) -> "RecordStore":
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
