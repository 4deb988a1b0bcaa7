import pytest_asyncio

from jewelry_api.features.jewelry.models import JewelryItem


@pytest_asyncio.fixture
async def jewelry_factory(initialize_test_db):
    """A factory to create jewelry items straight in the store."""

    async def _factory(name: str, **fields) -> JewelryItem:
        fields.setdefault("status", "active")
        fields.setdefault("quantity", 10)
        fields.setdefault("selling_price", 100.0)
        return await JewelryItem.create(name=name, **fields)

    return _factory


@pytest_asyncio.fixture
async def gold_ring(jewelry_factory) -> JewelryItem:
    return await jewelry_factory(
        "Gold Ring", category="ring", metal_type="gold", purity="22K", weight=4.5,
        cost_price=700.0, selling_price=1000.0,
    )
