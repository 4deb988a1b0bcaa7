import logging
from fastapi import HTTPException, status
from tortoise.transactions import in_transaction

from ...common.dates import utcnow
from ...core.config import DEFAULT_GOLD_RATE, DEFAULT_SILVER_RATE
from ..auth.models import User as AuthUser
from .models import MetalRate, RateHistoryEntry
from .schemas import (
    RateValue,
    Rates,
    RatesUpdate,
    RatesResponse,
    RateHistoryItem,
    RateHistoryResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_RATES = {"gold": DEFAULT_GOLD_RATE, "silver": DEFAULT_SILVER_RATE}
HISTORY_LIMIT = 30


def _to_rate_value(rate: MetalRate) -> RateValue:
    return RateValue(price=rate.price, last_updated=rate.last_updated)


async def get_rates() -> RatesResponse:
    """
    Returns the current gold and silver rates.

    A metal with no stored rate is seeded with its default price, so the
    first read also persists the defaults.
    """
    now = utcnow()
    rates = {}
    for metal, default_price in DEFAULT_RATES.items():
        rate, created = await MetalRate.get_or_create(
            metal=metal, defaults={"price": default_price, "last_updated": now}
        )
        if created:
            logger.info(f"Seeded default {metal} rate {default_price}")
        rates[metal] = _to_rate_value(rate)
    return RatesResponse(rates=Rates(**rates))


async def update_rates(rates_in: RatesUpdate, updated_by: AuthUser) -> RatesResponse:
    """
    Replaces both metal rates and appends an entry to the rate history.

    Args:
        rates_in: The new gold and silver prices; both are required.
        updated_by: The staff member making the change.

    Returns:
        The saved rates.
    """
    if rates_in.gold is None or rates_in.silver is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Gold and silver rates are required",
        )
    if rates_in.gold < 0 or rates_in.silver < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Rates cannot be negative",
        )

    now = utcnow()
    new_prices = {"gold": float(rates_in.gold), "silver": float(rates_in.silver)}
    try:
        async with in_transaction():
            saved = {}
            for metal, price in new_prices.items():
                rate, _ = await MetalRate.update_or_create(
                    metal=metal, defaults={"price": price, "last_updated": now}
                )
                saved[metal] = _to_rate_value(rate)
            await RateHistoryEntry.create(
                gold=new_prices["gold"], silver=new_prices["silver"], updated_by=updated_by.email
            )
    except Exception as e:
        logger.error(f"Update rates error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    logger.info(f"Rates updated by {updated_by.email}: {new_prices}")
    return RatesResponse(message="Rates updated successfully", rates=Rates(**saved))


async def get_rate_history() -> RateHistoryResponse:
    entries = await RateHistoryEntry.all().order_by("-timestamp", "-id").limit(HISTORY_LIMIT)
    return RateHistoryResponse(
        history=[
            RateHistoryItem(
                id=entry.public_id,
                gold=entry.gold,
                silver=entry.silver,
                updated_by=entry.updated_by,
                timestamp=entry.timestamp,
            )
            for entry in entries
        ]
    )
