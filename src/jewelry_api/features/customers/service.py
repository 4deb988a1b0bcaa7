import logging
from typing import Optional
from fastapi import HTTPException, status

from ...common.pagination import paginate
from .models import Customer
from .schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
    CustomerDetailResponse,
    CustomerMutationResponse,
)

logger = logging.getLogger(__name__)


def _to_customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.public_id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
        notes=customer.notes,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


async def _get_customer_or_404(customer_id: str) -> Customer:
    customer = await Customer.get_or_none(public_id=customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


async def list_customers(page: int, limit: int, search: Optional[str]) -> CustomerListResponse:
    """
    Lists customers, newest first.

    Args:
        page: The page number.
        limit: The number of customers per page.
        search: Prefix the customer name must start with.

    Returns:
        A page of customers with paging metadata.
    """
    query = Customer.all()
    if search:
        query = query.filter(name__startswith=search)
    customers, total, total_pages = await paginate(query, page, limit, "-created_at")
    return CustomerListResponse(
        customers=[_to_customer_response(customer) for customer in customers],
        total_pages=total_pages,
        current_page=page,
        total=total,
    )


async def get_customer(customer_id: str) -> CustomerDetailResponse:
    customer = await _get_customer_or_404(customer_id)
    return CustomerDetailResponse(customer=_to_customer_response(customer))


async def create_customer(customer_in: CustomerCreate) -> CustomerMutationResponse:
    try:
        customer = await Customer.create(**customer_in.model_dump())
    except Exception as e:
        logger.error(f"Error creating customer: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    return CustomerMutationResponse(
        message="Customer created successfully", customer=_to_customer_response(customer)
    )


async def update_customer(customer_id: str, customer_in: CustomerUpdate) -> CustomerMutationResponse:
    customer = await _get_customer_or_404(customer_id)
    update_data = customer_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )
    if "name" in update_data and not update_data["name"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Customer name cannot be cleared"
        )
    for key, value in update_data.items():
        setattr(customer, key, value)
    try:
        await customer.save()
    except Exception as e:
        logger.error(f"Error updating customer {customer_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
    return CustomerMutationResponse(
        message="Customer updated successfully", customer=_to_customer_response(customer)
    )


async def delete_customer(customer_id: str) -> CustomerMutationResponse:
    customer = await _get_customer_or_404(customer_id)
    await customer.delete()
    logger.info(f"Deleted customer {customer_id}")
    return CustomerMutationResponse(message="Customer deleted successfully")
