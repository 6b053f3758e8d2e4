"""
Weighted-average cost arithmetic.

Pure functions shared by every ledger operation that moves stock in or
reverses an inbound movement. No rounding is applied.
"""

from typing import NamedTuple


class CostPosition(NamedTuple):
    """Stock level and weighted-average unit cost of one product."""

    quantity: float
    average_cost: float


def effective_unit_cost(
    quantity: float, unit_price: float, extra_charge: float = 0.0
) -> float:
    """Unit cost of an inbound line with its extra charge spread over quantity."""
    if quantity > 0:
        return (quantity * unit_price + extra_charge) / quantity
    return unit_price


def apply_inbound(
    old_quantity: float,
    old_average_cost: float,
    quantity: float,
    unit_price: float,
    extra_charge: float = 0.0,
    fallback_unit_cost: float | None = None,
) -> CostPosition:
    """
    Add an inbound movement to a cost position.

    Args:
        old_quantity: Stock on hand before the movement
        old_average_cost: Average unit cost before the movement
        quantity: Incoming quantity
        unit_price: Incoming unit price
        extra_charge: Non-unit cost of the movement (freight, duty)
        fallback_unit_cost: Cost used when the resulting stock is not positive;
            defaults to the effective unit cost of the movement

    Returns:
        New cost position
    """
    old_total_value = old_quantity * old_average_cost
    incoming_total_value = quantity * unit_price + extra_charge
    new_quantity = old_quantity + quantity

    if new_quantity > 0:
        new_average_cost = (old_total_value + incoming_total_value) / new_quantity
    elif fallback_unit_cost is not None:
        new_average_cost = fallback_unit_cost
    else:
        new_average_cost = effective_unit_cost(quantity, unit_price, extra_charge)

    return CostPosition(new_quantity, new_average_cost)


def reverse_inbound(
    current_quantity: float,
    current_average_cost: float,
    quantity: float,
    unit_price: float,
    extra_charge: float = 0.0,
) -> CostPosition:
    """
    Remove a previously applied inbound movement from a cost position.

    When no stock remains the average cost resets to 0.
    """
    remaining_quantity = current_quantity - quantity

    if remaining_quantity > 0:
        remaining_value = current_quantity * current_average_cost - (
            quantity * unit_price + extra_charge
        )
        average_cost = remaining_value / remaining_quantity
    else:
        average_cost = 0.0

    return CostPosition(remaining_quantity, average_cost)
