"""
Core business logic services.

Layer-pure helpers that depend only on the standard library.
"""

from shopledger.core.services.average_cost import (
    CostPosition,
    apply_inbound,
    effective_unit_cost,
    reverse_inbound,
)
from shopledger.core.services.passwords import hash_password, verify_password

__all__ = [
    "CostPosition",
    "apply_inbound",
    "effective_unit_cost",
    "reverse_inbound",
    "hash_password",
    "verify_password",
]
