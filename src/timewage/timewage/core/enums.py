from __future__ import annotations

from enum import Enum


class ContractCategory(str, Enum):
    """Employment contract classification used to select pay rates."""

    PERMANENT = "PERMANENT"
    CONTRACT = "CONTRACT"
    TRAINING = "TRAINING"


class PaymentStatus(str, Enum):
    """Payment state of a wage record. PAID records are immutable."""

    UNPAID = "UNPAID"
    PAID = "PAID"
