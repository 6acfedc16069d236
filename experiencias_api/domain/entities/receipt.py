"""Entidad Receipt - comprobante financiero o de docencia."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ReceiptType(str, Enum):
    PAYMENT = "PAYMENT"
    DOCENCY = "DOCENCY"


class ReceiptStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


@dataclass
class Receipt:
    """
    Comprobante creado exclusivamente por el despachador de efectos.

    `value` sólo tiene sentido para comprobantes de pago.
    """

    id: str
    type: ReceiptType
    url: str
    user_id: str
    status: ReceiptStatus = ReceiptStatus.ACTIVE
    value: Decimal | None = None
    reservation_group_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def create_payment(
        cls,
        receipt_id: str,
        url: str,
        user_id: str,
        reservation_group_id: str,
        value: Decimal,
        created_at: datetime,
    ) -> "Receipt":
        """Factory para el comprobante de un pago aprobado."""
        return cls(
            id=receipt_id,
            type=ReceiptType.PAYMENT,
            url=url,
            user_id=user_id,
            value=value,
            reservation_group_id=reservation_group_id,
            created_at=created_at,
        )

    @classmethod
    def create_docency(
        cls, receipt_id: str, url: str, professor_id: str, created_at: datetime
    ) -> "Receipt":
        """Factory para el comprobante de docencia de un profesor verificado."""
        return cls(
            id=receipt_id,
            type=ReceiptType.DOCENCY,
            url=url,
            user_id=professor_id,
            created_at=created_at,
        )
