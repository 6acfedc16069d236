from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from experiencias_api.application.interfaces.receipt_repo import ReceiptRepo
from experiencias_api.domain.entities.receipt import Receipt, ReceiptStatus, ReceiptType
from experiencias_api.infrastructure.db.tables import receipts


def _row_to_receipt(row: Any) -> Receipt:
    return Receipt(
        id=row["id"],
        type=ReceiptType(row["type"]),
        url=row["url"],
        user_id=row["user_id"],
        status=ReceiptStatus(row["status"]),
        value=row["value"],
        reservation_group_id=row["reservation_group_id"],
        created_at=row["created_at"],
    )


class ReceiptRepoSQL(ReceiptRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, receipt: Receipt) -> None:
        stmt = insert(receipts).values(
            id=receipt.id,
            type=receipt.type.value,
            url=receipt.url,
            value=receipt.value,
            status=receipt.status.value,
            user_id=receipt.user_id,
            reservation_group_id=receipt.reservation_group_id,
            created_at=receipt.created_at,
        )
        await self._session.execute(stmt)

    async def get_by_id(self, receipt_id: str) -> Receipt | None:
        result = await self._session.execute(
            select(receipts).where(receipts.c.id == receipt_id).limit(1)
        )
        row = result.mappings().first()
        return _row_to_receipt(row) if row else None

    async def list_by_user(self, user_id: str) -> list[Receipt]:
        result = await self._session.execute(
            select(receipts).where(receipts.c.user_id == user_id).order_by(receipts.c.created_at)
        )
        return [_row_to_receipt(row) for row in result.mappings()]
