from dataclasses import replace

from experiencias_api.application.interfaces.receipt_repo import ReceiptRepo
from experiencias_api.domain.entities.receipt import Receipt
from experiencias_api.infrastructure.in_memory.store import InMemoryStore


class InMemoryReceiptRepo(InMemoryStore, ReceiptRepo):
    def __init__(self) -> None:
        self.receipts: dict[str, Receipt] = {}

    async def create(self, receipt: Receipt) -> None:
        self.receipts[receipt.id] = replace(receipt)

    async def get_by_id(self, receipt_id: str) -> Receipt | None:
        receipt = self.receipts.get(receipt_id)
        return replace(receipt) if receipt else None

    async def list_by_user(self, user_id: str) -> list[Receipt]:
        return [replace(r) for r in self.receipts.values() if r.user_id == user_id]
