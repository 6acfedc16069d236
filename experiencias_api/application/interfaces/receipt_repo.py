from experiencias_api.domain.entities.receipt import Receipt


class ReceiptRepo:
    async def create(self, receipt: Receipt) -> None:
        raise NotImplementedError

    async def get_by_id(self, receipt_id: str) -> Receipt | None:
        raise NotImplementedError

    async def list_by_user(self, user_id: str) -> list[Receipt]:
        raise NotImplementedError
