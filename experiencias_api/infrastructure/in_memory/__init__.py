"""Implementaciones in-memory para desarrollo y testing."""

from experiencias_api.infrastructure.in_memory.experience_lookup import InMemoryExperienceLookup
from experiencias_api.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from experiencias_api.infrastructure.in_memory.receipt_repo import InMemoryReceiptRepo
from experiencias_api.infrastructure.in_memory.request_ledger import InMemoryRequestLedger
from experiencias_api.infrastructure.in_memory.reservation_group_repo import (
    InMemoryReservationGroupRepo,
)
from experiencias_api.infrastructure.in_memory.subject_status_repo import InMemorySubjectStatusRepo
from experiencias_api.infrastructure.in_memory.transaction_manager import InMemoryTransactionManager
from experiencias_api.infrastructure.in_memory.user_repo import InMemoryUserRepo

__all__ = [
    # Repositories
    "InMemoryIdempotencyRepo",
    "InMemoryReceiptRepo",
    "InMemoryRequestLedger",
    "InMemoryReservationGroupRepo",
    "InMemorySubjectStatusRepo",
    "InMemoryUserRepo",
    # Lookups
    "InMemoryExperienceLookup",
    # Infrastructure
    "InMemoryTransactionManager",
]
