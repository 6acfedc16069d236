import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import insert  # noqa: E402

from experiencias_api.api.deps import engine  # noqa: E402
from experiencias_api.infrastructure.db.tables import experiences, metadata, users  # noqa: E402

DEMO_USERS = [
    {"id": "admin-1", "name": "Admin", "email": "admin@experiencias.com.br", "user_type": "ADMIN"},
    {"id": "guest-1", "name": "Ana Souza", "email": "ana@example.com", "user_type": "GUEST"},
    {"id": "prof-1", "name": "Carlos Lima", "email": "carlos@example.com", "user_type": "PROFESSOR"},
]

DEMO_EXPERIENCES = [
    {"id": "exp-trail", "name": "Trilha da Serra", "price": Decimal("100.00"), "active": True},
    {"id": "exp-lab", "name": "Laboratório de Ecologia", "price": Decimal("250.00"), "active": True},
    {"id": "exp-closed", "name": "Hospedagem (fechada)", "price": Decimal("80.00"), "active": False},
]


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created missing tables.")

        await conn.execute(insert(users), [{**u, "verified": False} for u in DEMO_USERS])
        await conn.execute(insert(experiences), DEMO_EXPERIENCES)
        print(f"Seeded {len(DEMO_USERS)} users and {len(DEMO_EXPERIENCES)} experiences.")

if __name__ == "__main__":
    asyncio.run(seed())
