from fastapi import Header, HTTPException, status

from experiencias_api.config import get_settings
from experiencias_api.infrastructure.db.engine import build_engine, build_sessionmaker

settings = get_settings()

engine = build_engine(settings)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_actor_id(
    actor_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Identidad del actor. La autenticación vive fuera de este servicio."""
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return actor_id
