"""FastAPI dependencies wiring the identity service to the request-scoped session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.services.identity import IdentityService
from app.services.peer_deletion import PeerDeletionClient, build_peer_client
from app.services.user_store import UserStoreGateway


def get_peer_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PeerDeletionClient | None:
    """Dependency: peer deletion client, or None when no peer is configured."""
    return build_peer_client(settings)


def get_identity_service(
    db: Annotated[Session, Depends(get_db)],
    peer_client: Annotated[PeerDeletionClient | None, Depends(get_peer_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> IdentityService:
    return IdentityService(
        UserStoreGateway(db),
        peer_client=peer_client,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
