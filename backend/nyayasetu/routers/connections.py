"""Connection routes"""
from fastapi import APIRouter, HTTPException, status

from ..models import Connection, Role, User
from ..schemas.payment import ConnectionListResponse, ConnectionStatusUpdate
from ..services.connection_service import ConnectionPermissionError, connection_service
from ..storage import Storage
from ..utils.deps import CurrentUser, StorageDep

router = APIRouter(prefix="/connections", tags=["Connections"])


@router.get("", response_model=ConnectionListResponse, summary="My connections")
async def list_connections(storage: StorageDep, current_user: CurrentUser):
    items = await connection_service.list_for_user(storage, current_user)
    return ConnectionListResponse(items=items, total=len(items))


async def _get_visible(storage: Storage, connection_id: str, current_user: User) -> Connection:
    connection = await storage.get_connection(connection_id)
    if connection is None or not (
        current_user.role == Role.ADMIN
        or await connection_service.is_participant(storage, current_user, connection)
    ):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    return connection


@router.get("/{connection_id}", response_model=Connection, summary="Connection details")
async def get_connection(connection_id: str, storage: StorageDep, current_user: CurrentUser):
    connection = await _get_visible(storage, connection_id, current_user)
    return await connection_service.refresh(storage, connection)


@router.put("/{connection_id}/status", response_model=Connection, summary="Change connection status")
async def update_status(
    connection_id: str,
    data: ConnectionStatusUpdate,
    storage: StorageDep,
    current_user: CurrentUser,
):
    connection = await _get_visible(storage, connection_id, current_user)
    try:
        return await connection_service.change_status(storage, current_user, connection, data.status)
    except ConnectionPermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
