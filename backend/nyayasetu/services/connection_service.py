"""Client/advocate connections"""
import logging
from datetime import datetime

from ..models import Connection, ConnectionStatus, Role, User, utcnow
from ..storage import Storage

logger = logging.getLogger(__name__)


class ConnectionPermissionError(PermissionError):
    pass


class PaymentAlreadyUsedError(ValueError):
    """A payment id already opened a connection for another client or advocate"""


class ConnectionService:
    """Connections bought through the payment flow"""

    @staticmethod
    async def open_paid_connection(
        storage: Storage,
        *,
        client: User,
        advocate_id: str,
        payment_id: str,
        validity_days: int,
    ) -> Connection:
        """Active connection for a verified payment.

        A payment id opens at most one connection: repeating it for the same
        client and advocate returns that connection, any other use raises
        PaymentAlreadyUsedError.
        """
        existing = await storage.get_connection_by_payment_id(payment_id)
        if existing is not None:
            if existing.client_id == client.id and existing.advocate_id == advocate_id:
                return existing
            logger.warning(
                "Payment %s reused: connection=%s user=%s advocate=%s",
                payment_id, existing.id, client.id, advocate_id,
            )
            raise PaymentAlreadyUsedError(payment_id)
        connection = await storage.create_connection(
            advocate_id=advocate_id,
            client_id=client.id,
            status="active",
            payment_id=payment_id,
            validity_days=validity_days,
        )
        logger.info("Connection %s opened: client=%s advocate=%s", connection.id, client.id, advocate_id)
        return connection

    @staticmethod
    async def refresh(storage: Storage, connection: Connection, now: datetime | None = None) -> Connection:
        """Mark an active connection past its expiry as expired"""
        now = now or utcnow()
        if connection.status == "active" and connection.expires_at <= now:
            updated = await storage.update_connection_status(connection.id, "expired")
            return updated or connection
        return connection

    @staticmethod
    async def list_for_user(storage: Storage, user: User) -> list[Connection]:
        found = list(await storage.get_connections_by_client(user.id))
        advocate = await storage.get_advocate_by_user_id(user.id)
        if advocate is not None:
            seen = {c.id for c in found}
            found.extend(c for c in await storage.get_connections_by_advocate(advocate.id) if c.id not in seen)
        found.sort(key=lambda c: c.created_at, reverse=True)
        return [await ConnectionService.refresh(storage, c) for c in found]

    @staticmethod
    async def is_participant(storage: Storage, user: User, connection: Connection) -> bool:
        if connection.client_id == user.id:
            return True
        advocate = await storage.get_advocate_by_user_id(user.id)
        return advocate is not None and advocate.id == connection.advocate_id

    @staticmethod
    async def change_status(
        storage: Storage, user: User, connection: Connection, status: ConnectionStatus
    ) -> Connection:
        """Participants may cancel; admins may set any status"""
        if user.role != Role.ADMIN:
            if not await ConnectionService.is_participant(storage, user, connection):
                raise ConnectionPermissionError("Not a participant of this connection")
            if status != "cancelled":
                raise ConnectionPermissionError("Only cancellation is allowed")
        updated = await storage.update_connection_status(connection.id, status)
        if updated is None:
            raise LookupError(connection.id)
        logger.info("Connection %s status -> %s by user %s", connection.id, status, user.id)
        return updated


connection_service = ConnectionService()
