"""Connection fee payment routes"""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import get_settings
from ..models import User
from ..schemas.payment import (
    CreateOrderRequest,
    OrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from ..services.connection_service import PaymentAlreadyUsedError, connection_service
from ..services.payment_gateway import (
    PaymentGatewayError,
    RazorpayGateway,
    compute_connection_fee,
    get_payment_gateway,
)
from ..storage import Storage
from ..utils.deps import CurrentUser, StorageDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["Payment"])

GatewayDep = Annotated[RazorpayGateway, Depends(get_payment_gateway)]


def _require_configured(gateway: RazorpayGateway) -> None:
    if not gateway.configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway is not configured",
        )


async def _check_target_advocate(storage: Storage, advocate_id: str, current_user: User) -> None:
    advocate = await storage.get_advocate(advocate_id)
    if advocate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Advocate not found")
    if advocate.user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot connect with yourself")


@router.post("/create-order", response_model=OrderResponse, summary="Create connection fee order")
async def create_order(
    data: CreateOrderRequest,
    storage: StorageDep,
    current_user: CurrentUser,
    gateway: GatewayDep,
):
    """Connection fee plus GST, charged in paise"""
    _require_configured(gateway)
    await _check_target_advocate(storage, data.advocate_id, current_user)

    settings = get_settings()
    fee = compute_connection_fee(settings.connection_fee, settings.gst_rate)
    try:
        order = await gateway.create_order(
            amount_paise=fee.total_paise,
            receipt=f"conn_{uuid.uuid4().hex[:20]}",
            notes={"advocate_id": data.advocate_id, "client_id": current_user.id},
        )
    except PaymentGatewayError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider unavailable, please try again later",
        )

    logger.info("Payment order %s created for user %s", order.order_id, current_user.id)
    return OrderResponse(
        order_id=order.order_id,
        amount=fee.total,
        amount_paise=order.amount_paise,
        base_fee=fee.base_fee,
        gst=fee.gst,
        currency=order.currency,
        key_id=gateway.key_id,
    )


@router.post("/verify", response_model=VerifyPaymentResponse, summary="Verify payment")
async def verify_payment(
    data: VerifyPaymentRequest,
    storage: StorageDep,
    current_user: CurrentUser,
    gateway: GatewayDep,
):
    """Check the checkout signature and the order it was paid against, then open an active connection"""
    _require_configured(gateway)
    if not gateway.verify_signature(
        order_id=data.razorpay_order_id,
        payment_id=data.razorpay_payment_id,
        signature=data.razorpay_signature,
    ):
        logger.warning("Invalid payment signature: order=%s user=%s", data.razorpay_order_id, current_user.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payment signature")

    await _check_target_advocate(storage, data.advocate_id, current_user)
    try:
        order = await gateway.fetch_order(data.razorpay_order_id)
    except PaymentGatewayError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider unavailable, please try again later",
        )
    if order.notes.get("advocate_id") != data.advocate_id or order.notes.get("client_id") != current_user.id:
        logger.warning(
            "Payment order %s does not belong to user %s and advocate %s",
            order.order_id, current_user.id, data.advocate_id,
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Payment does not match this order")

    try:
        connection = await connection_service.open_paid_connection(
            storage,
            client=current_user,
            advocate_id=data.advocate_id,
            payment_id=data.razorpay_payment_id,
            validity_days=get_settings().connection_validity_days,
        )
    except PaymentAlreadyUsedError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Payment has already been used")
    return VerifyPaymentResponse(connection=connection)
