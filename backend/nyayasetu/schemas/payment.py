"""Payment and connection schemas"""
from decimal import Decimal

from pydantic import BaseModel, Field

from ..models import Connection, ConnectionStatus


class CreateOrderRequest(BaseModel):
    advocate_id: str = Field(..., min_length=1)


class OrderResponse(BaseModel):
    order_id: str
    amount: Decimal
    amount_paise: int
    base_fee: Decimal
    gst: Decimal
    currency: str = "INR"
    key_id: str


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)
    advocate_id: str = Field(..., min_length=1)


class VerifyPaymentResponse(BaseModel):
    success: bool = True
    message: str = "Payment verified"
    connection: Connection


class ConnectionListResponse(BaseModel):
    items: list[Connection]
    total: int


class ConnectionStatusUpdate(BaseModel):
    status: ConnectionStatus
