"""Razorpay order creation and payment signature checks"""
from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, cast
from urllib.parse import quote

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

PAISE_PER_RUPEE = 100


class PaymentGatewayError(Exception):
    """The payment provider could not be reached or rejected the request"""


@dataclass(frozen=True)
class ConnectionFee:
    base_fee: Decimal
    gst: Decimal
    total: Decimal

    @property
    def total_paise(self) -> int:
        return int(self.total * PAISE_PER_RUPEE)


def _quantize_amount(amount: Decimal) -> Decimal:
    return Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def compute_connection_fee(base_fee: Decimal, gst_rate: Decimal) -> ConnectionFee:
    base = _quantize_amount(base_fee)
    gst = _quantize_amount(base * gst_rate)
    return ConnectionFee(base_fee=base, gst=gst, total=base + gst)


@dataclass(frozen=True)
class RazorpayOrder:
    order_id: str
    amount_paise: int
    currency: str
    notes: dict[str, str] = field(default_factory=dict)


class RazorpayGateway:
    """Minimal Razorpay client over httpx"""

    def __init__(
        self,
        *,
        key_id: str,
        key_secret: str,
        api_base: str = "https://api.razorpay.com/v1",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.key_id = key_id
        self._key_secret = key_secret
        self.api_base = api_base.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.key_id and self._key_secret)

    async def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> RazorpayOrder:
        try:
            async with httpx.AsyncClient(
                base_url=self.api_base,
                auth=(self.key_id, self._key_secret),
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                res = await client.request(method, path, json=payload)
                res.raise_for_status()
                data_raw: object = res.json()
        except httpx.HTTPError as e:
            logger.error("Razorpay %s %s failed: %s", method, path, e)
            raise PaymentGatewayError(f"{method} {path} failed") from e
        except ValueError as e:
            raise PaymentGatewayError("invalid response from payment provider") from e

        if not isinstance(data_raw, dict):
            raise PaymentGatewayError("razorpay order response must be an object")
        data = cast(dict[str, Any], data_raw)
        order_id = str(data.get("id") or "").strip()
        if not order_id:
            raise PaymentGatewayError("razorpay order response missing id")
        notes = data.get("notes")
        return RazorpayOrder(
            order_id=order_id,
            amount_paise=int(data.get("amount") or (payload or {}).get("amount") or 0),
            currency=str(data.get("currency") or (payload or {}).get("currency") or "INR"),
            # Razorpay sends an empty list when an order has no notes
            notes={str(k): str(v) for k, v in notes.items()} if isinstance(notes, dict) else {},
        )

    async def create_order(
        self,
        *,
        amount_paise: int,
        receipt: str,
        currency: str = "INR",
        notes: dict[str, str] | None = None,
    ) -> RazorpayOrder:
        payload = {
            "amount": amount_paise,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        return await self._request("POST", "/orders", payload)

    async def fetch_order(self, order_id: str) -> RazorpayOrder:
        """Order as recorded by Razorpay, including the notes set at creation"""
        return await self._request("GET", f"/orders/{quote(order_id, safe='')}")

    def verify_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        """HMAC-SHA256 of ``order_id|payment_id`` keyed with the secret"""
        if not self._key_secret:
            return False
        message = f"{order_id}|{payment_id}".encode("utf-8")
        expected = hmac.new(self._key_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()
        return hmac.compare_digest(expected, str(signature or ""))


def get_payment_gateway() -> RazorpayGateway:
    settings = get_settings()
    return RazorpayGateway(
        key_id=settings.razorpay_key_id,
        key_secret=settings.razorpay_key_secret,
        api_base=settings.razorpay_api_base,
    )
