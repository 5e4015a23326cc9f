"""API routes"""
from fastapi import APIRouter

from . import advocates, auth, chat, connections, payment, reference

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(advocates.router)
api_router.include_router(reference.router)
api_router.include_router(chat.router)
api_router.include_router(payment.router)
api_router.include_router(connections.router)
