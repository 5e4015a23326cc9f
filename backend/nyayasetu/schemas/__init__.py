"""Request and response schemas"""
from .common import MessageResponse
from .user import (
    LoginResponse,
    RegisterResponse,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
)
from .advocate import (
    AdvocateCreate,
    AdvocateListResponse,
    AdvocateProfileUpdate,
    AdvocateVerify,
    LocationListResponse,
    PracticeAreaListResponse,
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
)
from .chat import ChatHistoryResponse, ChatRequest, ChatResponse, SuggestedQuestionsResponse
from .payment import (
    ConnectionListResponse,
    ConnectionStatusUpdate,
    CreateOrderRequest,
    OrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)

__all__ = [
    "MessageResponse",
    "LoginResponse",
    "RegisterResponse",
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "AdvocateCreate",
    "AdvocateListResponse",
    "AdvocateProfileUpdate",
    "AdvocateVerify",
    "LocationListResponse",
    "PracticeAreaListResponse",
    "ReviewCreate",
    "ReviewListResponse",
    "ReviewResponse",
    "ChatHistoryResponse",
    "ChatRequest",
    "ChatResponse",
    "SuggestedQuestionsResponse",
    "ConnectionListResponse",
    "ConnectionStatusUpdate",
    "CreateOrderRequest",
    "OrderResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]
