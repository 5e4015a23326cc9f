"""User and auth schemas"""
from datetime import datetime
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, description="Username")
    email: EmailStr = Field(..., description="Email")
    full_name: str = Field(..., min_length=1, max_length=100, description="Full name")
    phone: str | None = Field(None, max_length=20)


class UserCreate(UserBase):
    """Registration form"""
    password: str = Field(..., min_length=6, max_length=100, description="Password")
    role: Literal["client", "advocate"] = "client"


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, description="Password")


class UserResponse(BaseModel):
    """Public user data; the password is never included"""
    id: str
    username: str
    email: str
    full_name: str
    phone: str | None = None
    role: str
    created_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginResponse(BaseModel):
    user: UserResponse
    token: Token
    message: str = "Login successful"


class RegisterResponse(BaseModel):
    user: UserResponse
    advocate_id: str | None = None
    message: str = "Registration successful"
