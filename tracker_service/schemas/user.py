from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminLoginRequest(BaseModel):
    secret: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class AuthResponse(BaseModel):
    message: str
    token: str
    email: EmailStr
    name: str


class Token(BaseModel):
    message: str
    token: str
