"""
User and authentication Pydantic models
"""

from typing import Optional
from pydantic import BaseModel

class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: str
    password: str

class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    success: bool
    message: str
    token: str
