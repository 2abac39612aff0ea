"""
Registration, login and user listing API routes
"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from api.dependencies import get_users_service
from models.user import RegisterRequest, LoginRequest, LoginResponse
from services.users_service import UsersService
from utils.error_handling import raise_for_service_error
from utils.helpers import envelope

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/register", status_code=201)
async def register(
    request: RegisterRequest,
    users_service: UsersService = Depends(get_users_service)
):
    """Register a new user"""
    try:
        result = await users_service.register(
            name=request.name,
            email=request.email,
            password=request.password
        )
        raise_for_service_error(result, "Error registering user")

        return envelope(message="User registered successfully", data=result.data[0])

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to register user: {e}")
        raise HTTPException(status_code=500, detail="Error registering user")

@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    users_service: UsersService = Depends(get_users_service)
):
    """Check credentials and return an access token"""
    try:
        result = await users_service.login(email=request.email, password=request.password)
        raise_for_service_error(result, "Error logging in")

        return LoginResponse(
            success=True,
            message="Login successful",
            token=result.data[0]["token"]
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to log in: {e}")
        raise HTTPException(status_code=500, detail="Error logging in")

@router.get("/users")
async def list_users(users_service: UsersService = Depends(get_users_service)):
    """Get all users"""
    try:
        result = await users_service.list_users()
        raise_for_service_error(result, "Error fetching users")

        return envelope(data=result.data)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch users: {e}")
        raise HTTPException(status_code=500, detail="Error fetching users")

@router.get("/users/{user_id}")
async def get_user(
    user_id: str,
    users_service: UsersService = Depends(get_users_service)
):
    """Get a single user by id"""
    try:
        result = await users_service.get_user(user_id)
        raise_for_service_error(result, "Error fetching user")

        return envelope(data=result.data[0])

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Error fetching user")
