from fastapi import APIRouter, Depends, HTTPException, status

from resume_builder.schemas.pydantic import (
    JwtResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
)
from resume_builder.services import (
    AuthService,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from ...dependencies import get_auth_service

auth_router = APIRouter()


@auth_router.post("/signin", response_model=JwtResponse)
async def signin(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    try:
        return await service.authenticate(payload.username, payload.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Error: {e.message}",
        )


@auth_router.post("/signup", response_model=MessageResponse)
async def signup(payload: SignupRequest, service: AuthService = Depends(get_auth_service)):
    try:
        await service.register(payload)
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return MessageResponse(message="User registered successfully!")
