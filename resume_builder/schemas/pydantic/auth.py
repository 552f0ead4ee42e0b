from pydantic import BaseModel, Field

from .resume import CamelModel


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Account username")
    password: str = Field(..., min_length=1, description="Account password")


class SignupRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=20)
    email: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8, max_length=120)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class JwtResponse(BaseModel):
    token: str
    type: str = "Bearer"
    id: str
    username: str
    email: str


class MessageResponse(BaseModel):
    message: str
