from pydantic import BaseModel, ConfigDict, EmailStr
from typing import List, Literal, Optional

Role = Literal["customer", "admin"]

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests
class UserCreate(UserBase):
    password: str
    role: Role = "customer"  # default role

# Schema for profile updates; omitted fields keep their stored value
class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    role: Optional[Role] = None

# Output schema for user profile details (never exposes the hash)
class UserResponse(UserBase):
    id: int
    role: str

    model_config = ConfigDict(from_attributes=True)

# Read responses carry only the resource
class UserRead(BaseModel):
    user: UserResponse

class UserEnvelope(UserRead):
    message: str

# Schema for paginated user list response
class UsersPage(BaseModel):
    users: List[UserResponse]
    total: int
    page: int
    page_size: int

# Schema for JWT authentication token response
class Token(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"

# Identity carried by a verified token for the duration of one request
class TokenData(BaseModel):
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
