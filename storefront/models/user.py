from typing import Optional
from datetime import datetime
from pydantic import EmailStr
from sqlmodel import Field, SQLModel
from storefront.core.clock import utc_now

class UserBase(SQLModel):
    username: str = Field(unique=True, index=True, min_length=1)
    email: str = Field(index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now)

class UserCreate(UserBase):
    email: EmailStr
    password: str = Field(min_length=1)

class UserRead(UserBase):
    id: int
    created_at: datetime
