from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    username: str | None = None


class UserCreate(BaseModel):
    username: str
    password: str
    display_name: str | None = None


class UserPublic(BaseModel):
    id: int
    username: str
    display_name: str | None = None
    disabled: bool


class UserUpdate(BaseModel):
    display_name: str | None = None
    password: str | None = None
