from pydantic import BaseModel

class LoginRequest(BaseModel):
    email: str
    password: str

class RegisterRequest(BaseModel):
    email: str  # plain str to allow .local and other dev domains
    password: str
    name: str = ""
    phone: str = ""
    role: str = "customer"  # providers come from approved provider requests, admins from seed/ops

class RefreshRequest(BaseModel):
    refreshToken: str

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
