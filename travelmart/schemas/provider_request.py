from typing import Optional
from pydantic import BaseModel

class ProviderRequestCreate(BaseModel):
    providerType: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    businessName: Optional[str] = None
    businessPhone: Optional[str] = None
    businessEmail: Optional[str] = ""
    businessAddress: Optional[str] = ""
    details: dict = {}
    documents: dict = {}
    additionalInfo: Optional[str] = ""

class ProviderRequestRejection(BaseModel):
    reason: Optional[str] = None
