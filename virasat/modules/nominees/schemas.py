from pydantic import BaseModel
from datetime import datetime


class AccessRequestCreate(BaseModel):
    certificate_url: str


class AccessRequestResponse(BaseModel):
    url: str
    hostname: str
    verified: bool
    timestamp: datetime
    status: str = "granted"
    # Granting is not backed by any entitlement; stored records stay owner-only
    grants_record_access: bool = False
    message: str = "Death certificate verified. Nominee access has been granted."
