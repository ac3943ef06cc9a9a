from pydantic import BaseModel
from typing import Dict


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class ServiceInfo(BaseModel):
    message: str
    version: str
    status: str = "running"
    endpoints: Dict[str, str]
