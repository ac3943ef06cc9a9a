from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ImproveTextRequest(BaseModel):
    text: Optional[str] = None


class ImproveTextResponse(BaseModel):
    success: bool = True
    versions: List[str]


class CaptionRequest(BaseModel):
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class CaptionResponse(BaseModel):
    success: bool = True
    caption: str
