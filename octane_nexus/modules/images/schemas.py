from pydantic import BaseModel
from typing import Optional


class ImageRequest(BaseModel):
    prompt: Optional[str] = None
    style: Optional[str] = "logo"


class ImageResponse(BaseModel):
    url: str
