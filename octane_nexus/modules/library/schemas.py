from pydantic import BaseModel
from typing import Optional, Dict, Any, Literal, Union
from datetime import datetime

PerformanceStatus = Literal["viral", "success"]


class SaveBlueprintRequest(BaseModel):
    idea: str = ""


class SavedBlueprint(BaseModel):
    id: Union[int, str]
    user_id: Optional[str] = None
    idea: str
    blueprint: Dict[str, Any]
    created_at: Optional[datetime] = None


class PerformanceRequest(BaseModel):
    status: PerformanceStatus


class PerformanceResponse(BaseModel):
    blueprint_id: Union[int, str]
    user_id: str
    status: PerformanceStatus
    marked_at: datetime


class ContentHistory(BaseModel):
    content_text: Optional[str] = None
    updated_at: Optional[datetime] = None


class ContentHistoryUpdate(BaseModel):
    content_text: str = ""


class CommunityWin(BaseModel):
    idea: str
    niche: str


class CommunityInsights(BaseModel):
    dominant_vibe: Optional[str] = None
    viral_potential: Optional[int] = None
    viral_count: int = 0
    success_count: int = 0


class LibraryInsightRequest(BaseModel):
    user_name: Optional[str] = None
