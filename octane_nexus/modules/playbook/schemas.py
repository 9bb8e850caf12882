from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

PlaybookEntryType = Literal["hook", "script", "hashtag"]


class PlaybookEntry(BaseModel):
    id: Optional[str] = None
    type: PlaybookEntryType
    content: str
    score: int = Field(ge=0, le=100)
    why_it_works: str = ""
    created_at: Optional[datetime] = None


class PlaybookSummaryRequest(BaseModel):
    entries: List[PlaybookEntry] = []


class PlaybookSummary(BaseModel):
    winning_hooks: List[PlaybookEntry]
    validated_scripts: List[PlaybookEntry]
    insights: List[str]
