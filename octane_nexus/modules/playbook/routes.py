from fastapi import APIRouter
from octane_nexus.modules.playbook.schemas import PlaybookSummaryRequest, PlaybookSummary
from octane_nexus.modules.playbook.service import summarize_playbook

router = APIRouter(prefix="/playbook", tags=["playbook"])


@router.post("/summary", response_model=PlaybookSummary)
async def playbook_summary(request: PlaybookSummaryRequest):
    """Winning hooks, validated scripts and pattern insights for the entries the client keeps"""
    return summarize_playbook(request.entries)
