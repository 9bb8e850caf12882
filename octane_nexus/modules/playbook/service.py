import re
from octane_nexus.modules.playbook.schemas import PlaybookEntry, PlaybookSummary
from typing import List

MAX_ENTRIES = 100
WINNING_HOOK_THRESHOLD = 90
VALIDATED_SCRIPT_THRESHOLD = 80
PATTERN_SHARE = 0.4

EMPTY_PLAYBOOK_INSIGHT = (
    "Once you add a few winners, I will start spotting patterns in what your audience responds to."
)
CURIOSITY_INSIGHT = "Your audience leans toward curiosity hooks that ask questions or create tension."
NUMBERS_INSIGHT = "Specific numbers and quantifiable claims perform unusually well for you."
TRANSFORMATION_INSIGHT = (
    "Scripts that clearly spell out the transformation or outcome are over-represented in your winners."
)
DIVERSE_INSIGHT = (
    "Your winners are diverse. Keep experimenting, and I will surface clearer patterns as the Playbook grows."
)


def winning_hooks(entries: List[PlaybookEntry], threshold: int = WINNING_HOOK_THRESHOLD) -> List[PlaybookEntry]:
    return [e for e in entries if e.type == "hook" and e.score >= threshold]


def validated_scripts(entries: List[PlaybookEntry], threshold: int = VALIDATED_SCRIPT_THRESHOLD) -> List[PlaybookEntry]:
    return [e for e in entries if e.type == "script" and e.score >= threshold]


def playbook_insights(entries: List[PlaybookEntry]) -> List[str]:
    """Patterns across saved winners. Hooks count once per pattern when more than 40% share it."""
    if not entries:
        return [EMPTY_PLAYBOOK_INSIGHT]

    hooks = [e for e in entries if e.type == "hook"]
    scripts = [e for e in entries if e.type == "script"]
    insights = []

    if hooks:
        with_questions = sum(1 for h in hooks if re.search(r"[?!]", h.content))
        with_numbers = sum(1 for h in hooks if re.search(r"\d", h.content))
        if with_questions / len(hooks) > PATTERN_SHARE:
            insights.append(CURIOSITY_INSIGHT)
        if with_numbers / len(hooks) > PATTERN_SHARE:
            insights.append(NUMBERS_INSIGHT)

    if scripts:
        insights.append(TRANSFORMATION_INSIGHT)

    if not insights:
        insights.append(DIVERSE_INSIGHT)
    return insights


def summarize_playbook(entries: List[PlaybookEntry]) -> PlaybookSummary:
    """Summary over the newest 100 entries (clients send newest first)"""
    entries = entries[:MAX_ENTRIES]
    return PlaybookSummary(
        winning_hooks=winning_hooks(entries),
        validated_scripts=validated_scripts(entries),
        insights=playbook_insights(entries),
    )
