from octane_nexus.modules.playbook.schemas import PlaybookEntry
from octane_nexus.modules.playbook.service import (
    CURIOSITY_INSIGHT, DIVERSE_INSIGHT, EMPTY_PLAYBOOK_INSIGHT, NUMBERS_INSIGHT, TRANSFORMATION_INSIGHT,
    playbook_insights, summarize_playbook
)


def _entry(type_, content, score=85):
    return PlaybookEntry(type=type_, content=content, score=score)


def test_empty_playbook():
    assert playbook_insights([]) == [EMPTY_PLAYBOOK_INSIGHT]


def test_hook_patterns_need_more_than_forty_percent():
    hooks = [
        _entry("hook", "Why does nobody talk about this?"),
        _entry("hook", "3 mistakes I made"),
        _entry("hook", "5 tools I use daily"),
        _entry("hook", "A quiet morning"),
        _entry("hook", "The studio tour"),
    ]
    # 1/5 questions, 2/5 numbers: neither clears 40%
    assert playbook_insights(hooks) == [DIVERSE_INSIGHT]

    hooks.append(_entry("hook", "7 days of this?"))
    assert playbook_insights(hooks) == [NUMBERS_INSIGHT]


def test_questions_numbers_and_scripts():
    entries = [
        _entry("hook", "Can you do 10 pushups?"),
        _entry("hook", "Stop doing this!"),
        _entry("script", "From 0 to 1k followers"),
    ]
    assert playbook_insights(entries) == [CURIOSITY_INSIGHT, NUMBERS_INSIGHT, TRANSFORMATION_INSIGHT]


def test_hashtags_alone_are_diverse():
    assert playbook_insights([_entry("hashtag", "#foodtok")]) == [DIVERSE_INSIGHT]


def test_summary_thresholds():
    entries = [
        _entry("hook", "Top hook", score=90),
        _entry("hook", "Almost", score=89),
        _entry("script", "Solid script", score=80),
        _entry("script", "Weak script", score=79),
    ]
    summary = summarize_playbook(entries)
    assert [e.content for e in summary.winning_hooks] == ["Top hook"]
    assert [e.content for e in summary.validated_scripts] == ["Solid script"]


def test_summary_only_reads_newest_hundred():
    entries = [_entry("hashtag", f"#tag{i}") for i in range(100)] + [_entry("hook", "Old winner", score=99)]
    assert summarize_playbook(entries).winning_hooks == []


def test_summary_endpoint(client):
    response = client.post("/api/playbook/summary", json={"entries": [
        {"type": "hook", "content": "Why 3 is the magic number?", "score": 95, "why_it_works": "Curiosity"},
    ]})
    assert response.status_code == 200
    body = response.json()
    assert body["winning_hooks"][0]["content"] == "Why 3 is the magic number?"
    assert body["insights"] == [CURIOSITY_INSIGHT, NUMBERS_INSIGHT]


def test_summary_endpoint_validates_scores(client):
    response = client.post("/api/playbook/summary", json={"entries": [{"type": "hook", "content": "x", "score": 150}]})
    assert response.status_code == 400
    assert response.json()["error"].startswith("entries.0.score")
