import re
import json
from typing import Any, Dict, List

FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
LIST_MARKER_PATTERN = re.compile(r"^(?:[-*•]|\d+[.)])\s+")
LABEL_LINE_PATTERN = re.compile(r"^(bio|option|idea|script|video|handle)\s*\d*:?\s*$", re.IGNORECASE)


def strip_fences(text: str) -> str:
    return FENCE_PATTERN.sub("", text.strip()).strip()


def extract_json(text: str) -> Any:
    """
    Decode the JSON payload of a model reply.
    Markdown fences are removed, then the outermost {...} or [...] is decoded,
    whichever starts first. Raises ValueError when nothing decodes.
    """
    cleaned = strip_fences(text)
    starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
    if not starts:
        raise ValueError("No JSON found in model response")
    start = min(starts)
    closer = "}" if cleaned[start] == "{" else "]"
    end = cleaned.rfind(closer)
    if end <= start:
        raise ValueError("Unterminated JSON in model response")
    return json.loads(cleaned[start:end + 1])


def extract_json_object(text: str) -> Dict[str, Any]:
    parsed = extract_json(text)
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object")
    return parsed


def extract_json_array(text: str) -> List[Any]:
    """Array replies; an object wrapping a single list (e.g. {"ideas": [...]}) is unwrapped"""
    parsed = extract_json(text)
    if isinstance(parsed, dict):
        lists = [v for v in parsed.values() if isinstance(v, list)]
        if len(lists) == 1:
            parsed = lists[0]
    if not isinstance(parsed, list):
        raise ValueError("Expected a JSON array")
    return parsed


def split_lines(text: str, min_length: int = 1) -> List[str]:
    """Line replies: one item per line, list markers and quotes stripped, label-only lines dropped"""
    items = []
    for line in strip_fences(text).splitlines():
        line = line.strip()
        if not line or LABEL_LINE_PATTERN.match(line):
            continue
        line = LIST_MARKER_PATTERN.sub("", line).strip().strip('"').strip()
        if len(line) >= min_length:
            items.append(line)
    return items


def require_text(data: Dict[str, Any], key: str) -> str:
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object with {key}")
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Missing field: {key}")
    return value.strip()


def require_text_list(data: Dict[str, Any], key: str, count: int) -> List[str]:
    """First `count` non-empty strings of data[key]; fewer than that is an error"""
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object with {key}")
    value = data.get(key)
    if not isinstance(value, list):
        raise ValueError(f"Missing list: {key}")
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    if len(items) < count:
        raise ValueError(f"Expected {count} items in {key}, got {len(items)}")
    return items[:count]
