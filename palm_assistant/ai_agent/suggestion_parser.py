"""
Extract structured schedule suggestions from a chat model reply

The model is asked to put a JSON array inside [SCHEDULES] ... [/SCHEDULES]
tags. Replies are not always well formed, so extraction tries the tagged
block first, then the first JSON array of objects anywhere in the text.
Elements without a title or a valid date are dropped; nothing here raises
on bad model output.
"""
import json
import logging
import re
from datetime import datetime
from typing import Any, List, NamedTuple, Optional, Tuple

from palm_assistant.config.settings import Config
from palm_assistant.records.models import SuggestedEvent, normalize_time

logger = logging.getLogger(__name__)

SCHEDULES_BLOCK = re.compile(r'\[SCHEDULES\]([\s\S]*?)\[/SCHEDULES\]', re.IGNORECASE)
SCHEDULES_TAG = re.compile(r'\[/?SCHEDULES\]', re.IGNORECASE)
ARRAY_START = re.compile(r'\[\s*\{')
CODE_FENCE = re.compile(r'^\s*```(?:json)?\s*|\s*```\s*$', re.IGNORECASE)
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

_decoder = json.JSONDecoder()


class ParsedReply(NamedTuple):
    suggestions: List[SuggestedEvent]
    display_text: str


def parse_suggestions(raw_text: str, default_category: str = None,
                      display_limit: int = None) -> ParsedReply:
    """Split a raw model reply into suggestions and cleaned display prose"""
    raw_text = raw_text or ""
    default_category = default_category or Config.DEFAULT_CATEGORY
    display_limit = Config.DISPLAY_TEXT_LIMIT if display_limit is None else display_limit

    items, span = _extract_payload(raw_text)
    suggestions = []
    for item in items:
        suggestion = _to_suggestion(item, default_category)
        if suggestion is not None:
            suggestions.append(suggestion)

    if len(suggestions) < len(items):
        logger.debug(f"Dropped {len(items) - len(suggestions)} incomplete suggestions")

    text = raw_text
    if span is not None:
        text = text[:span[0]] + text[span[1]:]
    display_text = clean_response_text(text)

    if suggestions and len(display_text) > display_limit:
        display_text = first_sentences(display_text, 2)

    return ParsedReply(suggestions, display_text)


def _extract_payload(text: str) -> Tuple[List[Any], Optional[Tuple[int, int]]]:
    """Return the decoded array elements and the span of a fallback array to cut"""
    match = SCHEDULES_BLOCK.search(text)
    if match:
        body = CODE_FENCE.sub('', match.group(1).strip())
        try:
            parsed = json.loads(body)
            if isinstance(parsed, list):
                return parsed, None
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed [SCHEDULES] payload: {e}")

    for candidate in ARRAY_START.finditer(text):
        try:
            parsed, end = _decoder.raw_decode(text, candidate.start())
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, list):
            return parsed, (candidate.start(), end)

    return [], None


def _to_suggestion(item: Any, default_category: str) -> Optional[SuggestedEvent]:
    if not isinstance(item, dict):
        return None

    title = _clean_str(item.get('title'))
    event_date = _clean_str(item.get('date'))
    if not title or not event_date or not _is_valid_date(event_date):
        return None

    return SuggestedEvent(
        title=title,
        date=event_date,
        start_time=normalize_time(item.get('start_time')),
        end_time=normalize_time(item.get('end_time')),
        location=_clean_str(item.get('location')),
        category_name=_clean_str(item.get('category_name')) or _clean_str(item.get('category')) or default_category,
        description=_clean_str(item.get('description')),
        rationale=_clean_str(item.get('reason')) or _clean_str(item.get('rationale')) or "",
    )


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _is_valid_date(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
        return True
    except ValueError:
        return False


_MARKUP_RULES = (
    (SCHEDULES_BLOCK, ''),
    (SCHEDULES_TAG, ''),
    (re.compile(r'```[\s\S]*?```'), ''),                      # fenced code
    (re.compile(r'^#{1,6}\s*', re.MULTILINE), ''),             # headers
    (re.compile(r'^\s*[-*+]\s+', re.MULTILINE), ''),           # bullets
    (re.compile(r'^\s*\d+\.\s+', re.MULTILINE), ''),           # numbered lists
    (re.compile(r'\*{1,3}([^*\n]+)\*{1,3}'), r'\1'),           # bold / italic
    (re.compile(r'__([^_\n]+)__'), r'\1'),
    (re.compile(r'`([^`\n]*)`'), r'\1'),                       # inline code
    (re.compile(r'\[([^\]]+)\]\([^)]+\)'), r'\1'),             # links
    (re.compile(r'[ \t]{2,}'), ' '),
    (re.compile(r'[ \t]+$', re.MULTILINE), ''),
    (re.compile(r'\n{3,}'), '\n\n'),
)


def clean_response_text(text: str) -> str:
    """Strip the schedule payload and lightweight markdown from a reply"""
    for pattern, replacement in _MARKUP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


_SENTENCE_END = re.compile(r'(?<=[.!?])\s+')


def first_sentences(text: str, count: int) -> str:
    sentences = [s for s in _SENTENCE_END.split(text.strip()) if s]
    shortened = ' '.join(sentences[:count]).strip()
    if shortened and shortened[-1] not in '.!?':
        shortened += '.'
    return shortened
