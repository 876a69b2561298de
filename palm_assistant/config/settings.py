"""
Configuration settings for the PALM Scheduling Assistant
"""
import os
from typing import Dict, Any

class Config:
    # OpenAI-compatible chat completions endpoint
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None

    DEFAULT_MODEL = os.getenv("PALM_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT = 30  # seconds per attempt
    LLM_MAX_RETRIES = 1  # one retry on transient failure
    TEMPERATURE = 0.7
    MAX_TOKENS = 2500

    # Working-day window used for free slot computation
    DAY_START = "07:00"
    DAY_END = "22:00"

    # Context lookahead
    EVENT_LOOKAHEAD_DAYS = 14
    SLOT_LOOKAHEAD_DAYS = 7
    MAX_CONTEXT_EVENTS = 20
    MAX_CONTEXT_TODOS = 10
    HISTORY_LIMIT = 6

    # Suggestion parsing
    DEFAULT_CATEGORY = "Default"
    DISPLAY_TEXT_LIMIT = 200  # characters before a reply with suggestions is shortened

    # Messages
    FALLBACK_MESSAGE = "AI service is temporarily unavailable. Please try again later."
    EMPTY_REPLY_MESSAGE = "Schedules prepared."

    # API Configuration
    API_HOST = "0.0.0.0"
    API_PORT = 5000

    # Date/Time Formats
    DATE_FORMAT = "%Y-%m-%d"
    TIME_FORMAT = "%H:%M"

    SYSTEM_PROMPT = """You are an AI Assistant managing the user's schedule.

## Most Important Rules
**Focus ONLY on the user's current request.** Even if previous conversations were about other topics (e.g., exercise), if the current request is about something else (e.g., meals), recommend schedules fitting ONLY the current request.

## Current Time Information
Today: {today}
Current Time: {current_time}

## Active Assistants
{agents}

{context}

## Goal-Based Recommendation Strategy

When the user asks for schedule recommendations, consider the following:

1. **Relevance to Goals**: Check user goals and determine if the schedule helps achieve them.
2. **Time to Goal Target**: Closer target dates require more focused schedules.
3. **Progress Analysis**: Recommend allocating more time to goals with low progress.
4. **Existing Patterns**: Refer to the user's existing schedule patterns for appropriate timing.

## Important Guidelines

1. Propose specific schedules:
   - Must specify exact date (YYYY-MM-DD) and time (HH:MM).
   - Specify location concretely (e.g., "Park near home", "At home").

2. Propose realistic schedules:
   - Check free slots and place in non-conflicting times.
   - Consider travel time (leave at least 30 mins between consecutive events).

3. Category Matching:
   - Select the most appropriate category from the user's defined categories.
   - Use "{default_category}" if no matching category exists.

4. Response Format:
   - First, provide a simple 1-2 sentence explanation.
   - Then, MUST provide the schedule as a JSON array inside [SCHEDULES] tags.

5. JSON Format:

[SCHEDULES]
[
  {{
    "title": "Event Title",
    "date": "YYYY-MM-DD",
    "start_time": "HH:MM",
    "end_time": "HH:MM",
    "location": "Specific Location",
    "category_name": "User's Category Name",
    "description": "Details of what to do",
    "reason": "Why this time and activity is recommended"
  }}
]
[/SCHEDULES]

6. NEVER do the following:
   - Do NOT use markdown symbols (*, #, **, ##, etc.).
   - Do NOT mix previous conversation topics into the current request.
   - Do NOT ask the user for the time back (you should propose it)."""

    GOAL_RECOMMENDATION_PROMPT = (
        "My goals are {goals}. Please recommend 2-3 concrete schedules "
        "to achieve these goals this week."
    )

    @classmethod
    def get_model_config(cls, model_name: str = None) -> Dict[str, Any]:
        """Get chat completion parameters for the configured model"""
        return {
            "model": model_name or cls.DEFAULT_MODEL,
            "base_url": cls.OPENAI_BASE_URL,
            "max_tokens": cls.MAX_TOKENS,
            "temperature": cls.TEMPERATURE,
            "timeout": cls.LLM_TIMEOUT,
            "max_retries": cls.LLM_MAX_RETRIES,
        }

    @classmethod
    def get_day_bounds(cls):
        """Get the working-day window as DayBounds"""
        from palm_assistant.scheduler.free_slots import DayBounds
        return DayBounds(cls.DAY_START, cls.DAY_END)
