"""
PALM Scheduling Assistant - the deterministic core behind the PALM calendar chat

This package provides:
- Rule-based routing of user messages to specialist agent domains
- Free time slot and schedule conflict computation
- Goal progress and urgency evaluation
- Prompt context assembly for the chat model
- Parsing of schedule suggestions out of model replies
"""

__version__ = "1.0.0"
__author__ = "PALM Team"

from palm_assistant.ai_agent.agent_router import route_agents
from palm_assistant.ai_agent.context_builder import build_context
from palm_assistant.ai_agent.suggestion_parser import parse_suggestions
from palm_assistant.scheduler.conflict_detector import detect_conflicts
from palm_assistant.scheduler.free_slots import find_free_slots
from palm_assistant.scheduler.goal_progress import goal_progress

__all__ = [
    'route_agents', 'build_context', 'parse_suggestions',
    'detect_conflicts', 'find_free_slots', 'goal_progress',
]
