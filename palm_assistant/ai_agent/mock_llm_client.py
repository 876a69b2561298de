"""
Mock LLM Client for running the assistant without a model endpoint
"""
import json
import logging
import re
from typing import Dict, List, Optional

from palm_assistant.ai_agent.agent_router import primary_domain, route_agents
from palm_assistant.records.models import AgentDomain
from palm_assistant.scheduler.intervals import from_minutes, to_minutes

logger = logging.getLogger(__name__)

# "2025-06-01 (Sun): 07:00~09:00, 10:00~22:00" lines from the free slot summary
SLOT_LINE = re.compile(r'^(\d{4}-\d{2}-\d{2}) \(\w{3}\): (.+)$', re.MULTILINE)
SLOT_RANGE = re.compile(r'(\d{2}:\d{2})~(\d{2}:\d{2})')

MOCK_TITLES = {
    AgentDomain.HEALTH: ("Workout", "Health"),
    AgentDomain.STUDY: ("Study session", "Study"),
    AgentDomain.CAREER: ("Focus work block", "Work"),
    AgentDomain.LIFESTYLE: ("Meet up", "Social"),
    AgentDomain.SCHEDULER: ("Planning block", "Personal"),
    AgentDomain.COORDINATOR: ("Personal time", "Personal"),
}

class MockLLMClient:
    """Mock LLM client that proposes the first free hour listed in the prompt"""

    def __init__(self, model_name: str = None, duration_minutes: int = 60):
        self.model_name = model_name or "mock-llm"
        self.duration_minutes = duration_minutes
        self.calls = []
        logger.info(f"Initialized Mock LLM client: {self.model_name}")

    def complete(self, system_prompt: str, history: List[Dict[str, str]],
                 user_message: str) -> Optional[str]:
        self.calls.append({"system_prompt": system_prompt, "history": history,
                           "user_message": user_message})
        logger.info(f"🤖 MOCK: Answering '{user_message[:60]}'")

        domain = primary_domain(route_agents(user_message))
        title, category = MOCK_TITLES[domain]

        for day, start, end in self._free_ranges(system_prompt):
            start_min, end_min = to_minutes(start), to_minutes(end)
            if end_min - start_min < self.duration_minutes:
                continue
            suggestion = {
                "title": title,
                "date": day,
                "start_time": start,
                "end_time": from_minutes(start_min + self.duration_minutes),
                "location": "At home",
                "category_name": category,
                "description": f"{title} requested: {user_message[:80]}",
                "reason": f"First free slot on {day} that fits {self.duration_minutes} minutes.",
            }
            return (f"I found a free slot on {day} at {start}.\n\n"
                    f"[SCHEDULES]\n{json.dumps([suggestion], indent=2)}\n[/SCHEDULES]")

        return "Your week looks fully booked, so I could not find a free slot to suggest."

    @staticmethod
    def _free_ranges(system_prompt: str):
        for line in SLOT_LINE.finditer(system_prompt):
            day, rest = line.groups()
            for start, end in SLOT_RANGE.findall(rest):
                yield day, start, end
