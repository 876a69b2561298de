"""
Scheduling Assistant - runs one chat turn end to end
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from palm_assistant.ai_agent.agent_router import AgentRouter, primary_domain
from palm_assistant.ai_agent.context_builder import (build_context, build_history,
                                                     build_system_prompt)
from palm_assistant.ai_agent.suggestion_parser import parse_suggestions
from palm_assistant.config.settings import Config
from palm_assistant.records.models import (AgentDomain, Category, ChatMessage, Event, Goal,
                                           SuggestedEvent, Todo, parse_date)
from palm_assistant.scheduler.conflict_detector import find_conflicting_events
from palm_assistant.scheduler.goal_progress import is_active
from palm_assistant.utils.logger import AssistantLogger

logger = logging.getLogger(__name__)


@dataclass
class AssistantReply:
    content: str
    agent_domains: List[AgentDomain]
    primary_domain: AgentDomain
    suggestions: List[SuggestedEvent] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "agent_domains": [d.value for d in self.agent_domains],
            "primary_domain": self.primary_domain.value,
            "suggestions": [s.to_dict() for s in self.suggestions],
            "warnings": self.warnings,
            "fallback": self.fallback,
        }


class SchedulingAssistant:
    """
    Routes the message, assembles context, asks the model and parses its
    reply into suggestions. Holds no conversation state: the caller passes
    the transcript in and keeps the returned suggestions.
    """

    def __init__(self, llm_client=None, router: AgentRouter = None):
        self.config = Config()
        if llm_client is None:
            from palm_assistant.ai_agent.llm_client import LLMClient
            llm_client = LLMClient()
        self.llm_client = llm_client
        self.router = router or AgentRouter()

    def handle_message(self, utterance: str, events: Iterable[Event], goals: Iterable[Goal],
                       todos: Iterable[Todo], categories: Iterable[Category] = (),
                       history: Iterable[ChatMessage] = (), today: date = None,
                       now: datetime = None, request_id: str = None) -> AssistantReply:
        """Process one user turn"""
        start_time = time.time()
        now = now or datetime.now()
        today = today or now.date()
        events = list(events)

        domains = self.router.route(utterance)
        primary = primary_domain(domains)
        logger.info(f"🧭 Routed to {[d.value for d in domains]} (primary: {primary.value})")

        context = build_context(events, goals, todos, today, categories)
        system_prompt = build_system_prompt(context, domains, today, now)
        messages = build_history(history, self.config.HISTORY_LIMIT)

        raw_reply = self.llm_client.complete(system_prompt, messages, utterance)

        if raw_reply is None:
            reply = AssistantReply(self.config.FALLBACK_MESSAGE, domains, primary, fallback=True)
        else:
            parsed = parse_suggestions(raw_reply, self.config.DEFAULT_CATEGORY,
                                       self.config.DISPLAY_TEXT_LIMIT)
            content = parsed.display_text or self.config.EMPTY_REPLY_MESSAGE
            reply = AssistantReply(content, domains, primary, parsed.suggestions,
                                   self._conflict_warnings(parsed.suggestions, events))

        AssistantLogger.log_turn(request_id or "local", utterance, [d.value for d in domains],
                                 len(reply.suggestions), reply.fallback, time.time() - start_time)
        return reply

    def recommend_for_goals(self, events: Iterable[Event], goals: Iterable[Goal],
                            todos: Iterable[Todo], categories: Iterable[Category] = (),
                            today: date = None, now: datetime = None) -> Optional[AssistantReply]:
        """Ask for a few schedules that advance the active goals; None without active goals"""
        goals = list(goals)
        active = [g for g in goals if is_active(g)]
        if not active:
            logger.info("No active goals - skipping goal recommendations")
            return None

        names = {c.id: c.name for c in categories or ()}
        summary = ", ".join(
            f'"{g.title}"' + (f" ({names[g.category_id]})" if g.category_id in names else "")
            for g in active
        )
        prompt = self.config.GOAL_RECOMMENDATION_PROMPT.format(goals=summary)
        return self.handle_message(prompt, events, goals, todos, categories, (), today, now)

    @staticmethod
    def _conflict_warnings(suggestions: List[SuggestedEvent], events: List[Event]) -> List[str]:
        """Flag suggestions that collide with events already on the calendar"""
        warnings = []
        for suggestion in suggestions:
            if not suggestion.start_time or not suggestion.end_time:
                continue
            if suggestion.end_time <= suggestion.start_time:
                continue
            clashes = find_conflicting_events(parse_date(suggestion.date), suggestion.start_time,
                                              suggestion.end_time, events)
            if clashes:
                titles = ", ".join(f'"{e.title}"' for e in clashes)
                warnings.append(f'"{suggestion.title}" on {suggestion.date} '
                                f'{suggestion.start_time}~{suggestion.end_time} overlaps {titles}.')
        if warnings:
            logger.warning(f"⚠️  {len(warnings)} suggestions overlap existing events")
        return warnings
