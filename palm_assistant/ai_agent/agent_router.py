"""
Rule-based routing of user messages to specialist agent domains
"""
import re
from typing import Iterable, List, NamedTuple, Pattern, Sequence

from palm_assistant.records.models import AgentDomain


class AgentRule(NamedTuple):
    domain: AgentDomain
    pattern: Pattern


def _keywords(*words: str) -> Pattern:
    # matches at word starts only, so "update" never matches "date"; stems that
    # prefix unrelated words carry their own word-end boundary
    return re.compile(r'\b(?:' + '|'.join(words) + r')', re.IGNORECASE)


DEFAULT_RULES = (
    AgentRule(AgentDomain.HEALTH, _keywords(
        'exercise', 'health', 'diet', 'weight', r'fat\b', 'jog', 'running', 'run', 'yoga',
        'stretch', 'swim', 'muscle', 'cardio', 'nutrition', 'gym', 'workout')),
    AgentRule(AgentDomain.STUDY, _keywords(
        'study', 'learn', 'exam', 'test', 'toeic', 'toefl', r'cert(?:ificate|ification|s)?\b',
        'english', 'math', 'reading', 'book', 'lecture', 'class', 'assignment', 'homework', 'memoriz', 'review')),
    AgentRule(AgentDomain.CAREER, _keywords(
        'meeting', 'work', 'project', 'job', 'career', 'interview', 'resume',
        'presentation', 'report', 'business')),
    AgentRule(AgentDomain.LIFESTYLE, _keywords(
        'appointment', 'friend', 'date', 'trip', 'travel', 'restaurant', 'cafe', 'movie',
        'concert', 'shopping', 'dinner', 'lunch', 'meal', 'meet', 'party', 'birthday')),
    AgentRule(AgentDomain.SCHEDULER, _keywords(
        'schedule', 'time', 'when', 'adjust', 'change', 'conflict', 'empty', 'free',
        'optimal', 'available')),
)


class AgentRouter:
    """Classify an utterance against an ordered table of domain rules"""

    def __init__(self, rules: Iterable[AgentRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def route(self, utterance: str) -> List[AgentDomain]:
        """
        Return the coordinator followed by every domain whose rule matches,
        in table order. Never empty.
        """
        domains = [AgentDomain.COORDINATOR]
        for rule in self.rules:
            if rule.domain not in domains and rule.pattern.search(utterance or ""):
                domains.append(rule.domain)
        return domains

    def with_rules(self, *extra: AgentRule) -> "AgentRouter":
        return AgentRouter(self.rules + extra)


_default_router = AgentRouter()


def route_agents(utterance: str) -> List[AgentDomain]:
    return _default_router.route(utterance)


def primary_domain(domains: Sequence[AgentDomain]) -> AgentDomain:
    """The first specialist domain, or the coordinator when none matched"""
    for domain in domains:
        if domain is not AgentDomain.COORDINATOR:
            return domain
    return AgentDomain.COORDINATOR
