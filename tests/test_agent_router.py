import re

import pytest

from palm_assistant.ai_agent.agent_router import (AgentRouter, AgentRule, primary_domain,
                                                  route_agents)
from palm_assistant.records.models import AgentDomain as D


@pytest.mark.parametrize("utterance,expected", [
    ("", [D.COORDINATOR]),
    ("hello there", [D.COORDINATOR]),
    ("I want to go to the GYM", [D.COORDINATOR, D.HEALTH]),
    ("Find time to study for my exam", [D.COORDINATOR, D.STUDY, D.SCHEDULER]),
    ("Dinner with a friend after work", [D.COORDINATOR, D.CAREER, D.LIFESTYLE]),
    ("When am I free?", [D.COORDINATOR, D.SCHEDULER]),
])
def test_route_agents(utterance, expected):
    assert route_agents(utterance) == expected


def test_route_handles_none():
    assert AgentRouter().route(None) == [D.COORDINATOR]


def test_keywords_match_word_starts_only():
    assert route_agents("please update it") == [D.COORDINATOR]


@pytest.mark.parametrize("utterance,expected", [
    ("Call my father", [D.COORDINATOR]),
    ("certainly", [D.COORDINATOR]),
    ("burn some fat", [D.COORDINATOR, D.HEALTH]),
    ("AWS certification", [D.COORDINATOR, D.STUDY]),
    ("my cert expires", [D.COORDINATOR, D.STUDY]),
])
def test_short_stems_need_whole_word(utterance, expected):
    assert route_agents(utterance) == expected


def test_with_rules_extends_table():
    router = AgentRouter(rules=()).with_rules(
        AgentRule(D.HEALTH, re.compile("pilates", re.IGNORECASE)))
    assert router.route("Pilates on Friday") == [D.COORDINATOR, D.HEALTH]
    assert router.route("gym") == [D.COORDINATOR]


def test_domain_listed_once():
    router = AgentRouter().with_rules(AgentRule(D.HEALTH, re.compile("walk")))
    assert router.route("gym then walk") == [D.COORDINATOR, D.HEALTH]


def test_primary_domain():
    assert primary_domain([D.COORDINATOR]) is D.COORDINATOR
    assert primary_domain([D.COORDINATOR, D.STUDY, D.HEALTH]) is D.STUDY
