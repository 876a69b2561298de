#!/usr/bin/env python3
"""
Main entry point for the PALM Scheduling Assistant

Runs the JSON API server, answers a single chat message from the command
line, or smoke-tests a running server.
"""

import json
import logging
import sys

from palm_assistant.config.settings import Config
from palm_assistant.records.models import parse_date
from palm_assistant.utils.logger import AssistantLogger

def _load_store(data_file=None):
    if data_file:
        from palm_assistant.records.record_store import JsonRecordStore
        return JsonRecordStore(data_file)
    from palm_assistant.records.mock_record_store import MockRecordStore
    return MockRecordStore()

def _make_assistant(mock_llm=False):
    from palm_assistant.scheduler.scheduling_assistant import SchedulingAssistant
    if mock_llm:
        from palm_assistant.ai_agent.mock_llm_client import MockLLMClient
        return SchedulingAssistant(llm_client=MockLLMClient())
    return SchedulingAssistant()

def run_server(host, port, data_file=None, mock_llm=False):
    """Run the Flask API server"""
    from palm_assistant.api.flask_server import AssistantAPI

    AssistantLogger.setup_logging(log_level="INFO")
    logger = logging.getLogger(__name__)
    logger.info("Starting PALM Scheduling Assistant...")

    api = AssistantAPI(_load_store(data_file), _make_assistant(mock_llm))
    try:
        api.run(host=host, port=port)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")

def run_chat(message, data_file=None, today=None, mock_llm=False):
    """Answer one message against the given records and print the reply as JSON"""
    AssistantLogger.setup_logging(log_level="WARNING")

    store = _load_store(data_file)
    assistant = _make_assistant(mock_llm)
    reply = assistant.handle_message(
        message,
        store.get_events(),
        store.get_goals(),
        store.get_todos(),
        store.get_categories(),
        today=parse_date(today) if today else None,
    )
    print(json.dumps(reply.to_dict(), indent=2, ensure_ascii=False))
    return reply

def run_smoke(api_url):
    """Run smoke checks against a running server"""
    from scripts.smoke_client import AssistantSmokeClient

    AssistantLogger.setup_logging(log_level="INFO")
    results = AssistantSmokeClient(api_url).run_checks()

    summary = results["summary"]
    print(f"\nSmoke Results:")
    print(f"  Total: {summary['total']}")
    print(f"  Passed: {summary['passed']}")
    print(f"  Failed: {summary['failed']}")
    return results

def main():
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='PALM Scheduling Assistant')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    server_parser = subparsers.add_parser('server', help='Run the JSON API server')
    server_parser.add_argument('--host', default=Config.API_HOST, help='Host to bind to')
    server_parser.add_argument('--port', type=int, default=Config.API_PORT, help='Port to bind to')
    server_parser.add_argument('--data', help='JSON export of events/goals/todos/categories')
    server_parser.add_argument('--mock-llm', action='store_true', help='Use the offline mock model')

    chat_parser = subparsers.add_parser('chat', help='Answer a single message')
    chat_parser.add_argument('message', help='User message')
    chat_parser.add_argument('--data', help='JSON export of events/goals/todos/categories')
    chat_parser.add_argument('--today', help='Override today (YYYY-MM-DD)')
    chat_parser.add_argument('--mock-llm', action='store_true', help='Use the offline mock model')

    smoke_parser = subparsers.add_parser('smoke', help='Smoke-test a running server')
    smoke_parser.add_argument('--url', default=f'http://localhost:{Config.API_PORT}', help='API URL')

    args = parser.parse_args()

    if args.command == 'server':
        run_server(args.host, args.port, args.data, args.mock_llm)
    elif args.command == 'chat':
        run_chat(args.message, args.data, args.today, args.mock_llm)
    elif args.command == 'smoke':
        results = run_smoke(args.url)
        sys.exit(0 if results["summary"]["failed"] == 0 else 1)
    else:
        parser.print_help()

if __name__ == '__main__':
    main()
