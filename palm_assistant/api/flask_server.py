"""
Flask API server for the PALM Scheduling Assistant
"""
import logging
import signal
import sys
import time
import uuid
from datetime import date, datetime, timedelta

from flask import Flask, request, jsonify
from flask_cors import CORS

from palm_assistant.ai_agent.agent_router import primary_domain
from palm_assistant.ai_agent.context_builder import build_context
from palm_assistant.config.settings import Config
from palm_assistant.records.models import ChatMessage, parse_date
from palm_assistant.records.record_store import RecordStore
from palm_assistant.scheduler.conflict_detector import detect_conflicts
from palm_assistant.scheduler.free_slots import DayBounds, find_free_slots
from palm_assistant.scheduler.goal_progress import goal_progress, goal_urgency, is_active
from palm_assistant.scheduler.scheduling_assistant import SchedulingAssistant
from palm_assistant.utils.validators import DataSanitizer, RequestValidator

logger = logging.getLogger(__name__)

class AssistantAPI:
    """
    JSON API over the scheduling core, reading records from a RecordStore
    """

    def __init__(self, record_store: RecordStore, assistant: SchedulingAssistant = None):
        self.config = Config()
        self.app = Flask(__name__)
        CORS(self.app)

        self.record_store = record_store
        self.assistant = assistant or SchedulingAssistant()
        self.start_time = time.time()
        self.turns_processed = 0

        self._setup_routes()

    def _today(self) -> date:
        value = request.args.get('today') or (request.get_json(silent=True) or {}).get('today')
        return parse_date(value) if value else date.today()

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.app.route('/health', methods=['GET'])
        def health_check():
            return jsonify({
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
                "turns_processed": self.turns_processed,
                "uptime": time.time() - self.start_time,
            })

        @self.app.route('/chat', methods=['POST'])
        def chat():
            """Main endpoint: one conversational turn"""
            data = request.get_json(silent=True)
            if not data:
                logger.error("No JSON data received")
                return jsonify({"error": "No JSON data provided"}), 400

            errors = RequestValidator.validate_chat_request(data)
            if errors:
                return jsonify({"error": "Invalid request", "details": errors}), 400

            request_id = data.get('request_id') or uuid.uuid4().hex[:12]
            message = DataSanitizer.sanitize_text(data['message'])
            logger.info(f"🚀 RECEIVED CHAT TURN: {request_id}")
            logger.info(f"   📝 Message: {message[:100]}")

            today = self._today()
            reply = self.assistant.handle_message(
                message,
                self.record_store.get_events(),
                self.record_store.get_goals(),
                self.record_store.get_todos(),
                self.record_store.get_categories(),
                history=[ChatMessage.from_dict(m) for m in data.get('history', [])],
                today=today,
                request_id=request_id,
            )
            self.turns_processed += 1

            result = reply.to_dict()
            result["request_id"] = request_id
            return jsonify(result)

        @self.app.route('/agents/route', methods=['POST'])
        def route_message():
            data = request.get_json(silent=True) or {}
            domains = self.assistant.router.route(data.get('message', ''))
            return jsonify({
                "agent_domains": [d.value for d in domains],
                "primary_domain": primary_domain(domains).value,
            })

        @self.app.route('/free-slots', methods=['GET'])
        def free_slots():
            args = request.args.to_dict()
            errors = RequestValidator.validate_free_slot_request(args)
            if errors:
                return jsonify({"error": "Invalid request", "details": errors}), 400

            day = parse_date(args['date'])
            bounds = DayBounds(args.get('start', self.config.DAY_START),
                               args.get('end', self.config.DAY_END))
            slots = find_free_slots(self.record_store.get_events(day, day), day, bounds,
                                    int(args.get('min_duration', 0)))
            return jsonify({
                "date": day.isoformat(),
                "bounds": {"start": bounds.start, "end": bounds.end},
                "slots": [slot.to_dict() for slot in slots],
            })

        @self.app.route('/conflicts', methods=['GET'])
        def conflicts():
            adjacent_only = request.args.get('legacy', '').lower() in ('1', 'true', 'yes')
            found = detect_conflicts(self.record_store.get_events(), adjacent_only=adjacent_only)
            return jsonify({
                "count": len(found),
                "conflicts": [c.to_dict() for c in found],
            })

        @self.app.route('/goals/progress', methods=['GET'])
        def goals_progress():
            today = self._today()
            goals = []
            for goal in self.record_store.get_goals():
                urgency = goal_urgency(goal, today)
                goals.append({
                    "id": goal.id,
                    "title": goal.title,
                    "status": goal.status.value,
                    "progress": goal_progress(goal),
                    "is_active": is_active(goal),
                    "urgency": urgency.kind.value if urgency else None,
                    "days_left": urgency.days_left if urgency else None,
                    "deadline_info": urgency.describe() if urgency else None,
                })
            return jsonify({"goals": goals})

        @self.app.route('/recommendations', methods=['POST'])
        def recommendations():
            reply = self.assistant.recommend_for_goals(
                self.record_store.get_events(),
                self.record_store.get_goals(),
                self.record_store.get_todos(),
                self.record_store.get_categories(),
                today=self._today(),
            )
            if reply is None:
                return jsonify({"message": "No active goals to plan for", "suggestions": []})
            return jsonify(reply.to_dict())

        @self.app.route('/context', methods=['GET'])
        def context():
            """Debug view of the prompt context the model would receive"""
            today = self._today()
            horizon = today + timedelta(days=self.config.EVENT_LOOKAHEAD_DAYS)
            text = build_context(
                self.record_store.get_events(today, horizon),
                self.record_store.get_goals(),
                self.record_store.get_todos(),
                today,
                self.record_store.get_categories(),
            )
            return jsonify({"today": today.isoformat(), "context": text})

        @self.app.errorhandler(ValueError)
        def bad_value(error):
            return jsonify({"error": str(error)}), 400

        @self.app.errorhandler(404)
        def not_found(error):
            return jsonify({"error": "Endpoint not found"}), 404

        @self.app.errorhandler(500)
        def internal_error(error):
            return jsonify({"error": "Internal server error"}), 500

    def _setup_signal_handlers(self):
        """Setup graceful shutdown handlers"""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down gracefully...")
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self, host=None, port=None, debug=False):
        """Run the Flask server"""
        host = host or self.config.API_HOST
        port = port or self.config.API_PORT

        self._setup_signal_handlers()
        logger.info(f"Starting PALM Assistant API server on {host}:{port}")

        self.app.run(
            host=host,
            port=port,
            debug=debug,
            threaded=True,
            use_reloader=False
        )

def create_app(record_store: RecordStore, assistant: SchedulingAssistant = None) -> Flask:
    """Factory function to create Flask app"""
    api = AssistantAPI(record_store, assistant)
    return api.app
