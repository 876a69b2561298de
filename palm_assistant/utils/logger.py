"""
Logging utilities for the PALM Scheduling Assistant
"""
import json
import logging
import sys
from datetime import datetime
from typing import Sequence

class AssistantLogger:
    """Logging setup and per-turn summaries"""

    @staticmethod
    def setup_logging(log_level: str = "INFO", log_file: str = None):
        """Setup logging configuration"""

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        # Suppress some noisy loggers
        for name in ('httpx', 'openai', 'urllib3', 'werkzeug'):
            logging.getLogger(name).setLevel(logging.WARNING)

        return root_logger

    @staticmethod
    def log_turn(request_id: str, utterance: str, domains: Sequence[str],
                 suggestion_count: int, fallback: bool, processing_time: float):
        """Log a compact JSON summary of one chat turn"""
        logger = logging.getLogger(__name__)

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "request_id": request_id,
            "processing_time_seconds": round(processing_time, 3),
            "utterance": utterance[:100],
            "agent_domains": list(domains),
            "suggestions": suggestion_count,
            "fallback": fallback,
        }

        logger.info(f"Turn processed: {json.dumps(log_entry)}")
