"""
Validation utilities for API requests
"""
import re
from datetime import datetime
from typing import Any, Dict, List

MAX_MESSAGE_LENGTH = 2000

class RequestValidator:
    """Validator for incoming API payloads"""

    @staticmethod
    def validate_date(date_str: Any) -> bool:
        """Validate YYYY-MM-DD"""
        if not isinstance(date_str, str) or not re.match(r'^\d{4}-\d{2}-\d{2}$', date_str):
            return False
        try:
            datetime.strptime(date_str, "%Y-%m-%d")
            return True
        except ValueError:
            return False

    @staticmethod
    def validate_time(time_str: Any) -> bool:
        """Validate HH:MM (24:00 allowed as end of day)"""
        if not isinstance(time_str, str):
            return False
        match = re.match(r'^(\d{2}):(\d{2})$', time_str)
        if not match:
            return False
        hours, minutes = int(match.group(1)), int(match.group(2))
        return (hours < 24 and minutes < 60) or (hours == 24 and minutes == 0)

    @staticmethod
    def validate_chat_request(request_data: Dict[str, Any]) -> List[str]:
        """Validate a /chat payload and return list of errors"""
        errors = []

        message = request_data.get("message")
        if not isinstance(message, str) or not message.strip():
            errors.append("Missing required field: message")
        elif len(message) > MAX_MESSAGE_LENGTH:
            errors.append(f"'message' exceeds {MAX_MESSAGE_LENGTH} characters")

        if "today" in request_data and not RequestValidator.validate_date(request_data["today"]):
            errors.append(f"Invalid date format: {request_data['today']}. Expected: YYYY-MM-DD")

        history = request_data.get("history", [])
        if not isinstance(history, list):
            errors.append("'history' must be a list")
        else:
            for i, entry in enumerate(history):
                if not isinstance(entry, dict):
                    errors.append(f"History entry {i} must be an object")
                elif entry.get("role") not in ("user", "assistant"):
                    errors.append(f"History entry {i} has invalid role: {entry.get('role')}")
                elif not isinstance(entry.get("content"), str):
                    errors.append(f"History entry {i} missing 'content'")
                elif not RequestValidator._valid_suggestions(entry.get("suggestions")):
                    errors.append(f"History entry {i} has invalid suggestions")

        return errors

    @staticmethod
    def _valid_suggestions(suggestions: Any) -> bool:
        """None, or a list of objects each with string 'title' and 'date'"""
        if suggestions is None:
            return True
        if not isinstance(suggestions, list):
            return False
        return all(
            isinstance(item, dict)
            and isinstance(item.get("title"), str)
            and isinstance(item.get("date"), str)
            for item in suggestions
        )

    @staticmethod
    def validate_free_slot_request(args: Dict[str, Any]) -> List[str]:
        """Validate /free-slots query parameters"""
        errors = []

        if not RequestValidator.validate_date(args.get("date")):
            errors.append("Query parameter 'date' must be YYYY-MM-DD")

        for field in ("start", "end"):
            if field in args and not RequestValidator.validate_time(args[field]):
                errors.append(f"Query parameter '{field}' must be HH:MM")

        if not errors and "start" in args and "end" in args and args["start"] >= args["end"]:
            errors.append("'start' must be before 'end'")

        if "min_duration" in args:
            try:
                if int(args["min_duration"]) < 0:
                    errors.append("'min_duration' must not be negative")
            except (TypeError, ValueError):
                errors.append("'min_duration' must be an integer number of minutes")

        return errors

class DataSanitizer:
    """Sanitize and clean input data"""

    @staticmethod
    def sanitize_text(text: str) -> str:
        """Collapse whitespace and drop angle brackets"""
        text = re.sub(r'\s+', ' ', text.strip())
        text = re.sub(r'[<>]', '', text)
        return text
