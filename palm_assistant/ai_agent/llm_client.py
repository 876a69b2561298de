"""
Chat model client for the PALM Scheduling Assistant
"""
import logging
import time
from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from palm_assistant.config.settings import Config

logger = logging.getLogger(__name__)

class LLMClient:
    """Chat completions client with timeout, single retry and graceful failure"""

    def __init__(self, model_name: str = None, api_key: str = None):
        self.config = Config()
        self.model_config = self.config.get_model_config(model_name)
        self.model_name = self.model_config["model"]
        self.max_tokens = self.model_config["max_tokens"]
        self.temperature = self.model_config["temperature"]

        api_key = api_key or self.config.OPENAI_API_KEY
        if api_key:
            self.client = OpenAI(
                api_key=api_key,
                base_url=self.model_config["base_url"],
                timeout=self.model_config["timeout"],
                max_retries=self.model_config["max_retries"],
            )
            logger.info(f"Initialized chat client: {self.model_name}")
        else:
            self.client = None
            logger.warning("⚠️  OPENAI_API_KEY not set - model replies will use the fallback message")

    @staticmethod
    def build_messages(system_prompt: str, history: List[Dict[str, str]],
                       user_message: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": user_message},
        ]

    def complete(self, system_prompt: str, history: List[Dict[str, str]],
                 user_message: str) -> Optional[str]:
        """
        Send one chat turn and return the reply text.

        Returns None when the client is not configured or the request fails
        after the configured retry; callers fall back to a static message.
        """
        if self.client is None:
            return None

        try:
            start_time = time.time()
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=self.build_messages(system_prompt, history, user_message),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            logger.info(f"Chat completion response: {time.time() - start_time:.2f}s")
        except OpenAIError as e:
            logger.error(f"Chat completion request failed: {e}")
            return None

        if not response.choices:
            logger.warning("Chat completion returned no choices")
            return ""
        return response.choices[0].message.content or ""
