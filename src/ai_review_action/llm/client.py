"""
Review Client

Sends review prompts to an OpenAI-compatible chat completion endpoint and
validates the JSON answer. Failures are contained per call: they are
logged and reported as a failed ReviewOutcome, never raised.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter

from ..models.review import ReviewEnvelope, ReviewFinding, ReviewOutcome
from .prompts import SYSTEM_PROMPT


logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r'^```[a-zA-Z]*\s*\n(.*?)\n?```\s*$', re.DOTALL)


@dataclass
class GenerationConfig:
    """Configuration for LLM generation."""
    model: str = "Mistral-Small-3.1-24B-Instruct-2503"
    temperature: float = 0.2
    max_tokens: int = 700


class ReviewClient:
    """
    Client for the inference endpoint.

    One request per prompt, no retries.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        generation_config: Optional[GenerationConfig] = None,
        timeout: int = 120,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize review client.

        Args:
            api_url: Chat completions URL
            api_key: Bearer token for the endpoint
            generation_config: Model name and sampling settings
            timeout: Request timeout in seconds
            session: Optional pre-built session
        """
        self.api_url = api_url
        self.api_key = api_key
        self.generation_config = generation_config or GenerationConfig()
        self.timeout = timeout
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.api_key}',
        })
        return session

    def build_request(self, prompt: str) -> dict:
        """JSON body for a chat completion request."""
        return {
            'model': self.generation_config.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': prompt},
            ],
            'temperature': self.generation_config.temperature,
            'max_tokens': self.generation_config.max_tokens,
        }

    def review(self, prompt: str) -> ReviewOutcome:
        """
        Ask the model to review one hunk.

        Args:
            prompt: Rendered review prompt

        Returns:
            ReviewOutcome with findings, or a failure reason
        """
        try:
            response = self.session.post(
                self.api_url,
                json=self.build_request(prompt),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return self._failed(f"request failed: {e}")

        if not response.ok:
            return self._failed(f"HTTP {response.status_code} - {response.text}")

        try:
            result = response.json()
        except ValueError as e:
            return self._failed(f"response is not JSON: {e}")

        try:
            content = result['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            return self._failed("response has no choices[0].message.content")

        return self.parse_content(content)

    def findings(self, prompt: str) -> List[ReviewFinding]:
        """Findings for a prompt; empty on failure."""
        return self.review(prompt).findings

    def parse_content(self, content: str) -> ReviewOutcome:
        """
        Validate the model's message content against ReviewEnvelope.

        Args:
            content: Message content, a JSON document possibly wrapped
                in a Markdown code fence

        Returns:
            ReviewOutcome
        """
        if content is None:
            content = "{}"
        if not isinstance(content, str):
            return self._failed(f"model content is {type(content).__name__}, expected text")

        text = content.strip()
        fenced = _FENCE_PATTERN.match(text)
        if fenced:
            text = fenced.group(1)

        try:
            envelope = ReviewEnvelope.model_validate(json.loads(text))
        except json.JSONDecodeError as e:
            return self._failed(f"model content is not JSON: {e}")
        except ValidationError as e:
            return self._failed(f"model content does not match the review schema: {e}")

        logger.debug(f"Model returned {len(envelope.reviews)} findings")
        return ReviewOutcome(findings=list(envelope.reviews))

    def _failed(self, reason: str) -> ReviewOutcome:
        logger.error(f"AI request failed: {reason}")
        return ReviewOutcome.failure(reason)
