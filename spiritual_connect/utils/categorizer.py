"""
Document categorization via OpenAI.

Asks a chat model which religion and festival an uploaded ritual text belongs to.
Any failure (no key, SDK error, malformed JSON) degrades to Unknown/Unknown so
contribution uploads never fail because of the categorizer.
"""

import json
import logging
import time
from typing import Dict, Optional

from openai import OpenAI

from .prom_metrics import observe_external_call

UNKNOWN = 'Unknown'
MAX_PROMPT_CHARS = 1000

PROMPT_TEMPLATE = """
Analyze the following ritual document and identify:
1. Which religion it belongs to (e.g., Hinduism, Buddhism, Christianity, etc.)
2. Which festival or occasion it is associated with

Text: {text}

Return the results in JSON format with "religion" and "festival" fields.
"""


def unknown_category() -> Dict[str, str]:
    return {'religion': UNKNOWN, 'festival': UNKNOWN}


class DocumentCategorizer:
    """Wraps the OpenAI chat completions call."""

    def __init__(self, api_key: Optional[str], model: str = 'gpt-4o', client=None):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._client or self.api_key)

    @property
    def client(self):
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def categorize(self, text: str) -> Dict[str, str]:
        """
        Return {'religion': ..., 'festival': ...} for `text`.

        Only the first MAX_PROMPT_CHARS characters are sent.
        """
        if not text or not text.strip():
            return unknown_category()
        if not self.configured:
            self.logger.warning("Document categorization skipped: OPENAI_API_KEY is not set")
            return unknown_category()

        prompt = PROMPT_TEMPLATE.format(text=text[:MAX_PROMPT_CHARS])
        started_at = time.time()
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{'role': 'user', 'content': prompt}],
                response_format={'type': 'json_object'},
            )
            content = completion.choices[0].message.content if completion.choices else None
            result = json.loads(content) if content else {}
        except Exception as e:
            observe_external_call('openai', 'error', time.time() - started_at)
            self.logger.error(json.dumps({
                'event': 'categorize_request_error',
                'provider': 'openai',
                'model': self.model,
                'error': str(e)[:500],
            }), exc_info=True)
            return unknown_category()

        observe_external_call('openai', 'success', time.time() - started_at)
        if not isinstance(result, dict):
            return unknown_category()

        category = {
            'religion': str(result.get('religion') or UNKNOWN),
            'festival': str(result.get('festival') or UNKNOWN),
        }
        self.logger.info(json.dumps({
            'event': 'categorize_request_success',
            'provider': 'openai',
            'model': self.model,
            'elapsed_ms': int((time.time() - started_at) * 1000),
            'category': category,
        }))
        return category


def build_categorizer(config) -> DocumentCategorizer:
    """Create the categorizer from app config"""
    return DocumentCategorizer(
        api_key=config.get('OPENAI_API_KEY'),
        model=config.get('OPENAI_MODEL', 'gpt-4o'),
    )
