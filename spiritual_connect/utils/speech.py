"""
Speech synthesis (ElevenLabs) for Priest Mode narration.

FLOW OVERVIEW
- SpeechSynthesizer.synthesize(text, voice_id, stability, similarity_boost)
  1) Return a cached clip when the same text/voice/settings were synthesized recently.
  2) POST the text to the provider's text-to-speech endpoint (single attempt, fixed timeout).
  3) Wrap the MP3 bytes as a base64 data URL and cache it.
- Provider failures come back as SpeechResult(success=False) carrying the provider's status.
"""

import base64
import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Optional

import requests

from .prom_metrics import observe_external_call, observe_speech_cache_hit

DEFAULT_VOICE_ID = '21m00Tcm4TlvDq8ikWAM'  # Rachel
DEFAULT_STABILITY = 0.75
DEFAULT_SIMILARITY_BOOST = 0.75

VOICES = [
    {'id': '21m00Tcm4TlvDq8ikWAM', 'name': 'Rachel - Warm Female', 'accent': 'American'},
    {'id': 'AZnzlk1XvdvUeBnXmlld', 'name': 'Domi - Soft Male', 'accent': 'American'},
    {'id': 'EXAVITQu4vr4xnSDxMaL', 'name': 'Bella - Soft Female', 'accent': 'American'},
    {'id': 'ErXwobaYiN019PkySvjV', 'name': 'Antoni - Gentle Male', 'accent': 'American'},
    {'id': 'MF3mGyEYCl7XYWbV9V6O', 'name': 'Elli - Gentle Female', 'accent': 'American'},
    {'id': 'TxGEqnHWrfWFTfGW9XjX', 'name': 'Josh - Deep Male', 'accent': 'American'},
    {'id': 'VR6AewLTigWG4xSOukaG', 'name': 'Arnold - Deep Male', 'accent': 'American'},
    {'id': 'pNInz6obpgDQGcFmaJgB', 'name': 'Adam - Calm Male', 'accent': 'American'},
]

# Same voices under names suited to spiritual content
SPIRITUAL_VOICES = [
    {'id': '21m00Tcm4TlvDq8ikWAM', 'name': 'Spiritual Guide (Female)', 'accent': 'American'},
    {'id': 'ErXwobaYiN019PkySvjV', 'name': 'Meditation Guide (Male)', 'accent': 'American'},
    {'id': 'EXAVITQu4vr4xnSDxMaL', 'name': 'Ritual Voice (Female)', 'accent': 'American'},
    {'id': 'VR6AewLTigWG4xSOukaG', 'name': 'Priest Voice (Male)', 'accent': 'American'},
]


class SpeechResult:
    """Outcome of a synthesis request."""

    def __init__(self, success: bool, audio_url: str = None, status_code: int = 200,
                 message: str = None, details: str = None, cached: bool = False):
        self.success = success
        self.audio_url = audio_url
        self.status_code = status_code
        self.message = message
        self.details = details
        self.cached = cached

    def to_dict(self):
        body = {'success': self.success, 'message': self.message}
        if self.success:
            body['audio_url'] = self.audio_url
            body['cached'] = self.cached
        elif self.details:
            body['details'] = self.details
        return body


class SpeechSynthesizer:
    """ElevenLabs text-to-speech client with a small LRU cache."""

    def __init__(self, api_key: Optional[str], api_url: str = 'https://api.elevenlabs.io/v1',
                 model_id: str = 'eleven_monolingual_v1', cache_size: int = 64,
                 timeout: float = 30):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.api_url = api_url.rstrip('/')
        self.model_id = model_id
        self.cache_size = cache_size
        self.timeout = timeout
        self._cache = OrderedDict()
        self._cache_lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _cache_get(self, key):
        with self._cache_lock:
            audio_url = self._cache.get(key)
            if audio_url is not None:
                self._cache.move_to_end(key)
            return audio_url

    def _cache_put(self, key, audio_url):
        if self.cache_size <= 0:
            return
        with self._cache_lock:
            self._cache[key] = audio_url
            self._cache.move_to_end(key)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)

    def synthesize(self, text: str, voice_id: str = None, stability: float = None,
                   similarity_boost: float = None) -> SpeechResult:
        """
        Turn `text` into an MP3 data URL.

        Args:
            text: Narration text
            voice_id: Provider voice id (defaults to DEFAULT_VOICE_ID)
            stability: Voice stability 0..1
            similarity_boost: Similarity boost 0..1

        Returns:
            SpeechResult
        """
        if not self.configured:
            return SpeechResult(False, status_code=500, message='ElevenLabs API key is not configured')

        voice_id = voice_id or DEFAULT_VOICE_ID
        stability = DEFAULT_STABILITY if stability is None else stability
        similarity_boost = DEFAULT_SIMILARITY_BOOST if similarity_boost is None else similarity_boost

        cache_key = (voice_id, stability, similarity_boost, text)
        cached = self._cache_get(cache_key)
        if cached is not None:
            observe_speech_cache_hit()
            self.logger.info(json.dumps({'event': 'speech_cache_hit', 'voice_id': voice_id,
                                         'text_len': len(text)}))
            return SpeechResult(True, audio_url=cached, message='Voice synthesis successful', cached=True)

        url = f"{self.api_url}/text-to-speech/{voice_id}"
        payload = {
            'text': text,
            'model_id': self.model_id,
            'voice_settings': {
                'stability': stability,
                'similarity_boost': similarity_boost,
            },
        }
        headers = {
            'Accept': 'audio/mpeg',
            'Content-Type': 'application/json',
            'xi-api-key': self.api_key,
        }

        self.logger.info(json.dumps({
            'event': 'speech_request_start',
            'provider': 'elevenlabs',
            'voice_id': voice_id,
            'text_len': len(text),
        }))
        started_at = time.time()
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            observe_external_call('elevenlabs', 'error', time.time() - started_at)
            self.logger.error(json.dumps({
                'event': 'speech_request_error',
                'provider': 'elevenlabs',
                'error': str(e)[:500],
            }), exc_info=True)
            return SpeechResult(False, status_code=502, message='Failed to synthesize voice', details=str(e))

        elapsed = time.time() - started_at
        if not response.ok:
            observe_external_call('elevenlabs', 'provider_error', elapsed)
            self.logger.error(json.dumps({
                'event': 'speech_request_rejected',
                'provider': 'elevenlabs',
                'status': response.status_code,
                'body': response.text[:500],
            }))
            return SpeechResult(False, status_code=response.status_code,
                                message='Error from ElevenLabs API', details=response.text)

        observe_external_call('elevenlabs', 'success', elapsed)
        audio_url = 'data:audio/mpeg;base64,' + base64.b64encode(response.content).decode('ascii')
        self._cache_put(cache_key, audio_url)
        self.logger.info(json.dumps({
            'event': 'speech_request_success',
            'provider': 'elevenlabs',
            'elapsed_ms': int(elapsed * 1000),
            'audio_bytes': len(response.content),
        }))
        return SpeechResult(True, audio_url=audio_url, message='Voice synthesis successful')


def build_synthesizer(config) -> SpeechSynthesizer:
    """Create the synthesizer from app config"""
    return SpeechSynthesizer(
        api_key=config.get('ELEVENLABS_API_KEY'),
        api_url=config.get('ELEVENLABS_API_URL', 'https://api.elevenlabs.io/v1'),
        model_id=config.get('ELEVENLABS_MODEL_ID', 'eleven_monolingual_v1'),
        cache_size=int(config.get('SPEECH_CACHE_SIZE', 64)),
        timeout=float(config.get('SPEECH_TIMEOUT_SECONDS', 30)),
    )
