"""Client for the Azure Speech text-to-speech REST endpoint.

One POST per utterance: the SSML body goes up, a RIFF/WAV payload comes back.
The payload is treated as opaque bytes and handed to the audio player.
"""

import logging
import time

import aiohttp

from speech_trigger.config import SpeechServiceConfig
from speech_trigger.errors import SynthesisError
from speech_trigger.properties import Credentials
from speech_trigger.ssml import UtteranceRequest, build_ssml

logger = logging.getLogger(__name__)


class SpeechSynthesisClient:
    """Issues speech synthesis requests.

    A fresh aiohttp session is opened per request, so the client holds no
    connection state between utterances and needs no explicit close.
    """

    def __init__(self, config: SpeechServiceConfig | None = None) -> None:
        """Initialize synthesis client.

        Args:
            config: Endpoint configuration (defaults to the public Azure endpoint)
        """
        self.config = config or SpeechServiceConfig()

    def endpoint_url(self, region: str) -> str:
        """Return the synthesis URL for a region."""
        return self.config.endpoint_template.format(region=region)

    def build_headers(self, credentials: Credentials) -> dict[str, str]:
        """Return the request headers for the given credentials."""
        return {
            "Ocp-Apim-Subscription-Key": credentials.subscription_key,
            "X-Microsoft-OutputFormat": self.config.output_format,
            "Content-Type": "application/ssml+xml",
            "User-Agent": self.config.user_agent,
        }

    async def synthesize(self, request: UtteranceRequest, credentials: Credentials) -> bytes:
        """Synthesize an utterance.

        Args:
            request: Text, language and voice to synthesize
            credentials: Subscription key and region

        Returns:
            Raw audio payload in the configured output format

        Raises:
            SynthesisError: Non-2xx response or transport failure
            TimeoutError: Request exceeded request_timeout_s
        """
        url = self.endpoint_url(credentials.region)
        body = build_ssml(request, gender=self.config.voice_gender)
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout_s)
        start = time.monotonic()

        logger.debug(
            "Sending synthesis request",
            extra={"url": url, "voice": request.voice, "text_length": len(request.text)},
        )

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    url,
                    data=body.encode("utf-8"),
                    headers=self.build_headers(credentials),
                ) as resp:
                    if resp.status >= 300:
                        detail = (await resp.text()).strip() or resp.reason or "unknown error"
                        raise SynthesisError(detail, status=resp.status)
                    audio = await resp.read()
        except TimeoutError as e:
            # aiohttp's ServerTimeoutError is both a TimeoutError and a ClientError
            raise TimeoutError(
                f"Speech request timed out after {self.config.request_timeout_s}s"
            ) from e
        except aiohttp.ClientError as e:
            raise SynthesisError(f"{type(e).__name__}: {e}") from e

        logger.info(
            "Synthesis request completed",
            extra={
                "voice": request.voice,
                "audio_bytes": len(audio),
                "latency_ms": (time.monotonic() - start) * 1000.0,
            },
        )
        return audio
