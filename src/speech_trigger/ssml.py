"""SSML document construction for speech synthesis requests."""

from dataclasses import dataclass
from typing import Final
from xml.sax.saxutils import escape

DEFAULT_GENDER: Final[str] = "Male"


@dataclass(frozen=True)
class UtteranceRequest:
    """A single text-to-speech request.

    Attributes:
        text: Plain text to speak
        language: SSML language tag, e.g. "en-US"
        voice: Voice name, e.g. "en-US-ChristopherNeural"
    """

    text: str
    language: str
    voice: str


def build_ssml(request: UtteranceRequest, gender: str = DEFAULT_GENDER) -> str:
    """Wrap the request text in a ``<speak>``/``<voice>`` SSML document.

    Text content and attribute values are XML-escaped so arbitrary user text
    cannot break the document.

    Args:
        request: Utterance to render
        gender: Value for the ``xml:gender`` voice attribute

    Returns:
        SSML document string

    Example:
        >>> build_ssml(UtteranceRequest("Hello", "en-US", "en-US-ChristopherNeural"))
        "<speak version='1.0' xml:lang='en-US'><voice xml:lang='en-US' ..."
    """
    lang = _attr(request.language)
    return (
        f"<speak version='1.0' xml:lang={lang}>"
        f"<voice xml:lang={lang} xml:gender={_attr(gender)} name={_attr(request.voice)}>"
        f"{escape(request.text)}"
        "</voice></speak>"
    )


def _attr(value: str) -> str:
    return "'" + escape(value, {"'": "&apos;"}) + "'"
