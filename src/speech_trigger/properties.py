"""Bound property snapshot for the speech trigger control.

The host delivers the full set of bound values on every update. They are
held as one frozen snapshot which is replaced as a whole, never patched
field by field.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Final

DEFAULT_VOICE: Final[str] = "en-US-ChristopherNeural"
DEFAULT_LANGUAGE: Final[str] = "en-US"
DEFAULT_STATE: Final[str] = "waiting"

# Host parameter name → BoundProperties field
HOST_PARAMETER_NAMES: Final[dict[str, str]] = {
    "text": "text",
    "state": "state",
    "subscriptionKey": "subscription_key",
    "region": "region",
    "language": "language",
    "voice": "voice",
    "autoSpeak": "auto_speak",
}


@dataclass(frozen=True)
class Credentials:
    """Speech service credentials.

    Not validated locally; the service rejects bad values.
    """

    subscription_key: str
    region: str

    def __repr__(self) -> str:
        return f"Credentials(subscription_key='***', region={self.region!r})"


@dataclass(frozen=True)
class BoundProperties:
    """Immutable snapshot of the control's bound values.

    Attributes:
        text: Text to speak
        state: Playback state string (also an output)
        subscription_key: Speech service subscription key
        region: Speech service region, e.g. "westeurope"
        language: SSML language tag, e.g. "en-US"
        voice: Neural voice name
        auto_speak: Speak automatically on the next accepted update (also an output)
    """

    text: str = ""
    state: str = DEFAULT_STATE
    subscription_key: str = ""
    region: str = ""
    language: str = ""
    voice: str = ""
    auto_speak: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "BoundProperties":
        """Build a snapshot from host parameter values.

        Accepts either host parameter names (``subscriptionKey``) or field
        names (``subscription_key``). Missing and None values take the
        field defaults; empty strings are kept as delivered and resolved
        to configured defaults when a request is built.

        Args:
            values: Raw host values

        Returns:
            New BoundProperties snapshot
        """
        fields: dict[str, Any] = {}
        for key, raw in values.items():
            name = HOST_PARAMETER_NAMES.get(key, key)
            if name not in cls.__dataclass_fields__ or raw is None:
                continue
            if name == "auto_speak":
                fields[name] = bool(raw)
            else:
                fields[name] = str(raw)

        return cls(**fields)

    @property
    def credentials(self) -> Credentials:
        return Credentials(subscription_key=self.subscription_key, region=self.region)

    def with_outputs(self, state: str, auto_speak: bool) -> "BoundProperties":
        """Return a copy with the output-bound fields replaced."""
        return replace(self, state=state, auto_speak=auto_speak)

    def __repr__(self) -> str:
        return (
            f"BoundProperties(text={self.text!r}, state={self.state!r}, "
            f"subscription_key='***', region={self.region!r}, "
            f"language={self.language!r}, voice={self.voice!r}, "
            f"auto_speak={self.auto_speak!r})"
        )
