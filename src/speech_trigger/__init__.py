"""Clickable text-to-speech control backed by the Azure Speech REST API."""

from speech_trigger.control import SpeechTrigger
from speech_trigger.errors import (
    ConfigError,
    InvalidTransitionError,
    PlaybackError,
    SpeechTriggerError,
    SynthesisError,
)
from speech_trigger.host import CallbackHost, HostAdapter, RenderAdapter
from speech_trigger.properties import BoundProperties, Credentials
from speech_trigger.ssml import UtteranceRequest, build_ssml
from speech_trigger.state import PlaybackState, PlaybackStateMachine

__all__ = [
    "BoundProperties",
    "CallbackHost",
    "ConfigError",
    "Credentials",
    "HostAdapter",
    "InvalidTransitionError",
    "PlaybackError",
    "PlaybackState",
    "PlaybackStateMachine",
    "RenderAdapter",
    "SpeechTrigger",
    "SpeechTriggerError",
    "SynthesisError",
    "UtteranceRequest",
    "build_ssml",
]
