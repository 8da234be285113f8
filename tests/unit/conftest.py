"""Shared fixtures for speech trigger unit tests."""

import logging
from collections.abc import Iterator

import pytest

from speech_trigger.control import SpeechTrigger
from tests.helpers.speech_fakes import (
    CountingRenderer,
    FakePlayer,
    FakeSynthesizer,
    RecordingHost,
)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Put back the root handlers that setup_logging replaces."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def synthesizer(events: list[str]) -> FakeSynthesizer:
    return FakeSynthesizer(events)


@pytest.fixture
def player(events: list[str]) -> FakePlayer:
    return FakePlayer(events)


@pytest.fixture
def host(events: list[str]) -> RecordingHost:
    return RecordingHost(events)


@pytest.fixture
def renderer() -> CountingRenderer:
    return CountingRenderer()


@pytest.fixture
def trigger(
    host: RecordingHost,
    renderer: CountingRenderer,
    synthesizer: FakeSynthesizer,
    player: FakePlayer,
) -> SpeechTrigger:
    """Control wired to fakes and initialized with the recording host."""
    control = SpeechTrigger(synthesizer=synthesizer, player=player)
    host.control = control
    control.init(host, renderer)
    return control
