"""Unit tests for speech trigger configuration.

Tests configuration loading, validation, defaults and environment overlay.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from speech_trigger.config import (
    DEFAULT_ENDPOINT_TEMPLATE,
    ControlConfig,
    LoggingConfig,
    PlaybackConfig,
    SpeechServiceConfig,
    SpeechTriggerConfig,
    load_config,
)
from speech_trigger.errors import ConfigError


def test_service_config_defaults() -> None:
    """Test speech service configuration defaults."""
    config = SpeechServiceConfig()
    assert config.endpoint_template == DEFAULT_ENDPOINT_TEMPLATE
    assert config.output_format == "riff-24khz-16bit-mono-pcm"
    assert config.voice_gender == "Male"
    assert config.request_timeout_s == 15.0


def test_service_config_endpoint_validation() -> None:
    """Test endpoint template validation."""
    config = SpeechServiceConfig(endpoint_template="http://127.0.0.1:9000/{region}/tts")
    assert config.endpoint_template.endswith("/{region}/tts")

    with pytest.raises(ValueError, match="must start with http"):
        SpeechServiceConfig(endpoint_template="ftp://{region}.example.com")

    with pytest.raises(ValueError, match="placeholder"):
        SpeechServiceConfig(endpoint_template="https://westus.tts.speech.microsoft.com")


def test_service_config_output_format_validation() -> None:
    """Test only RIFF output formats are accepted."""
    assert SpeechServiceConfig(output_format="riff-48khz-16bit-mono-pcm").output_format

    with pytest.raises(ValueError, match="Unsupported output format"):
        SpeechServiceConfig(output_format="audio-24khz-48kbitrate-mono-mp3")


def test_service_config_timeout_validation() -> None:
    """Test request timeout must be positive."""
    with pytest.raises(ValueError):
        SpeechServiceConfig(request_timeout_s=0)


def test_control_config_defaults() -> None:
    """Test control configuration defaults."""
    config = ControlConfig()
    assert config.default_language == "en-US"
    assert config.default_voice == "en-US-ChristopherNeural"
    assert config.speak_timeout_s == 120.0

    with pytest.raises(ValueError):
        ControlConfig(speak_timeout_s=-1)


def test_playback_config_defaults() -> None:
    """Test playback configuration defaults."""
    config = PlaybackConfig()
    assert config.device is None
    assert config.fallback_dir == Path(".")


def test_logging_config_validation() -> None:
    """Test logging level and format normalisation."""
    config = LoggingConfig(level="debug", format="JSON")
    assert config.level == "DEBUG"
    assert config.format == "json"

    with pytest.raises(ValueError, match="Invalid log level"):
        LoggingConfig(level="VERBOSE")

    with pytest.raises(ValueError, match="Invalid log format"):
        LoggingConfig(format="xml")


def test_from_yaml(tmp_path: Path) -> None:
    """Test loading a YAML file with partial overrides."""
    config_file = tmp_path / "speech_trigger.yaml"
    config_file.write_text(
        """
service:
  request_timeout_s: 5
control:
  default_voice: "en-GB-RyanNeural"
playback:
  device: 3
logging:
  level: "warning"
"""
    )

    config = SpeechTriggerConfig.from_yaml(config_file)

    assert config.service.request_timeout_s == 5
    assert config.service.output_format == "riff-24khz-16bit-mono-pcm"
    assert config.control.default_voice == "en-GB-RyanNeural"
    assert config.playback.device == 3
    assert config.logging.level == "WARNING"


def test_from_yaml_empty_file(tmp_path: Path) -> None:
    """Test an empty YAML file yields defaults."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    config = SpeechTriggerConfig.from_yaml(config_file)

    assert config == SpeechTriggerConfig()


def test_from_yaml_missing_file(tmp_path: Path) -> None:
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        SpeechTriggerConfig.from_yaml(tmp_path / "missing.yaml")


def test_from_yaml_invalid_values(tmp_path: Path) -> None:
    """Test invalid values are rejected at load time."""
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("control:\n  speak_timeout_s: 0\n")

    with pytest.raises(ValidationError):
        SpeechTriggerConfig.from_yaml(config_file)


def test_apply_env() -> None:
    """Test credentials overlay from SPEECH_KEY / SPEECH_REGION."""
    config = SpeechTriggerConfig()
    config.apply_env({"SPEECH_KEY": "env-key", "SPEECH_REGION": "uksouth"})

    assert config.credentials.subscription_key == "env-key"
    assert config.credentials.region == "uksouth"
    assert config.credentials.to_credentials().region == "uksouth"


def test_apply_env_keeps_existing_when_unset() -> None:
    """Test empty environment leaves configured credentials alone."""
    config = SpeechTriggerConfig()
    config.credentials.region = "westus"

    config.apply_env({})

    assert config.credentials.region == "westus"


def test_load_config_wraps_errors(tmp_path: Path) -> None:
    """Test load_config reports every failure as ConfigError."""
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path / "missing.yaml")

    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("service: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(bad_yaml)

    bad_values = tmp_path / "invalid.yaml"
    bad_values.write_text("logging:\n  level: LOUD\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(bad_values)


def test_load_config_defaults_with_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test load_config without a file uses defaults plus the environment."""
    monkeypatch.setenv("SPEECH_KEY", "from-env")
    monkeypatch.delenv("SPEECH_REGION", raising=False)

    config = load_config()

    assert config.credentials.subscription_key == "from-env"
    assert config.credentials.region == ""
