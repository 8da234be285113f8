"""Speech Trigger Configuration Models.

Pydantic models for validating speech_trigger.yaml configuration.
This ensures all config errors are caught at load time rather than runtime.
"""

import os
from collections.abc import Mapping
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError, field_validator

from speech_trigger.errors import ConfigError
from speech_trigger.properties import DEFAULT_LANGUAGE, DEFAULT_VOICE, Credentials

DEFAULT_ENDPOINT_TEMPLATE = "https://{region}.tts.speech.microsoft.com/cognitiveservices/v1"


class SpeechServiceConfig(BaseModel):
    """Speech synthesis REST endpoint configuration.

    Attributes:
        endpoint_template: Endpoint URL with a ``{region}`` placeholder
        output_format: Value of the X-Microsoft-OutputFormat header
        voice_gender: xml:gender attribute used in the SSML voice element
        request_timeout_s: Total HTTP request timeout in seconds
        user_agent: User-Agent header sent with each request
    """

    endpoint_template: str = Field(
        default=DEFAULT_ENDPOINT_TEMPLATE,
        description="Endpoint URL with a {region} placeholder",
    )
    output_format: str = Field(
        default="riff-24khz-16bit-mono-pcm",
        description="Audio output format requested from the service",
    )
    voice_gender: str = Field(
        default="Male",
        description="xml:gender attribute of the SSML voice element",
    )
    request_timeout_s: float = Field(
        default=15.0,
        description="Total HTTP request timeout in seconds",
        gt=0,
    )
    user_agent: str = Field(
        default="speech-trigger",
        description="User-Agent header sent with each request",
        min_length=1,
    )

    @field_validator("endpoint_template")
    @classmethod
    def validate_endpoint_template(cls, v: str) -> str:
        """Ensure the endpoint is an http(s) URL with a region placeholder."""
        if not v.startswith("https://") and not v.startswith("http://"):
            raise ValueError("Endpoint template must start with http:// or https://")
        if "{region}" not in v:
            raise ValueError("Endpoint template must contain a {region} placeholder")
        return v

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Only RIFF (WAV) output can be decoded for playback."""
        if not v.startswith("riff-"):
            raise ValueError(f"Unsupported output format: {v}. Only riff-* formats are playable")
        return v


class PlaybackConfig(BaseModel):
    """Audio playback configuration.

    Attributes:
        device: Output device name or index (None for the system default)
        fallback_dir: Directory for WAV files written when no device is available
    """

    device: str | int | None = Field(
        default=None,
        description="Output device name or index (None for default)",
    )
    fallback_dir: Path = Field(
        default=Path("."),
        description="Directory for WAV files when no audio device is available",
    )


class ControlConfig(BaseModel):
    """Control behaviour configuration.

    Attributes:
        default_language: Language used when the host leaves it empty
        default_voice: Voice used when the host leaves it empty
        speak_timeout_s: Upper bound on request plus playback time
    """

    default_language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Language used when the host leaves it empty",
        min_length=1,
    )
    default_voice: str = Field(
        default=DEFAULT_VOICE,
        description="Voice used when the host leaves it empty",
        min_length=1,
    )
    speak_timeout_s: float = Field(
        default=120.0,
        description="Upper bound on request plus playback time in seconds",
        gt=0,
    )


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (json or text)
    """

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    format: str = Field(
        default="text",
        description="Log format (json or text)",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Ensure log format is valid."""
        valid_formats = {"json", "text"}
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return v_lower


class CredentialsConfig(BaseModel):
    """Speech service credentials.

    Usually left out of YAML and supplied through SPEECH_KEY / SPEECH_REGION.
    """

    subscription_key: str = Field(default="", description="Speech subscription key")
    region: str = Field(default="", description="Speech service region")

    def to_credentials(self) -> Credentials:
        return Credentials(subscription_key=self.subscription_key, region=self.region)


class SpeechTriggerConfig(BaseModel):
    """Complete speech trigger configuration.

    Example:
        >>> config = SpeechTriggerConfig.from_yaml("configs/speech_trigger.yaml")
        >>> print(config.service.output_format)
        "riff-24khz-16bit-mono-pcm"
    """

    service: SpeechServiceConfig = Field(default_factory=SpeechServiceConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    control: ControlConfig = Field(default_factory=ControlConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SpeechTriggerConfig":
        """Load and validate configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Validated SpeechTriggerConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML syntax is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def apply_env(self, environ: Mapping[str, str] | None = None) -> "SpeechTriggerConfig":
        """Overlay credentials from SPEECH_KEY and SPEECH_REGION.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            self, for chaining
        """
        env = os.environ if environ is None else environ
        if key := env.get("SPEECH_KEY"):
            self.credentials.subscription_key = key
        if region := env.get("SPEECH_REGION"):
            self.credentials.region = region
        return self


def load_config(path: str | Path | None = None) -> SpeechTriggerConfig:
    """Load configuration from YAML (if given) and overlay the environment.

    Args:
        path: Optional path to a YAML config file

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    try:
        config = SpeechTriggerConfig() if path is None else SpeechTriggerConfig.from_yaml(path)
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
    return config.apply_env()
