"""Speech trigger CLI entry point.

This module is invoked when running `python -m speech_trigger` or the
`speech-trigger` console script. It speaks one utterance through the same
control a host application embeds, using a console host adapter.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from speech_trigger.config import SpeechTriggerConfig, load_config
from speech_trigger.control import SpeechTrigger
from speech_trigger.errors import ConfigError
from speech_trigger.host import CallbackHost
from speech_trigger.icon import SvgIconRenderer
from speech_trigger.properties import BoundProperties
from speech_trigger.state import PlaybackState
from speech_trigger.utils.logging import log_event, setup_logging

DEFAULT_CONFIG_PATH = Path("configs/speech_trigger.yaml")

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Speech Trigger - speak text through the Azure Speech REST API"
    )
    parser.add_argument("text", type=str, help="Text to speak")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to configuration YAML file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument("--key", type=str, help="Speech subscription key (overrides SPEECH_KEY)")
    parser.add_argument("--region", type=str, help="Speech region (overrides SPEECH_REGION)")
    parser.add_argument("--language", type=str, default="", help="SSML language, e.g. en-US")
    parser.add_argument("--voice", type=str, default="", help="Voice name")
    parser.add_argument("--device", type=str, help="Audio output device name or index")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Override speak timeout in seconds",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from config",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SpeechTriggerConfig:
    """Load configuration and apply overrides with precedence CLI > ENV > config.

    Raises:
        ConfigError: If the configuration cannot be loaded
    """
    path = args.config
    if path is None and DEFAULT_CONFIG_PATH.exists():
        path = DEFAULT_CONFIG_PATH

    config = load_config(path)

    if args.key:
        config.credentials.subscription_key = args.key
    if args.region:
        config.credentials.region = args.region
    if args.device is not None:
        config.playback.device = int(args.device) if args.device.isdigit() else args.device
    if args.timeout is not None:
        config.control.speak_timeout_s = args.timeout
    if args.log_level:
        config.logging.level = args.log_level

    return config


async def main(argv: list[str] | None = None) -> int:
    """Speak one utterance and report the final state.

    Returns:
        Process exit code (0 on success, 1 on configuration or speak failure)
    """
    args = parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level, json_format=config.logging.format == "json")

    if not config.credentials.subscription_key or not config.credentials.region:
        print(
            "Error: speech credentials missing (set SPEECH_KEY/SPEECH_REGION or --key/--region)",
            file=sys.stderr,
        )
        return 1

    trigger = SpeechTrigger(config)
    host = CallbackHost(lambda: log_event("outputs_changed", trigger.get_outputs()))
    renderer = SvgIconRenderer()
    trigger.init(host, renderer)

    credentials = config.credentials.to_credentials()
    trigger.update_view(
        BoundProperties(
            text=args.text,
            subscription_key=credentials.subscription_key,
            region=credentials.region,
            language=args.language,
            voice=args.voice,
        )
    )

    task = renderer.click()
    if isinstance(task, asyncio.Task):
        await task

    log_event("speak_summary", trigger.get_metrics_summary())
    trigger.destroy()

    if trigger.machine.state == PlaybackState.ERROR:
        print(f"Error: {trigger.last_error}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
