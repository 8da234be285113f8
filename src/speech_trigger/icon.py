"""Speaker icon rendering.

The control draws a single clickable element: a speaker SVG sized to the
space the host allocated.
"""

import logging
from collections.abc import Callable
from typing import Final

from speech_trigger.host import RenderAdapter

logger = logging.getLogger(__name__)

SPEAKER_PATHS: Final[str] = (
    '<path d="M571.5 269.085V766.017C571.5 792.832 540.496 807.755 519.538 791.027'
    "L419.257 710.99C413.588 706.465 406.549 704 399.295 704H252C181.308 704 124 646.692 "
    "124 576V480.5C124 409.808 181.308 352.5 252 352.5H397.274C405.744 352.5 413.868 "
    "349.142 419.867 343.163L516.908 246.423C537.081 226.312 571.5 240.6 571.5 269.085Z\" "
    'fill="black"/>'
    '<path d="M683.5 326C743.007 374.595 781 448.541 781 531.361C781 614.181 743.007 '
    '688.127 683.5 736.722" stroke="black" stroke-width="48" stroke-linecap="round" '
    'stroke-linejoin="round"/>'
    '<path d="M624.5 435C654.406 459.255 673.5 496.163 673.5 537.5C673.5 578.837 654.406 '
    '615.745 624.5 640" stroke="black" stroke-width="48" stroke-linecap="round" '
    'stroke-linejoin="round"/>'
    '<path d="M781.5 281C854.129 340.158 900.5 430.178 900.5 531C900.5 631.822 854.129 '
    '721.842 781.5 781" stroke="black" stroke-width="48" stroke-linecap="round" '
    'stroke-linejoin="round"/>'
)


def render_speaker_svg(width: int, height: int) -> str:
    """Return the speaker icon as an SVG document of the given size."""
    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 1024 1024" fill="none" '
        f'xmlns="http://www.w3.org/2000/svg">{SPEAKER_PATHS}</svg>'
    )


def render_button_html(width: int, height: int) -> str:
    """Return the clickable container markup wrapping the speaker icon."""
    return (
        '<div id="button-div" class="button-div" '
        'style="width: 100%; height: 100%; cursor: pointer;">'
        f"{render_speaker_svg(width, height)}</div>"
    )


class SvgIconRenderer(RenderAdapter):
    """Keeps the current icon markup and dispatches clicks to the control.

    A web host serves ``markup`` and calls ``click()`` when the element is
    clicked.
    """

    def __init__(self) -> None:
        self.markup: str = ""
        self._on_click: Callable[[], object] | None = None

    @property
    def is_mounted(self) -> bool:
        return self._on_click is not None

    def mount(self, on_click: Callable[[], object], width: int, height: int) -> None:
        logger.debug("Mounting speaker icon", extra={"width": width, "height": height})
        self._on_click = on_click
        self.markup = render_button_html(width, height)

    def refresh(self, width: int, height: int) -> None:
        if not self.is_mounted:
            return
        self.markup = render_button_html(width, height)

    def unmount(self) -> None:
        self._on_click = None
        self.markup = ""

    def click(self) -> object:
        """Dispatch a click to the mounted handler.

        Returns:
            Whatever the handler returns (the speak task, or None)
        """
        if self._on_click is None:
            return None
        return self._on_click()
