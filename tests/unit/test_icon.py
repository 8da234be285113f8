"""Unit tests for speaker icon rendering."""

import xml.etree.ElementTree as ET

from speech_trigger.icon import SvgIconRenderer, render_button_html, render_speaker_svg


def test_svg_uses_allocated_size() -> None:
    """Test the SVG is sized to the allocated space and parses."""
    svg = render_speaker_svg(120, 80)

    root = ET.fromstring(svg)
    assert root.get("width") == "120"
    assert root.get("height") == "80"
    assert root.get("viewBox") == "0 0 1024 1024"
    assert len(root.findall("{http://www.w3.org/2000/svg}path")) == 4


def test_button_html_is_clickable_container() -> None:
    """Test the container markup wraps the icon with a pointer cursor."""
    html = render_button_html(48, 48)

    assert html.startswith('<div id="button-div" class="button-div"')
    assert "cursor: pointer" in html
    assert '<svg width="48" height="48"' in html


def test_renderer_lifecycle() -> None:
    """Test mount, refresh, click and unmount."""
    clicks: list[str] = []
    renderer = SvgIconRenderer()
    assert renderer.is_mounted is False
    assert renderer.click() is None

    renderer.mount(lambda: clicks.append("click"), 48, 48)
    assert renderer.is_mounted
    assert 'width="48"' in renderer.markup

    renderer.refresh(96, 64)
    assert 'width="96" height="64"' in renderer.markup

    renderer.click()
    assert clicks == ["click"]

    renderer.unmount()
    assert renderer.is_mounted is False
    assert renderer.markup == ""
    renderer.click()
    assert clicks == ["click"]


def test_refresh_before_mount_is_ignored() -> None:
    """Test refreshing an unmounted renderer draws nothing."""
    renderer = SvgIconRenderer()

    renderer.refresh(48, 48)

    assert renderer.markup == ""
