"""Host and render adapter abstractions.

Defines the interface the control uses to talk to its hosting application
and to whatever draws the clickable icon, so the control logic stays
independent of any particular UI host.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class HostAdapter(ABC):
    """Hosting application as seen by the control."""

    @abstractmethod
    def notify_output_changed(self) -> None:
        """Tell the host that new output values are ready.

        The host is expected to call ``get_outputs()`` on the control in
        response, either immediately or on its next update cycle.
        """
        pass

    @property
    def allocated_width(self) -> int:
        """Width in pixels the host allocated to the control."""
        return 48

    @property
    def allocated_height(self) -> int:
        """Height in pixels the host allocated to the control."""
        return 48


class RenderAdapter(ABC):
    """Draws the single clickable element of the control."""

    @abstractmethod
    def mount(self, on_click: Callable[[], object], width: int, height: int) -> None:
        """Create the element and wire its click handler.

        Args:
            on_click: Callback invoked when the element is clicked
            width: Allocated width in pixels
            height: Allocated height in pixels
        """
        pass

    @abstractmethod
    def refresh(self, width: int, height: int) -> None:
        """Re-render the element at the current allocated size."""
        pass

    @abstractmethod
    def unmount(self) -> None:
        """Remove the element and drop the click handler."""
        pass

    @property
    @abstractmethod
    def is_mounted(self) -> bool:
        """Check if the element is currently mounted."""
        pass


class CallbackHost(HostAdapter):
    """Host adapter that forwards notifications to a plain callable."""

    def __init__(
        self, notify: Callable[[], None], width: int = 48, height: int = 48
    ) -> None:
        self._notify = notify
        self._width = width
        self._height = height

    def notify_output_changed(self) -> None:
        self._notify()

    @property
    def allocated_width(self) -> int:
        return self._width

    @property
    def allocated_height(self) -> int:
        return self._height

    def resize(self, width: int, height: int) -> None:
        """Record new container metrics."""
        self._width = width
        self._height = height
