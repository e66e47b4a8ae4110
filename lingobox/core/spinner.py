"""Rich-based spinner used while localized bundles are generated."""

from rich.console import Console
from rich.status import Status
from rich.text import Text


class Spinner:
    """Terminal spinner with success and failure terminal states.

    The animation only runs on interactive terminals; terminal states are
    always printed.
    """

    def __init__(
        self,
        text: str = "",
        console: Console | None = None,
        enabled: bool | None = None,
    ) -> None:
        self.console = console or Console(stderr=True)
        self.text = text
        self.enabled = self.console.is_terminal if enabled is None else enabled
        self._status: Status | None = None
        self._spinning = False

    @property
    def is_spinning(self) -> bool:
        return self._spinning

    def start(self, text: str | None = None) -> None:
        if text is not None:
            self.text = text
        self._spinning = True
        if not self.enabled:
            return
        if self._status is None:
            self._status = self.console.status(self.text, spinner="dots")
        else:
            self._status.update(self.text)
        self._status.start()

    def stop(self) -> None:
        self._spinning = False
        if self._status is not None:
            self._status.stop()

    def succeed(self, text: str | None = None) -> None:
        self.stop()
        self.console.print(Text.assemble(("✔ ", "bold green"), text or self.text))

    def fail(self, text: str | None = None) -> None:
        self.stop()
        self.console.print(Text.assemble(("✖ ", "bold red"), text or self.text))


class NoOpSpinner:
    """Spinner that records its state without rendering anything."""

    def __init__(self) -> None:
        self.text = ""
        self.is_spinning = False
        self.final_state: str | None = None

    def start(self, text: str | None = None) -> None:
        if text is not None:
            self.text = text
        self.is_spinning = True

    def stop(self) -> None:
        self.is_spinning = False

    def succeed(self, text: str | None = None) -> None:
        self.stop()
        self.final_state = "succeeded"
        self.text = text or self.text

    def fail(self, text: str | None = None) -> None:
        self.stop()
        self.final_state = "failed"
        self.text = text or self.text
