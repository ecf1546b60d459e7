"""Console command helpers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .container import ApplicationContext, Container

CONSOLE_KERNEL = "console.kernel"


class CallsCommands:
    """
    Mixin letting a console command run other commands through the console kernel.

    The kernel is resolved from the application container under
    ``"console.kernel"`` and must expose ``call(command, arguments)``.
    """

    @property
    def app(self) -> Container:
        return ApplicationContext.get_container()

    def call_silent(self, command: str, arguments: Optional[Dict[str, Any]] = None) -> int:
        """Call another console command without output and return its exit code."""
        return self.app.get(CONSOLE_KERNEL).call(command, arguments or {})
