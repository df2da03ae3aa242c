"""Read-only context handed to every check."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from packaging.version import Version

if TYPE_CHECKING:
    from rich.console import Console

    from ..cluster.client import ClusterReader


@dataclass(frozen=True)
class Target:
    """Everything a check may look at during a run.

    Attributes:
        client: Read-only cluster access
        current_version: Installed platform version, None if unknown
        target_version: Version being upgraded to, None if unknown
        console: Sink for progress messages (stderr), optional
        debug: Whether checks may emit extra diagnostics
    """

    client: ClusterReader
    current_version: Version | None = None
    target_version: Version | None = None
    console: Console | None = None
    debug: bool = False

    def progress(self, message: str) -> None:
        """Print a progress message when debugging is on."""
        if self.debug and self.console is not None:
            self.console.print(message, highlight=False)
