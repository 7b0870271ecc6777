"""
Console folder picker.

Stands in for a native directory dialog: the destination lives on the
database server, so the operator types it rather than browsing locally.
"""

from typing import Optional, TextIO

from rich.console import Console
from rich.prompt import Prompt


class ConsoleFolderPicker:
    """Prompts for the server-side backup folder."""

    def __init__(
        self,
        console: Console | None = None,
        prompt: str = "Backup folder on the server",
        stream: TextIO | None = None,
    ):
        self.console = console or Console()
        self.prompt = prompt
        self.stream = stream

    def select_folder(self) -> Optional[str]:
        answer = Prompt.ask(self.prompt, console=self.console, default="", show_default=False, stream=self.stream)
        folder = answer.strip()
        return folder or None
