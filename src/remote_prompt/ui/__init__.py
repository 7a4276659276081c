"""UI package - console rendering and local prompting."""

from remote_prompt.ui.console import Console
from remote_prompt.ui.local import LocalPromptSession

__all__ = ["Console", "LocalPromptSession"]
