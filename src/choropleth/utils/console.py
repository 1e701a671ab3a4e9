"""
Rich console shared by the CLI and report output.
"""

import os
import sys

from rich.console import Console


def create_console() -> Console:
    """
    Create a Rich console suited to the current terminal.

    Legacy Windows consoles get ASCII box drawing; pipes and CI runs get a
    console without forced terminal codes.
    """
    is_interactive = sys.stdout.isatty()

    if os.name == "nt":
        modern = os.environ.get("WT_SESSION") or os.environ.get("TERM_PROGRAM") == "vscode"
        if modern:
            return Console(legacy_windows=False)
        return Console(legacy_windows=True, safe_box=True)

    return Console(force_terminal=True if is_interactive else None)


console = create_console()
