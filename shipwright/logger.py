from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

SHIPWRIGHT_THEME = Theme(
    {
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "step": "bold blue",
    }
)


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Get or create the shared Console instance"""
    return Console(theme=SHIPWRIGHT_THEME)
