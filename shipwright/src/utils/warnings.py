from dataclasses import dataclass
from typing import List, Optional

from rich.table import Table

from shipwright.logger import get_console


@dataclass
class ConfigWarning:
    """A non-fatal problem found while configuring a native project"""

    platform: str  # "ios" or "android"
    property: str  # Manifest property that caused the warning, e.g. "ios.usesIcloudStorage"
    text: str
    link: Optional[str] = None


class WarningAggregator:
    """Collects warnings so they can be summarised once a command finishes"""

    def __init__(self):
        self.console = get_console()
        self._warnings: List[ConfigWarning] = []

    def add(self, platform: str, property: str, text: str, link: Optional[str] = None):
        warning = ConfigWarning(platform, property, text, link)
        self._warnings.append(warning)
        self.console.print(f"[yellow]⚠ {property}: {text}[/]")
        return warning

    def get(self, platform: Optional[str] = None) -> List[ConfigWarning]:
        if platform is None:
            return list(self._warnings)
        return [w for w in self._warnings if w.platform == platform]

    def flush(self) -> List[ConfigWarning]:
        """Print a summary table of collected warnings and forget them."""
        warnings = self._warnings
        self._warnings = []
        if not warnings:
            return warnings

        table = Table(title="Warnings")
        table.add_column("Platform", style="cyan")
        table.add_column("Property", style="yellow")
        table.add_column("Details")

        for warning in warnings:
            details = warning.text
            if warning.link:
                details += f"\n[link={warning.link}]{warning.link}[/link]"
            table.add_row(warning.platform, warning.property, details)

        self.console.print(table)
        return warnings


_aggregator = WarningAggregator()


def add_warning_ios(property: str, text: str, link: Optional[str] = None):
    return _aggregator.add("ios", property, text, link)


def get_warnings(platform: Optional[str] = None) -> List[ConfigWarning]:
    return _aggregator.get(platform)


def flush_warnings() -> List[ConfigWarning]:
    return _aggregator.flush()
