from rich.text import Text

__version__ = "0.1.0"

APP_DESCRIPTION = "Configure native mobile projects and run builds in the cloud"

_BANNER = r"""
     _     _                      _       _     _
 ___| |__ (_)_ ____      ___ __ _(_) __ _| |__ | |_
/ __| '_ \| | '_ \ \ /\ / / '__| |/ _` | '_ \| __|
\__ \ | | | | |_) \ V  V /| |  | | (_| | | | | |_
|___/_| |_|_| .__/ \_/\_/ |_|  |_|\__, |_| |_|\__|
            |_|                   |___/
"""


def get_banner_text() -> Text:
    return Text(_BANNER.strip("\n"), style="bold cyan")
