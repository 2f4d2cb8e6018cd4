import argparse
import sys
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme
from rich_argparse import RichHelpFormatter
from shipwright.arguments import (
    add_android_build_arguments,
    add_configure_arguments,
    add_ios_build_arguments,
    add_status_arguments,
    add_web_build_arguments,
)
from shipwright.logger import get_console
from shipwright.src.constants.cli_constants import (
    __version__,
    get_banner_text,
    APP_DESCRIPTION,
)
from shipwright.src.errors import CommandError


class ShipwrightHelpFormatter(RichHelpFormatter):
    """Formatter for the shipwright CLI with rich styling."""

    def __init__(self, prog):
        super().__init__(prog, max_help_position=36, width=100)
        self.console = Console(
            theme=Theme(
                {
                    "command": "bold cyan",
                    "argument": "green",
                    "option": "yellow",
                    "version": "blue",
                    "title": "bold magenta",
                }
            )
        )

    def start_section(self, heading):
        heading_text = Text(heading, style="title")
        super().start_section(str(heading_text))


def display_banner():
    """Display the shipwright banner."""
    banner = get_banner_text()

    version_info = Text(f"v{__version__}", style="blue")
    tagline = Text(APP_DESCRIPTION, style="italic")

    panel = Panel.fit(
        Text.assemble(banner, "\n", tagline, "\n", version_info),
        border_style="green",
        padding=(1, 2),
    )
    get_console().print(panel)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shipwright",
        description=f"shipwright: {APP_DESCRIPTION}",
        formatter_class=ShipwrightHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"shipwright {__version__}"
    )
    parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Fail or proceed instead of prompting (implied when stdin is not a TTY)",
    )

    subparsers = parser.add_subparsers(dest="command")

    ios_parser = subparsers.add_parser(
        "build:ios",
        aliases=["bi"],
        help="Build and sign a standalone IPA for the Apple App Store",
        formatter_class=ShipwrightHelpFormatter,
        description="Build and sign a standalone IPA for the Apple App Store on the build service.",
    )
    add_ios_build_arguments(ios_parser)
    ios_parser.set_defaults(handler="build_ios")

    android_parser = subparsers.add_parser(
        "build:android",
        aliases=["ba"],
        help="Build and sign a standalone APK or App Bundle for the Google Play Store",
        formatter_class=ShipwrightHelpFormatter,
        description="Build and sign a standalone APK or App Bundle on the build service.",
    )
    add_android_build_arguments(android_parser)
    android_parser.set_defaults(handler="build_android")

    web_parser = subparsers.add_parser(
        "build:web",
        help="Build the web app for production",
        formatter_class=ShipwrightHelpFormatter,
        description="Bundle the web app for production with the configured bundler.",
    )
    add_web_build_arguments(web_parser)
    web_parser.set_defaults(handler="build_web")

    status_parser = subparsers.add_parser(
        "build:status",
        aliases=["bs"],
        help="Get the status of the latest build for the project",
        formatter_class=ShipwrightHelpFormatter,
        description="Get the status of the latest builds for the project.",
    )
    add_status_arguments(status_parser)
    status_parser.set_defaults(handler="build_status")

    configure_parser = subparsers.add_parser(
        "config:ios",
        help="Apply app.json settings to the native iOS project",
        formatter_class=ShipwrightHelpFormatter,
        description="Write entitlements, Info.plist values and build settings from app.json into ios/.",
    )
    add_configure_arguments(configure_parser)
    configure_parser.set_defaults(handler="configure_ios")

    return parser


def dispatch(args) -> int:
    if args.handler == "build_ios":
        from shipwright.commands.build import run_build_ios_command

        return run_build_ios_command(args)
    elif args.handler == "build_android":
        from shipwright.commands.build import run_build_android_command

        return run_build_android_command(args)
    elif args.handler == "build_web":
        from shipwright.commands.build import run_build_web_command

        return run_build_web_command(args)
    elif args.handler == "build_status":
        from shipwright.commands.build import run_build_status_command

        return run_build_status_command(args)
    elif args.handler == "configure_ios":
        from shipwright.commands.configure import run_configure_ios_command

        return run_configure_ios_command(args)
    raise ValueError(f"Unknown command handler: {args.handler}")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # Display the banner before the help text
    if not argv or "-h" in argv or "--help" in argv:
        display_banner()

    # Credential passwords may live in a project .env file
    load_dotenv(find_dotenv(usecwd=True))

    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return dispatch(args)
    except CommandError as e:
        get_console().print(f"[red]Error: {escape(e.message)}[/]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
