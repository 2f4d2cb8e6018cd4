import re
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from rich.prompt import Confirm

from shipwright.arguments import (
    create_android_build_options,
    create_ios_build_options,
    create_status_options,
    create_web_build_options,
)
from shipwright.logger import get_console
from shipwright.src.build.android_builder import AndroidBuilder
from shipwright.src.build.base_builder import BaseBuilder
from shipwright.src.build.ios_builder import IOSBuilder
from shipwright.src.errors import CommandError
from shipwright.src.project.workflow import MANAGED, find_project_root, resolve_workflow
from shipwright.src.web.bundler import bundle_web

console = get_console()

RELEASE_CHANNEL_RE = re.compile(r"[a-z\d][a-z\d._-]*")


def is_https(url: str) -> bool:
    if any(char.isspace() for char in url):
        return False
    parsed = urlparse(url)
    return parsed.scheme == "https" and bool(parsed.hostname)


def validate_public_url(public_url: Optional[str]) -> None:
    if public_url and not is_https(public_url):
        raise CommandError("INVALID_PUBLIC_URL", "--public-url must be a valid HTTPS URL.")


def validate_release_channel(release_channel: str) -> None:
    if not RELEASE_CHANNEL_RE.fullmatch(release_channel):
        console.print(
            "[red]Release channel name can only contain lowercase letters, numbers and special characters . _ and -[/]"
        )
        sys.exit(1)


def validate_credentials_flags(options) -> None:
    if options.skip_credentials_check and options.clear_credentials:
        raise CommandError(
            "--skip-credentials-check and --clear-credentials can't be used together"
        )


def is_non_interactive(args) -> bool:
    return getattr(args, "non_interactive", False) or not sys.stdin.isatty()


def maybe_bail_on_workflow_warning(
    project_dir: Path, platform: str, non_interactive: bool
) -> bool:
    """Warn about bare workflow projects. Returns True if the command should abort."""
    if resolve_workflow(project_dir, platform) == MANAGED:
        return False

    command = f"shipwright build:{platform}"
    native_tool = "Xcode" if platform == "ios" else "Android Studio"
    console.print(
        f"[bold yellow]⚠️  {command} currently only supports managed workflow apps.[/]"
    )
    console.print(
        "[yellow]If you proceed with this command, we can run the build for you but it will not "
        "include any custom native modules or changes that you have made to your local native projects.[/]"
    )
    console.print(
        "[yellow]Unless you are sure that you know what you are doing, we recommend aborting the "
        f"build and doing a native release build through {native_tool}.[/]"
    )

    if non_interactive:
        console.print(
            "[yellow]Skipping confirmation prompt because non-interactive mode is enabled.[/]"
        )
        return False

    return not Confirm.ask("Would you like to proceed?", default=False)


def run_build_ios_command(args) -> int:
    """Entry point for the build:ios command from CLI"""
    project_dir = find_project_root(args.path)
    options = create_ios_build_options(args)

    if not options.skip_workflow_check:
        if maybe_bail_on_workflow_warning(project_dir, "ios", is_non_interactive(args)):
            console.print("[dim]Build aborted.[/]")
            return 0

    validate_credentials_flags(options)
    validate_public_url(options.public_url)
    validate_release_channel(options.release_channel)

    IOSBuilder(project_dir, options).command()
    return 0


def run_build_android_command(args) -> int:
    """Entry point for the build:android command from CLI"""
    project_dir = find_project_root(args.path)
    options = create_android_build_options(args)

    if options.generate_keystore:
        console.print(
            "[yellow]The --generate-keystore flag is deprecated and does not do anything. "
            "A Keystore will always be generated on the build service if it's missing.[/]"
        )

    if not options.skip_workflow_check:
        if maybe_bail_on_workflow_warning(
            project_dir, "android", is_non_interactive(args)
        ):
            console.print("[dim]Build aborted.[/]")
            return 0

    validate_public_url(options.public_url)
    validate_release_channel(options.release_channel)

    AndroidBuilder(project_dir, options).command()
    return 0


def run_build_web_command(args) -> int:
    """Entry point for the build:web command from CLI"""
    project_dir = find_project_root(args.path)
    return bundle_web(project_dir, create_web_build_options(args))


def run_build_status_command(args) -> int:
    """Entry point for the build:status command from CLI"""
    options = create_status_options(args)
    validate_public_url(options.public_url)

    project_dir = find_project_root(args.path)
    BaseBuilder(project_dir, options).command_check_status()
    return 0
