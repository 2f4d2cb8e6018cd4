import os
import shlex
import shutil
import subprocess
from pathlib import Path

from shipwright.logger import get_console
from shipwright.src.build.options import WebBuildOptions
from shipwright.src.errors import CommandError
from shipwright.src.utils.config_loader import get_web_config

console = get_console()

CACHE_DIRS = ("web-build", ".shipwright/web/cache")


def clear_web_cache(project_dir: Path) -> None:
    for relative in CACHE_DIRS:
        cache_dir = Path(project_dir) / relative
        if cache_dir.exists():
            console.print(f"[dim]Removing {cache_dir}[/]")
            shutil.rmtree(cache_dir)


def bundle_web(project_dir: Path, options: WebBuildOptions) -> int:
    """Run the configured web bundler in the project directory."""
    project_dir = Path(project_dir)
    command = shlex.split(get_web_config()["bundler_command"])

    if options.clear:
        clear_web_cache(project_dir)

    # Get current environment variables and create a copy
    env = os.environ.copy()
    env["SHIPWRIGHT_WEB_PWA"] = str(options.pwa).lower()
    env["SHIPWRIGHT_WEB_DEV"] = str(options.dev).lower()
    env["NODE_ENV"] = "development" if options.dev else "production"

    console.print(f"[dim]Running: {' '.join(command)}[/]")
    try:
        result = subprocess.run(command, cwd=project_dir, env=env)
    except FileNotFoundError as e:
        raise CommandError(
            "BUNDLER_NOT_FOUND", f"Could not run web bundler '{command[0]}': {e}"
        ) from e

    if result.returncode != 0:
        raise CommandError(
            "WEB_BUILD_FAILED", f"Web bundler exited with status {result.returncode}"
        )

    console.print("[bold green]✓ Web build complete[/]")
    return 0
