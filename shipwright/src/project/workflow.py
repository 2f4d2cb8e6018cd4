from pathlib import Path

from shipwright.src.errors import CommandError

MANAGED = "managed"
BARE = "bare"

_PROJECT_MARKERS = ("app.json", "package.json")


def find_project_root(start: Path) -> Path:
    """Walk up from start to the first directory that looks like an app project."""
    current = Path(start).resolve()
    for directory in [current, *current.parents]:
        if any((directory / marker).exists() for marker in _PROJECT_MARKERS):
            return directory

    raise CommandError(
        "NO_PROJECT",
        f"No app.json or package.json found in {current} or any parent directory",
    )


def has_native_project(project_root: Path, platform: str) -> bool:
    """Check whether the native project for platform has been generated."""
    project_root = Path(project_root)
    if platform == "ios":
        ios_dir = project_root / "ios"
        return ios_dir.is_dir() and any(ios_dir.glob("*.xcodeproj"))
    if platform == "android":
        android_dir = project_root / "android"
        return (android_dir / "build.gradle").exists() or (
            android_dir / "build.gradle.kts"
        ).exists()
    raise ValueError(f"Unknown platform: {platform}")


def resolve_workflow(project_root: Path, platform: str) -> str:
    """Return "bare" when the developer owns the native project, else "managed"."""
    return BARE if has_native_project(project_root, platform) else MANAGED
