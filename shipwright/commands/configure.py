from shipwright.logger import get_console
from shipwright.src.errors import CommandError
from shipwright.src.ios.entitlements import configure_entitlements
from shipwright.src.ios.info_plist import configure_info_plist
from shipwright.src.project.manifest import load_manifest
from shipwright.src.project.workflow import find_project_root, has_native_project
from shipwright.src.utils.warnings import flush_warnings

console = get_console()


def run_configure_ios_command(args) -> int:
    """Entry point for the config:ios command from CLI"""
    project_root = find_project_root(args.path)
    if not has_native_project(project_root, "ios"):
        raise CommandError(
            "NO_IOS_PROJECT", f"No native iOS project found in {project_root / 'ios'}"
        )

    manifest = load_manifest(project_root)
    console.print(f"[bold blue]Configuring iOS project in {project_root}[/]")

    entitlements_path = configure_entitlements(
        project_root, manifest, apple_team_id=args.apple_team_id
    )
    console.print(f"[green]✓ Entitlements written to:[/] {entitlements_path}")

    info_plist_path = configure_info_plist(project_root, manifest)
    console.print(f"[green]✓ Info.plist written to:[/] {info_plist_path}")

    flush_warnings()
    return 0
