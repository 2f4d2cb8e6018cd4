from pathlib import Path
from typing import Optional, Sequence
import functools

from shipwright.logger import get_console
from shipwright.src.constants.entitlements import (
    APPLE_SIGN_IN_KEY,
    ASSOCIATED_DOMAINS_KEY,
    CODE_SIGN_ENTITLEMENTS,
    CONTACTS_NOTES_KEY,
    ENTITLEMENTS_TEMPLATE,
)
from shipwright.src.ios.plist_pipeline import (
    Plist,
    PlistStep,
    apply_pipeline,
    read_plist,
    upsert_or_delete,
    write_plist,
)
from shipwright.src.ios.xcodeproj import (
    get_ios_dir,
    get_product_name,
    get_project_name,
    load_pbxproj,
    set_build_setting,
)
from shipwright.src.project.manifest import AppManifest
from shipwright.src.utils.warnings import add_warning_ios

console = get_console()


def get_config_entitlements(manifest: AppManifest) -> Plist:
    return dict(manifest.ios.entitlements)


def set_custom_entitlements_entries(manifest: AppManifest, plist: Plist) -> Plist:
    """Overlay the free-form ios.entitlements entries from the manifest"""
    for key, value in get_config_entitlements(manifest).items():
        plist = upsert_or_delete(plist, key, value)
    return plist


def set_icloud_entitlement(
    manifest: AppManifest, plist: Plist, apple_team_id: Optional[str] = None
) -> Plist:
    # Container identifiers are team scoped; only warn until the team is known here.
    if manifest.ios.uses_icloud_storage:
        add_warning_ios(
            "ios.usesIcloudStorage",
            "Enable the iCloud Storage Entitlement from the Capabilities tab in your Xcode project.",
        )
    return plist


def set_apple_sign_in_entitlement(manifest: AppManifest, plist: Plist) -> Plist:
    return upsert_or_delete(
        plist,
        APPLE_SIGN_IN_KEY,
        ["Default"],
        present=manifest.ios.uses_apple_sign_in,
    )


def set_accesses_contact_notes(manifest: AppManifest, plist: Plist) -> Plist:
    value = manifest.ios.accesses_contact_notes
    return upsert_or_delete(plist, CONTACTS_NOTES_KEY, value, present=bool(value))


def set_associated_domains(manifest: AppManifest, plist: Plist) -> Plist:
    domains = manifest.ios.associated_domains
    return upsert_or_delete(
        plist,
        ASSOCIATED_DOMAINS_KEY,
        list(domains) if domains else None,
        present=bool(domains),
    )


_MANIFEST_ENTITLEMENT_STEPS: Sequence[PlistStep] = (
    set_apple_sign_in_entitlement,
    set_accesses_contact_notes,
    set_associated_domains,
    set_custom_entitlements_entries,
)

ENTITLEMENTS_PIPELINE: Sequence[PlistStep] = (
    set_icloud_entitlement,
) + _MANIFEST_ENTITLEMENT_STEPS


def get_entitlements_pipeline(apple_team_id: Optional[str] = None) -> Sequence[PlistStep]:
    """ENTITLEMENTS_PIPELINE with the iCloud step bound to a team"""
    icloud_step = functools.partial(set_icloud_entitlement, apple_team_id=apple_team_id)
    return (icloud_step,) + _MANIFEST_ENTITLEMENT_STEPS


def apply_entitlements(
    manifest: AppManifest,
    plist: Plist,
    pipeline: Sequence[PlistStep] = ENTITLEMENTS_PIPELINE,
) -> Plist:
    return apply_pipeline(manifest, plist, pipeline)


def read_entitlements(path: Path) -> Plist:
    return read_plist(path)


def write_entitlements(path: Path, plist: Plist) -> None:
    write_plist(path, plist)


def find_entitlements_path(project_root: Path) -> Optional[Path]:
    """Return the first ios/<name>/*.entitlements file, if any"""
    ios_dir = get_ios_dir(project_root)
    if not ios_dir.is_dir():
        return None
    candidates = sorted(ios_dir.glob("*/*.entitlements"))
    return candidates[0] if candidates else None


def get_default_entitlements_path(project_root: Path, project) -> Path:
    project_name = get_project_name(project_root)
    product_name = get_product_name(project)
    return get_ios_dir(project_root) / project_name / f"{product_name}.entitlements"


def create_entitlements_file(project_root: Path) -> Path:
    """Write an empty entitlements plist and point CODE_SIGN_ENTITLEMENTS at it"""
    project = load_pbxproj(project_root)

    entitlements_path = get_default_entitlements_path(project_root, project)
    entitlements_path.parent.mkdir(parents=True, exist_ok=True)
    entitlements_path.write_text(ENTITLEMENTS_TEMPLATE, encoding="utf-8")
    console.print(f"[blue]Created entitlements file:[/] {entitlements_path}")

    relative_path = entitlements_path.relative_to(get_ios_dir(project_root)).as_posix()
    updated = set_build_setting(project, CODE_SIGN_ENTITLEMENTS, relative_path)
    project.save()
    console.print(
        f"[dim]Set {CODE_SIGN_ENTITLEMENTS} = {relative_path} on {updated} build configurations[/]"
    )

    return entitlements_path


def get_entitlements_path(project_root: Path) -> Path:
    return find_entitlements_path(project_root) or create_entitlements_file(
        project_root
    )


def configure_entitlements(
    project_root: Path, manifest: AppManifest, apple_team_id: Optional[str] = None
) -> Path:
    """Apply the manifest's capabilities to the project's entitlements file"""
    entitlements_path = get_entitlements_path(project_root)
    pipeline = get_entitlements_pipeline(apple_team_id)
    plist = apply_entitlements(manifest, read_entitlements(entitlements_path), pipeline)
    write_entitlements(entitlements_path, plist)
    return entitlements_path
