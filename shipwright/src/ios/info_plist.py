from pathlib import Path

from shipwright.src.ios.plist_pipeline import (
    Plist,
    apply_pipeline,
    read_plist,
    upsert_or_delete,
    write_plist,
)
from shipwright.src.ios.xcodeproj import get_ios_dir, get_project_name
from shipwright.src.project.manifest import AppManifest

DEFAULT_VERSION = "1.0.0"
DEFAULT_BUILD_NUMBER = "1"


def set_version(manifest: AppManifest, plist: Plist) -> Plist:
    return upsert_or_delete(
        plist, "CFBundleShortVersionString", manifest.version or DEFAULT_VERSION
    )


def set_build_number(manifest: AppManifest, plist: Plist) -> Plist:
    return upsert_or_delete(
        plist, "CFBundleVersion", manifest.ios.build_number or DEFAULT_BUILD_NUMBER
    )


def set_bundle_identifier(manifest: AppManifest, plist: Plist) -> Plist:
    # Most templates use $(PRODUCT_BUNDLE_IDENTIFIER); only override when asked
    if not manifest.ios.bundle_identifier:
        return plist
    return upsert_or_delete(
        plist, "CFBundleIdentifier", manifest.ios.bundle_identifier
    )


def set_custom_info_plist_entries(manifest: AppManifest, plist: Plist) -> Plist:
    for key, value in manifest.ios.info_plist.items():
        plist = upsert_or_delete(plist, key, value)
    return plist


INFO_PLIST_PIPELINE = (
    set_version,
    set_build_number,
    set_bundle_identifier,
    set_custom_info_plist_entries,
)


def get_info_plist_path(project_root: Path) -> Path:
    info_plist_path = (
        get_ios_dir(project_root) / get_project_name(project_root) / "Info.plist"
    )
    if not info_plist_path.exists():
        raise FileNotFoundError(f"Info.plist not found at {info_plist_path}")
    return info_plist_path


def configure_info_plist(project_root: Path, manifest: AppManifest) -> Path:
    """Apply version, build number and custom entries to Info.plist"""
    info_plist_path = get_info_plist_path(project_root)
    plist = apply_pipeline(manifest, read_plist(info_plist_path), INFO_PLIST_PIPELINE)
    write_plist(info_plist_path, plist)
    return info_plist_path
