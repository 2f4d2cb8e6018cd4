from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

from shipwright.src.errors import CommandError


@dataclass(frozen=True)
class IosManifest:
    """The `ios` section of app.json"""

    bundle_identifier: Optional[str] = None
    build_number: Optional[str] = None
    uses_icloud_storage: bool = False
    uses_apple_sign_in: bool = False
    accesses_contact_notes: Any = None  # Falsy means the capability is off
    associated_domains: Optional[List[str]] = None
    entitlements: Dict[str, Any] = field(default_factory=dict)
    info_plist: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AndroidManifest:
    """The `android` section of app.json"""

    package: Optional[str] = None
    version_code: Optional[int] = None


@dataclass(frozen=True)
class AppManifest:
    """Read-only view of a project's app.json"""

    name: Optional[str] = None
    slug: Optional[str] = None
    version: Optional[str] = None
    owner: Optional[str] = None
    ios: IosManifest = field(default_factory=IosManifest)
    android: AndroidManifest = field(default_factory=AndroidManifest)
    raw: Dict[str, Any] = field(default_factory=dict)


def manifest_from_dict(data: Dict[str, Any]) -> AppManifest:
    """Build an AppManifest from the camelCase mapping found in app.json"""
    ios = data.get("ios") or {}
    android = data.get("android") or {}

    build_number = ios.get("buildNumber")
    return AppManifest(
        name=data.get("name"),
        slug=data.get("slug"),
        version=data.get("version"),
        owner=data.get("owner"),
        ios=IosManifest(
            bundle_identifier=ios.get("bundleIdentifier"),
            build_number=str(build_number) if build_number is not None else None,
            uses_icloud_storage=bool(ios.get("usesIcloudStorage", False)),
            uses_apple_sign_in=bool(ios.get("usesAppleSignIn", False)),
            accesses_contact_notes=ios.get("accessesContactNotes"),
            associated_domains=ios.get("associatedDomains"),
            entitlements=dict(ios.get("entitlements") or {}),
            info_plist=dict(ios.get("infoPlist") or {}),
        ),
        android=AndroidManifest(
            package=android.get("package"),
            version_code=android.get("versionCode"),
        ),
        raw=data,
    )


def get_manifest_path(project_root: Path) -> Path:
    return Path(project_root) / "app.json"


def load_manifest(project_root: Path) -> AppManifest:
    """Read app.json from the project root"""
    manifest_path = get_manifest_path(project_root)
    if not manifest_path.exists():
        raise CommandError(
            "MANIFEST_NOT_FOUND", f"No app.json found in {Path(project_root)}"
        )

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CommandError("INVALID_MANIFEST", f"Could not parse {manifest_path}: {e}")

    if not isinstance(data, dict):
        raise CommandError(
            "INVALID_MANIFEST", f"{manifest_path} must contain a JSON object"
        )

    # app.json usually nests everything under "expo"
    if isinstance(data.get("expo"), dict):
        data = data["expo"]

    return manifest_from_dict(data)
