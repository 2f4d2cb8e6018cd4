from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class IosBuildType(Enum):
    ARCHIVE = "archive"
    SIMULATOR = "simulator"


class AndroidBuildType(Enum):
    APK = "apk"
    APP_BUNDLE = "app-bundle"


@dataclass
class BuildOptions:
    """Options shared by every remote build command"""

    release_channel: str = "default"
    publish: bool = True  # Publish the JS bundle before building
    wait: bool = True  # Poll the service until the build finishes
    public_url: Optional[str] = None  # Externally hosted manifest (self-hosted apps)
    clear_credentials: bool = False
    skip_workflow_check: bool = False


@dataclass
class IosBuildOptions(BuildOptions):
    build_type: IosBuildType = IosBuildType.ARCHIVE

    # Credential management on the build service
    clear_dist_cert: bool = False
    clear_push_key: bool = False
    clear_push_cert: bool = False
    clear_provisioning_profile: bool = False
    revoke_credentials: bool = False
    skip_credentials_check: bool = False

    # Locally supplied credentials
    apple_id: Optional[str] = None
    team_id: Optional[str] = None
    dist_p12_path: Optional[Path] = None
    push_id: Optional[str] = None
    push_p8_path: Optional[Path] = None
    provisioning_profile_path: Optional[Path] = None


@dataclass
class AndroidBuildOptions(BuildOptions):
    build_type: AndroidBuildType = AndroidBuildType.APK
    keystore_path: Optional[Path] = None
    keystore_alias: Optional[str] = None
    generate_keystore: bool = False  # Deprecated, accepted and ignored


@dataclass
class StatusOptions:
    public_url: Optional[str] = None


@dataclass
class WebBuildOptions:
    clear: bool = False
    pwa: bool = True
    dev: bool = False
