from pathlib import Path
from typing import Iterator

from pbxproj import XcodeProject


def get_ios_dir(project_root: Path) -> Path:
    return Path(project_root) / "ios"


def get_xcodeproj_path(project_root: Path) -> Path:
    """Return the first *.xcodeproj bundle inside ios/"""
    ios_dir = get_ios_dir(project_root)
    candidates = sorted(ios_dir.glob("*.xcodeproj")) if ios_dir.is_dir() else []
    if not candidates:
        raise FileNotFoundError(f"No Xcode project found in {ios_dir}")
    return candidates[0]


def get_project_name(project_root: Path) -> str:
    """The Xcode project name, e.g. "HelloWorld" for ios/HelloWorld.xcodeproj"""
    return get_xcodeproj_path(project_root).stem


def get_pbxproj_path(project_root: Path) -> Path:
    return get_xcodeproj_path(project_root) / "project.pbxproj"


def load_pbxproj(project_root: Path) -> XcodeProject:
    return XcodeProject.load(str(get_pbxproj_path(project_root)))


APPLICATION_PRODUCT_TYPE = "com.apple.product-type.application"


def _unquote(value) -> str:
    return str(value).strip('"')


def get_product_name(project: XcodeProject) -> str:
    """productName of the application target.

    Falls back to the first target listed on the project object when no
    target is typed as an application.
    """
    for target in project.objects.get_objects_in_section("PBXNativeTarget"):
        product_type = getattr(target, "productType", None)
        product_name = getattr(target, "productName", None)
        if product_name and _unquote(product_type) == APPLICATION_PRODUCT_TYPE:
            return _unquote(product_name)

    root = project.objects[project.rootObject]
    for target_id in getattr(root, "targets", None) or []:
        product_name = getattr(project.objects[target_id], "productName", None)
        if product_name:
            return _unquote(product_name)
    raise ValueError("Xcode project has no native target with a productName")


def is_not_test_host(build_configuration) -> bool:
    """Test bundles point TEST_HOST at the app they run inside"""
    build_settings = getattr(build_configuration, "buildSettings", None)
    if build_settings is None:
        return True
    return not getattr(build_settings, "TEST_HOST", None)


def iter_app_build_configurations(project: XcodeProject) -> Iterator:
    """Yield every XCBuildConfiguration that does not belong to a test target"""
    for build_configuration in project.objects.get_objects_in_section(
        "XCBuildConfiguration"
    ):
        if is_not_test_host(build_configuration):
            yield build_configuration


def set_build_setting(project: XcodeProject, key: str, value: str) -> int:
    """Set a build setting on every non-test configuration.

    Returns the number of configurations updated. The project is not saved.
    """
    updated = 0
    for build_configuration in iter_app_build_configurations(project):
        build_settings = getattr(build_configuration, "buildSettings", None)
        if build_settings is None:
            continue
        build_settings[key] = value
        updated += 1
    return updated
