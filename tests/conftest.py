import json
import plistlib
import shutil
from pathlib import Path

import pytest

from shipwright.src.utils import warnings

FIXTURES = Path(__file__).parent / "fixtures"


def write_app_json(project_root: Path, expo: dict) -> Path:
    path = project_root / "app.json"
    path.write_text(json.dumps({"expo": expo}), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_warnings():
    warnings.flush_warnings()
    yield
    warnings.flush_warnings()


@pytest.fixture
def managed_project(tmp_path) -> Path:
    write_app_json(
        tmp_path,
        {
            "name": "Hello World",
            "slug": "hello-world",
            "version": "2.1.0",
            "ios": {"bundleIdentifier": "com.example.helloworld"},
            "android": {"package": "com.example.helloworld"},
        },
    )
    return tmp_path


@pytest.fixture
def ios_project(managed_project) -> Path:
    """A project with a generated native iOS directory and no entitlements file"""
    xcodeproj = managed_project / "ios" / "HelloWorld.xcodeproj"
    xcodeproj.mkdir(parents=True)
    shutil.copy(FIXTURES / "project.pbxproj", xcodeproj / "project.pbxproj")

    app_dir = managed_project / "ios" / "HelloWorld"
    app_dir.mkdir()
    with open(app_dir / "Info.plist", "wb") as f:
        plistlib.dump(
            {
                "CFBundleDisplayName": "Hello World",
                "CFBundleIdentifier": "$(PRODUCT_BUNDLE_IDENTIFIER)",
                "CFBundleShortVersionString": "1.0",
                "CFBundleVersion": "1",
            },
            f,
            sort_keys=False,
        )
    return managed_project


class FakeBuildService:
    """Records calls instead of talking to the network"""

    def __init__(self, jobs=None, credentials=None, finished_job=None):
        self.calls = []
        self.jobs = jobs or []
        self.credentials = credentials if credentials is not None else {}
        self.finished_job = finished_job or {
            "id": "build-1",
            "status": "finished",
            "artifacts": {"url": "https://cdn.example.com/app.ipa"},
        }

    def get_build_status(self, experience, platform=None, public_url=None):
        self.calls.append(("get_build_status", experience, platform, public_url))
        return self.jobs

    def publish(self, experience, release_channel):
        self.calls.append(("publish", experience, release_channel))
        return {"url": f"https://exp.example.com/{experience}"}

    def start_build(self, payload):
        self.calls.append(("start_build", payload))
        return {"id": "build-1", "status": "pending"}

    def wait_for_build(self, build_id, timeout=1800, interval=10):
        self.calls.append(("wait_for_build", build_id))
        return self.finished_job

    def get_credentials(self, experience, platform):
        self.calls.append(("get_credentials", experience, platform))
        return self.credentials

    def upload_credentials(self, experience, platform, credentials):
        self.calls.append(("upload_credentials", experience, platform, credentials))
        return {}

    def clear_credentials(self, experience, platform, kinds, revoke=False):
        self.calls.append(("clear_credentials", experience, platform, list(kinds), revoke))
        return {}

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_service():
    return FakeBuildService(
        credentials={"distCert": {"id": "1"}, "provisioningProfile": {"id": "2"}}
    )
