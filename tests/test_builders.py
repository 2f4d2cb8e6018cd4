import base64

import pytest

from conftest import FakeBuildService
from shipwright.src.build.android_builder import AndroidBuilder
from shipwright.src.build.base_builder import BaseBuilder
from shipwright.src.build.ios_builder import IOSBuilder
from shipwright.src.build.options import (
    AndroidBuildOptions,
    IosBuildOptions,
    IosBuildType,
    StatusOptions,
)
from shipwright.src.errors import CommandError


def test_ios_build_runs_full_flow(managed_project, fake_service) -> None:
    builder = IOSBuilder(managed_project, IosBuildOptions(), client=fake_service)
    job = builder.command()

    assert job["status"] == "finished"
    assert fake_service.call_names() == [
        "get_build_status",
        "get_credentials",
        "publish",
        "start_build",
        "wait_for_build",
    ]
    payload = fake_service.calls[3][1]
    assert payload == {
        "platform": "ios",
        "experience": "@anonymous/hello-world",
        "releaseChannel": "default",
        "type": "archive",
        "bundleIdentifier": "com.example.helloworld",
    }


def test_no_publish_no_wait(managed_project, fake_service) -> None:
    options = IosBuildOptions(publish=False, wait=False)
    job = IOSBuilder(managed_project, options, client=fake_service).command()

    assert job == {"id": "build-1", "status": "pending"}
    assert "publish" not in fake_service.call_names()
    assert "wait_for_build" not in fake_service.call_names()


def test_public_url_skips_publish(managed_project, fake_service) -> None:
    options = IosBuildOptions(public_url="https://example.com/manifest.json")
    IOSBuilder(managed_project, options, client=fake_service).command()

    assert "publish" not in fake_service.call_names()
    payload = [c for c in fake_service.calls if c[0] == "start_build"][0][1]
    assert payload["manifestUrl"] == "https://example.com/manifest.json"


def test_build_in_progress_aborts(managed_project) -> None:
    service = FakeBuildService(jobs=[{"id": "build-0", "status": "in-progress"}])
    with pytest.raises(CommandError) as e:
        IOSBuilder(managed_project, IosBuildOptions(), client=service).command()
    assert e.value.code == "BUILD_IN_PROGRESS"
    assert "start_build" not in service.call_names()


def test_missing_remote_credentials(managed_project) -> None:
    service = FakeBuildService(credentials={"distCert": {"id": "1"}})
    with pytest.raises(CommandError) as e:
        IOSBuilder(managed_project, IosBuildOptions(), client=service).command()
    assert e.value.code == "MISSING_CREDENTIALS"
    assert "provisioningProfile" in e.value.message


def test_simulator_build_does_not_need_credentials(managed_project) -> None:
    service = FakeBuildService(credentials={})
    options = IosBuildOptions(build_type=IosBuildType.SIMULATOR)
    IOSBuilder(managed_project, options, client=service).command()
    assert "get_credentials" not in service.call_names()


def test_clear_selected_credentials_with_revoke(managed_project, fake_service) -> None:
    options = IosBuildOptions(
        clear_dist_cert=True, clear_provisioning_profile=True, revoke_credentials=True
    )
    IOSBuilder(managed_project, options, client=fake_service).prepare_credentials()

    assert fake_service.calls[0] == (
        "clear_credentials",
        "@anonymous/hello-world",
        "ios",
        ["distCert", "provisioningProfile"],
        True,
    )


def test_clear_all_credentials(managed_project, fake_service) -> None:
    options = IosBuildOptions(clear_credentials=True)
    IOSBuilder(managed_project, options, client=fake_service).prepare_credentials()
    assert fake_service.calls[0][3] == ["distCert", "pushKey", "pushCert", "provisioningProfile"]


def test_skip_credentials_check(managed_project) -> None:
    service = FakeBuildService(credentials={})
    options = IosBuildOptions(skip_credentials_check=True, team_id="TEAM123")
    IOSBuilder(managed_project, options, client=service).prepare_credentials()
    assert service.calls == []


def test_local_credentials_are_uploaded(managed_project, fake_service, monkeypatch, tmp_path) -> None:
    p12 = tmp_path / "dist.p12"
    p12.write_bytes(b"p12-bytes")
    profile = tmp_path / "app.mobileprovision"
    profile.write_bytes(b"profile-bytes")
    monkeypatch.setenv("SHIPWRIGHT_IOS_DIST_P12_PASSWORD", "secret")
    monkeypatch.delenv("SHIPWRIGHT_APPLE_PASSWORD", raising=False)

    options = IosBuildOptions(
        team_id="TEAM123",
        apple_id="dev@example.com",
        dist_p12_path=p12,
        provisioning_profile_path=profile,
    )
    IOSBuilder(managed_project, options, client=fake_service).prepare_credentials()

    upload = dict((c[0], c) for c in fake_service.calls)["upload_credentials"]
    credentials = upload[3]
    assert credentials["teamId"] == "TEAM123"
    assert credentials["appleId"] == "dev@example.com"
    assert "applePassword" not in credentials
    assert credentials["distCert"] == {
        "certP12": base64.b64encode(b"p12-bytes").decode("utf-8"),
        "certPassword": "secret",
    }
    assert credentials["provisioningProfile"] == base64.b64encode(b"profile-bytes").decode("utf-8")


def test_p12_requires_password(managed_project, fake_service, monkeypatch, tmp_path) -> None:
    p12 = tmp_path / "dist.p12"
    p12.write_bytes(b"p12")
    monkeypatch.delenv("SHIPWRIGHT_IOS_DIST_P12_PASSWORD", raising=False)

    builder = IOSBuilder(managed_project, IosBuildOptions(dist_p12_path=p12), client=fake_service)
    with pytest.raises(CommandError) as e:
        builder.prepare_credentials()
    assert e.value.code == "MISSING_P12_PASSWORD"


def test_missing_credential_file(managed_project, fake_service, tmp_path) -> None:
    options = IosBuildOptions(provisioning_profile_path=tmp_path / "nope.mobileprovision")
    with pytest.raises(CommandError) as e:
        IOSBuilder(managed_project, options, client=fake_service).prepare_credentials()
    assert e.value.code == "FILE_NOT_FOUND"


def test_push_key_needs_both_flags(managed_project, fake_service) -> None:
    options = IosBuildOptions(push_id="ABC123")
    with pytest.raises(CommandError) as e:
        IOSBuilder(managed_project, options, client=fake_service).prepare_credentials()
    assert e.value.code == "INCOMPLETE_PUSH_KEY"


def test_ios_requires_bundle_identifier(tmp_path, fake_service) -> None:
    (tmp_path / "app.json").write_text('{"expo": {"slug": "x"}}', encoding="utf-8")
    with pytest.raises(CommandError) as e:
        IOSBuilder(tmp_path, IosBuildOptions(), client=fake_service).command()
    assert e.value.code == "MISSING_BUNDLE_IDENTIFIER"
    assert fake_service.calls == []


def test_android_keystore_upload(managed_project, fake_service, monkeypatch, tmp_path) -> None:
    keystore = tmp_path / "release.jks"
    keystore.write_bytes(b"jks")
    monkeypatch.setenv("SHIPWRIGHT_ANDROID_KEYSTORE_PASSWORD", "store-pass")
    monkeypatch.setenv("SHIPWRIGHT_ANDROID_KEY_PASSWORD", "key-pass")

    options = AndroidBuildOptions(
        clear_credentials=True, keystore_path=keystore, keystore_alias="upload"
    )
    AndroidBuilder(managed_project, options, client=fake_service).command()

    names = fake_service.call_names()
    assert names[:3] == ["get_build_status", "clear_credentials", "upload_credentials"]
    keystore_payload = fake_service.calls[2][3]["keystore"]
    assert keystore_payload["keystoreAlias"] == "upload"
    assert keystore_payload["keystorePassword"] == "store-pass"
    assert keystore_payload["keyPassword"] == "key-pass"

    payload = dict((c[0], c) for c in fake_service.calls)["start_build"][1]
    assert payload["package"] == "com.example.helloworld"
    assert payload["type"] == "apk"


def test_android_keystore_requires_alias(managed_project, fake_service, tmp_path) -> None:
    options = AndroidBuildOptions(keystore_path=tmp_path / "release.jks")
    with pytest.raises(CommandError) as e:
        AndroidBuilder(managed_project, options, client=fake_service).prepare_credentials()
    assert e.value.code == "MISSING_KEYSTORE_ALIAS"


def test_status_lists_jobs(managed_project) -> None:
    jobs = [
        {"id": "b1", "platform": "ios", "status": "finished", "artifacts": {"url": "https://x/app.ipa"}},
        {"id": "b2", "platform": "android", "status": "errored"},
    ]
    service = FakeBuildService(jobs=jobs)
    options = StatusOptions(public_url="https://example.com/manifest.json")

    assert BaseBuilder(managed_project, options, client=service).command_check_status() == jobs
    assert service.calls == [
        ("get_build_status", "@anonymous/hello-world", None, "https://example.com/manifest.json")
    ]


def test_timeout_becomes_command_error(managed_project, fake_service, monkeypatch) -> None:
    def timeout(_build_id, **_kwargs):
        raise TimeoutError("Build build-1 did not finish within 1800 seconds")

    monkeypatch.setattr(fake_service, "wait_for_build", timeout)
    with pytest.raises(CommandError) as e:
        IOSBuilder(managed_project, IosBuildOptions(), client=fake_service).command()
    assert e.value.code == "BUILD_TIMEOUT"
