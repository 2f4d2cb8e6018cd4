from pathlib import Path
from shipwright.src.build.options import (
    AndroidBuildOptions,
    AndroidBuildType,
    IosBuildOptions,
    IosBuildType,
    StatusOptions,
    WebBuildOptions,
)


def add_project_path_argument(parser):
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Path to the project [default: current directory]",
    )


def add_public_url_argument(parser):
    parser.add_argument(
        "--public-url",
        metavar="URL",
        help="The URL of an externally hosted manifest (for self-hosted apps)",
    )


def add_remote_build_arguments(parser):
    """Arguments shared by build:ios and build:android."""
    add_project_path_argument(parser)

    parser.add_argument(
        "--release-channel",
        metavar="CHANNEL",
        default="default",
        help="Pull from specified release channel [default: default]",
    )

    parser.add_argument(
        "--no-publish",
        action="store_false",
        dest="publish",
        help="Disable automatic publishing before building [default: publish]",
    )

    parser.add_argument(
        "--no-wait",
        action="store_false",
        dest="wait",
        help="Exit immediately after scheduling build [default: wait]",
    )

    add_public_url_argument(parser)

    parser.add_argument(
        "--skip-workflow-check",
        action="store_true",
        help="Skip warning about build service bare workflow limitations",
    )


def add_ios_build_arguments(parser):
    add_remote_build_arguments(parser)

    parser.add_argument(
        "-c",
        "--clear-credentials",
        action="store_true",
        help="Clear all credentials stored on the build service",
    )

    parser.add_argument(
        "--clear-dist-cert",
        action="store_true",
        help="Remove Distribution Certificate stored on the build service",
    )

    parser.add_argument(
        "--clear-push-key",
        action="store_true",
        help="Remove Push Notifications Key stored on the build service",
    )

    parser.add_argument(
        "--clear-push-cert",
        action="store_true",
        help="Remove Push Notifications Certificate stored on the build service (deprecated)",
    )

    parser.add_argument(
        "--clear-provisioning-profile",
        action="store_true",
        help="Remove Provisioning Profile stored on the build service",
    )

    parser.add_argument(
        "-r",
        "--revoke-credentials",
        action="store_true",
        help="Revoke credentials on developer.apple.com, select which with --clear-* options",
    )

    parser.add_argument(
        "--apple-id",
        metavar="LOGIN",
        help="Apple ID username (set the password in SHIPWRIGHT_APPLE_PASSWORD)",
    )

    parser.add_argument(
        "-t",
        "--type",
        choices=[t.value for t in IosBuildType],
        default=IosBuildType.ARCHIVE.value,
        help="Type of build [default: archive]",
    )

    parser.add_argument("--team-id", metavar="TEAM_ID", help="Apple Team ID")

    parser.add_argument(
        "--dist-p12-path",
        type=Path,
        metavar="DIST_P12",
        help="Path to your Distribution Certificate P12 (set the password in SHIPWRIGHT_IOS_DIST_P12_PASSWORD)",
    )

    parser.add_argument("--push-id", help="Push Key ID (ex: 123AB4C56D)")

    parser.add_argument(
        "--push-p8-path", type=Path, metavar="PUSH_P8", help="Path to your Push Key .p8 file"
    )

    parser.add_argument(
        "--provisioning-profile-path",
        type=Path,
        metavar="PROFILE",
        help="Path to your Provisioning Profile",
    )

    parser.add_argument(
        "--skip-credentials-check",
        action="store_true",
        help="Skip checking credentials",
    )


def add_android_build_arguments(parser):
    add_remote_build_arguments(parser)

    parser.add_argument(
        "-c",
        "--clear-credentials",
        action="store_true",
        help="Clear stored credentials",
    )

    parser.add_argument(
        "--keystore-path", type=Path, metavar="KEYSTORE", help="Path to your Keystore"
    )

    parser.add_argument("--keystore-alias", metavar="ALIAS", help="Keystore Alias")

    parser.add_argument(
        "--generate-keystore",
        action="store_true",
        help="[deprecated] Generate Keystore if one does not exist",
    )

    parser.add_argument(
        "-t",
        "--type",
        choices=[t.value for t in AndroidBuildType],
        default=AndroidBuildType.APK.value,
        help="Type of build [default: apk]",
    )


def add_web_build_arguments(parser):
    add_project_path_argument(parser)

    parser.add_argument(
        "-c",
        "--clear",
        action="store_true",
        help="Clear all cached build files and assets",
    )

    parser.add_argument(
        "--no-pwa",
        action="store_false",
        dest="pwa",
        help="Prevent the bundler from generating manifest.json and PWA meta tags",
    )

    parser.add_argument(
        "-d", "--dev", action="store_true", help="Turns dev flag on before bundling"
    )


def add_status_arguments(parser):
    add_project_path_argument(parser)
    add_public_url_argument(parser)


def add_configure_arguments(parser):
    add_project_path_argument(parser)
    parser.add_argument(
        "--apple-team-id",
        metavar="TEAM_ID",
        help="Apple Team ID used for team-scoped entitlements",
    )


def create_ios_build_options(args) -> IosBuildOptions:
    """Convert parsed arguments to IosBuildOptions"""
    return IosBuildOptions(
        release_channel=args.release_channel,
        publish=args.publish,
        wait=args.wait,
        public_url=args.public_url,
        clear_credentials=args.clear_credentials,
        skip_workflow_check=args.skip_workflow_check,
        build_type=IosBuildType(args.type),
        clear_dist_cert=args.clear_dist_cert,
        clear_push_key=args.clear_push_key,
        clear_push_cert=args.clear_push_cert,
        clear_provisioning_profile=args.clear_provisioning_profile,
        revoke_credentials=args.revoke_credentials,
        skip_credentials_check=args.skip_credentials_check,
        apple_id=args.apple_id,
        team_id=args.team_id,
        dist_p12_path=args.dist_p12_path,
        push_id=args.push_id,
        push_p8_path=args.push_p8_path,
        provisioning_profile_path=args.provisioning_profile_path,
    )


def create_android_build_options(args) -> AndroidBuildOptions:
    """Convert parsed arguments to AndroidBuildOptions"""
    return AndroidBuildOptions(
        release_channel=args.release_channel,
        publish=args.publish,
        wait=args.wait,
        public_url=args.public_url,
        clear_credentials=args.clear_credentials,
        skip_workflow_check=args.skip_workflow_check,
        build_type=AndroidBuildType(args.type),
        keystore_path=args.keystore_path,
        keystore_alias=args.keystore_alias,
        generate_keystore=args.generate_keystore,
    )


def create_status_options(args) -> StatusOptions:
    return StatusOptions(public_url=args.public_url)


def create_web_build_options(args) -> WebBuildOptions:
    return WebBuildOptions(clear=args.clear, pwa=args.pwa, dev=args.dev)
