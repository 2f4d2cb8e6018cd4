import os
from typing import Any, Dict, List

from shipwright.src.build.base_builder import BaseBuilder, read_base64
from shipwright.src.build.options import IosBuildOptions, IosBuildType
from shipwright.src.errors import CommandError

APPLE_PASSWORD_ENV = "SHIPWRIGHT_APPLE_PASSWORD"
DIST_P12_PASSWORD_ENV = "SHIPWRIGHT_IOS_DIST_P12_PASSWORD"

ALL_CREDENTIAL_KINDS = ("distCert", "pushKey", "pushCert", "provisioningProfile")
REQUIRED_CREDENTIAL_KINDS = ("distCert", "provisioningProfile")


class IOSBuilder(BaseBuilder):
    platform = "ios"
    options: IosBuildOptions

    def validate_project(self) -> None:
        if not self.manifest.ios.bundle_identifier:
            raise CommandError(
                "MISSING_BUNDLE_IDENTIFIER",
                "Your project must have a bundleIdentifier set in app.json (ios.bundleIdentifier)",
            )

    def platform_payload(self) -> Dict[str, Any]:
        return {"bundleIdentifier": self.manifest.ios.bundle_identifier}

    def credential_kinds_to_clear(self) -> List[str]:
        if self.options.clear_credentials:
            return list(ALL_CREDENTIAL_KINDS)

        selected = {
            "distCert": self.options.clear_dist_cert,
            "pushKey": self.options.clear_push_key,
            "pushCert": self.options.clear_push_cert,
            "provisioningProfile": self.options.clear_provisioning_profile,
        }
        return [kind for kind, enabled in selected.items() if enabled]

    def clear_credentials(self) -> None:
        kinds = self.credential_kinds_to_clear()
        if not kinds:
            if self.options.revoke_credentials:
                self.console.print(
                    "[yellow]⚠ --revoke-credentials does nothing without --clear-* options[/]"
                )
            return

        action = "Revoking and removing" if self.options.revoke_credentials else "Removing"
        self.console.print(f"[bold blue]{action} credentials:[/] {', '.join(kinds)}")
        self.client.clear_credentials(
            self.experience, self.platform, kinds, revoke=self.options.revoke_credentials
        )

    def collect_local_credentials(self) -> Dict[str, Any]:
        """Gather credentials passed on the command line"""
        opts = self.options
        credentials: Dict[str, Any] = {}

        if opts.team_id:
            credentials["teamId"] = opts.team_id

        if opts.apple_id:
            credentials["appleId"] = opts.apple_id
            apple_password = os.environ.get(APPLE_PASSWORD_ENV)
            if apple_password:
                credentials["applePassword"] = apple_password
            else:
                self.console.print(
                    f"[yellow]⚠ --apple-id given without {APPLE_PASSWORD_ENV}; the build service will not be able to log in to Apple[/]"
                )

        if opts.dist_p12_path:
            cert_password = os.environ.get(DIST_P12_PASSWORD_ENV)
            if not cert_password:
                raise CommandError(
                    "MISSING_P12_PASSWORD",
                    f"Set the {DIST_P12_PASSWORD_ENV} environment variable to the password of {opts.dist_p12_path}",
                )
            credentials["distCert"] = {
                "certP12": read_base64(opts.dist_p12_path),
                "certPassword": cert_password,
            }

        if opts.push_id or opts.push_p8_path:
            if not (opts.push_id and opts.push_p8_path):
                raise CommandError(
                    "INCOMPLETE_PUSH_KEY", "--push-id and --push-p8-path must be used together"
                )
            credentials["pushKey"] = {
                "apnsKeyId": opts.push_id,
                "apnsKeyP8": read_base64(opts.push_p8_path),
            }

        if opts.provisioning_profile_path:
            credentials["provisioningProfile"] = read_base64(
                opts.provisioning_profile_path
            )

        return credentials

    def ensure_remote_credentials(self) -> None:
        existing = self.client.get_credentials(self.experience, self.platform)
        missing = [kind for kind in REQUIRED_CREDENTIAL_KINDS if not existing.get(kind)]
        if missing:
            raise CommandError(
                "MISSING_CREDENTIALS",
                f"The build service has no {', '.join(missing)} for {self.experience}. "
                "Provide them with --dist-p12-path and --provisioning-profile-path.",
            )

    def prepare_credentials(self) -> None:
        self.clear_credentials()

        if self.options.skip_credentials_check:
            self.console.print("[dim]Skipping credentials check[/]")
            return

        credentials = self.collect_local_credentials()
        if credentials:
            self.console.print(
                f"[bold blue]Uploading credentials:[/] {', '.join(credentials)}"
            )
            self.client.upload_credentials(self.experience, self.platform, credentials)

        # Simulator builds are never signed
        if self.options.build_type == IosBuildType.ARCHIVE:
            self.ensure_remote_credentials()
