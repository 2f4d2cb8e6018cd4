import os
from typing import Any, Dict

from shipwright.src.build.base_builder import BaseBuilder, read_base64
from shipwright.src.build.options import AndroidBuildOptions
from shipwright.src.errors import CommandError

KEYSTORE_PASSWORD_ENV = "SHIPWRIGHT_ANDROID_KEYSTORE_PASSWORD"
KEY_PASSWORD_ENV = "SHIPWRIGHT_ANDROID_KEY_PASSWORD"


class AndroidBuilder(BaseBuilder):
    platform = "android"
    options: AndroidBuildOptions

    def validate_project(self) -> None:
        if not self.manifest.android.package:
            raise CommandError(
                "MISSING_PACKAGE",
                "Your project must have a package set in app.json (android.package)",
            )

    def platform_payload(self) -> Dict[str, Any]:
        return {"package": self.manifest.android.package}

    def collect_keystore(self) -> Dict[str, Any]:
        opts = self.options
        if not opts.keystore_alias:
            raise CommandError(
                "MISSING_KEYSTORE_ALIAS", "--keystore-path requires --keystore-alias"
            )

        keystore_password = os.environ.get(KEYSTORE_PASSWORD_ENV)
        key_password = os.environ.get(KEY_PASSWORD_ENV)
        if not keystore_password or not key_password:
            raise CommandError(
                "MISSING_KEYSTORE_PASSWORD",
                f"Set {KEYSTORE_PASSWORD_ENV} and {KEY_PASSWORD_ENV} to upload a keystore",
            )

        return {
            "keystore": read_base64(opts.keystore_path),
            "keystoreAlias": opts.keystore_alias,
            "keystorePassword": keystore_password,
            "keyPassword": key_password,
        }

    def prepare_credentials(self) -> None:
        if self.options.clear_credentials:
            self.console.print("[bold blue]Removing keystore from the build service[/]")
            self.client.clear_credentials(self.experience, self.platform, ["keystore"])

        if self.options.keystore_path:
            keystore = self.collect_keystore()
            self.console.print(
                f"[bold blue]Uploading keystore:[/] {self.options.keystore_path}"
            )
            self.client.upload_credentials(
                self.experience, self.platform, {"keystore": keystore}
            )
        elif self.options.clear_credentials:
            self.console.print(
                "[dim]A new keystore will be generated on the build service[/]"
            )
