import base64
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.table import Table

from shipwright.logger import get_console
from shipwright.src.build.service_client import BuildServiceClient
from shipwright.src.errors import CommandError
from shipwright.src.project.manifest import load_manifest
from shipwright.src.utils.config_loader import get_service_config

IN_PROGRESS_STATUSES = ("pending", "in-progress")


def read_base64(path: Path) -> str:
    """Read a credential file and return it base64 encoded."""
    path = Path(path)
    if not path.exists():
        raise CommandError("FILE_NOT_FOUND", f"File not found: {path}")
    return base64.b64encode(path.read_bytes()).decode("utf-8")


class BaseBuilder:
    """Common flow for remote builds; subclasses fill in platform details"""

    platform: Optional[str] = None

    def __init__(
        self, project_dir: Path, options, client: Optional[BuildServiceClient] = None
    ):
        self.project_dir = Path(project_dir)
        self.options = options
        self.console = get_console()
        self.manifest = load_manifest(self.project_dir)
        self._client = client

    @property
    def client(self) -> BuildServiceClient:
        if self._client is None:
            service_config = get_service_config()
            self._client = BuildServiceClient(
                service_config["url"], service_config["access_token"]
            )
        return self._client

    @property
    def experience(self) -> str:
        """Full experience name, e.g. @owner/slug"""
        if not self.manifest.slug:
            raise CommandError("MISSING_SLUG", "app.json must define a slug")
        return f"@{self.manifest.owner or 'anonymous'}/{self.manifest.slug}"

    # Hooks for subclasses

    def validate_project(self) -> None:
        pass

    def prepare_credentials(self) -> None:
        pass

    def platform_payload(self) -> Dict[str, Any]:
        return {}

    # Shared flow

    def check_for_build_in_progress(self) -> None:
        jobs = self.client.get_build_status(self.experience, self.platform)
        in_progress = [job for job in jobs if job.get("status") in IN_PROGRESS_STATUSES]
        if in_progress:
            raise CommandError(
                "BUILD_IN_PROGRESS",
                f"A {self.platform} build is already in progress ({in_progress[0].get('id')}). "
                "Wait for it to finish or check it with build:status.",
            )

    def publish(self) -> None:
        self.console.print(
            f"[bold blue]Publishing to release channel '{self.options.release_channel}'...[/]"
        )
        result = self.client.publish(self.experience, self.options.release_channel)
        if url := result.get("url"):
            self.console.print(f"[green]✓ Published:[/] {url}")

    def build_payload(self) -> Dict[str, Any]:
        payload = {
            "platform": self.platform,
            "experience": self.experience,
            "releaseChannel": self.options.release_channel,
            "type": self.options.build_type.value,
        }
        if self.options.public_url:
            payload["manifestUrl"] = self.options.public_url
        payload.update(self.platform_payload())
        return payload

    def command(self) -> Dict[str, Any]:
        """Run the whole build: checks, credentials, publish, build, wait."""
        self.validate_project()
        self.check_for_build_in_progress()
        self.prepare_credentials()

        if self.options.public_url:
            self.console.print(
                f"[dim]Using externally hosted manifest: {self.options.public_url}[/]"
            )
        elif self.options.publish:
            self.publish()
        else:
            self.console.print("[dim]Skipping publish (--no-publish)[/]")

        job = self.client.start_build(self.build_payload())
        build_id = job.get("id")
        self.console.print(f"[green]✓ Build started:[/] {build_id}")

        if not self.options.wait:
            self.console.print(
                "[dim]Not waiting for the build to finish. Run build:status to follow it.[/]"
            )
            return job

        self.console.print("[bold blue]Waiting for build to complete...[/]")
        try:
            job = self.client.wait_for_build(build_id)
        except TimeoutError as e:
            raise CommandError("BUILD_TIMEOUT", str(e)) from e

        artifact_url = job.get("artifacts", {}).get("url")
        if artifact_url:
            self.console.print(f"[bold green]✓ All done![/] Build artifact: {artifact_url}")
        else:
            self.console.print("[yellow]⚠ Build finished but no artifact URL was returned[/]")
        return job

    def command_check_status(self) -> List[Dict[str, Any]]:
        """Print the latest builds for the project"""
        jobs = self.client.get_build_status(
            self.experience, public_url=getattr(self.options, "public_url", None)
        )
        if not jobs:
            self.console.print("[yellow]No builds found for this project.[/]")
            return jobs

        table = Table(title=f"Builds for {self.experience}")
        table.add_column("ID", style="cyan")
        table.add_column("Platform")
        table.add_column("Status")
        table.add_column("Release channel")
        table.add_column("Artifact")

        for job in jobs:
            status = job.get("status", "unknown")
            status_color = (
                "green"
                if status == "finished"
                else "red" if status == "errored" else "yellow"
            )
            table.add_row(
                str(job.get("id", "")),
                job.get("platform", ""),
                f"[{status_color}]{status}[/]",
                job.get("releaseChannel", ""),
                (job.get("artifacts") or {}).get("url", ""),
            )

        self.console.print(table)
        return jobs
