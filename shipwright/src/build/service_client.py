import time
from typing import Any, Dict, Iterable, List, Optional

import requests

from shipwright.logger import get_console
from shipwright.src.errors import BuildServiceError

console = get_console()

FINISHED = "finished"
ERRORED = "errored"


class BuildServiceClient:
    """Thin wrapper around the remote build service REST API"""

    def __init__(self, base_url: str, access_token: str):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {access_token}",
        }

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, headers=self.headers, **kwargs)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = f"{method} {path} failed with status {e.response.status_code}"
            if e.response.text:
                error_msg += f": {e.response.text}"
            raise BuildServiceError(error_msg, e.response.status_code) from e
        except requests.exceptions.RequestException as e:
            raise BuildServiceError(f"Could not reach build service: {e}") from e

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    def get_build_status(
        self,
        experience: str,
        platform: Optional[str] = None,
        public_url: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return the most recent build jobs for an experience"""
        params = {"experience": experience}
        if platform:
            params["platform"] = platform
        if public_url:
            params["manifestUrl"] = public_url
        data = self._request("GET", "/builds", params=params)
        return data.get("jobs", [])

    def start_build(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/builds", json=payload)

    def get_build(self, build_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/builds/{build_id}")

    def wait_for_build(
        self, build_id: str, timeout: int = 1800, interval: int = 10
    ) -> Dict[str, Any]:
        """Poll a build until it finishes.

        Args:
            build_id: The job id returned by start_build
            timeout: Maximum time to wait in seconds
            interval: Seconds between polls

        Raises:
            BuildServiceError: the build errored on the service
            TimeoutError: the build did not finish in time
        """
        start_time = time.time()
        last_status = None

        while time.time() - start_time < timeout:
            job = self.get_build(build_id)
            status = job.get("status")

            # Only print status if it changed
            if status != last_status:
                console.print(f"[bold yellow]Build status:[/] {status}")
                last_status = status

            if status == FINISHED:
                return job
            if status == ERRORED:
                reason = job.get("error") or "unknown error"
                raise BuildServiceError(f"Build {build_id} failed: {reason}")

            time.sleep(interval)

        raise TimeoutError(f"Build {build_id} did not finish within {timeout} seconds")

    def publish(self, experience: str, release_channel: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/publish",
            json={"experience": experience, "releaseChannel": release_channel},
        )

    def get_credentials(self, experience: str, platform: str) -> Dict[str, Any]:
        return self._request("GET", f"/credentials/{platform}/{experience}")

    def upload_credentials(
        self, experience: str, platform: str, credentials: Dict[str, Any]
    ) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/credentials/{platform}/{experience}", json=credentials
        )

    def clear_credentials(
        self,
        experience: str,
        platform: str,
        kinds: Iterable[str],
        revoke: bool = False,
    ) -> Dict[str, Any]:
        params = {"kinds": ",".join(kinds), "revoke": str(revoke).lower()}
        return self._request(
            "DELETE", f"/credentials/{platform}/{experience}", params=params
        )
