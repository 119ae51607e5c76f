"""gitpwned binary installation.

Resolves the requested version, downloads the release archive for the
current platform and unpacks it into a per-version temp directory.
"""

from __future__ import annotations

import platform
import tarfile
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import requests

from gitpwned_action.domain.config import ConfigurationError
from gitpwned_action.infrastructure.github.api import GitHubApiClient
from gitpwned_action.infrastructure.github.output import add_github_path, log_debug

RELEASES_OWNER = "gitpwned"
RELEASES_REPO = "gitpwned"
DOWNLOAD_BASE_URL = f"https://github.com/{RELEASES_OWNER}/{RELEASES_REPO}/releases/download"

_DOWNLOAD_TIMEOUT_SECONDS = 120
_CHUNK_SIZE = 1 << 16


class InstallError(Exception):
    """Raised when the scanner binary cannot be installed."""

    pass


def get_platform_info() -> tuple[str, str]:
    """Return the (platform, arch) pair used in release asset names.

    Asset names follow Node's naming: linux/darwin/windows and x64/arm64.
    """
    system = platform.system().lower()
    if system.startswith("win"):
        system = "windows"

    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64"):
        machine = "x64"
    elif machine in ("aarch64", "arm64"):
        machine = "arm64"
    elif machine in ("i386", "i686", "x86"):
        machine = "x32"
    return system, machine


def download_url(version: str, system: str, arch: str) -> str:
    return f"{DOWNLOAD_BASE_URL}/v{version}/gitpwned_{version}_{system}_{arch}.tar.gz"


@dataclass
class ScannerInstaller:
    """Makes a gitpwned binary available for the scan."""

    api: GitHubApiClient
    install_root: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    github_path_file: Path | None = None
    session: requests.Session = field(default_factory=requests.Session)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def resolve_version(self, version: str) -> str:
        """Resolve "latest" to a concrete version number.

        Raises:
            InstallError: If the latest release cannot be looked up
        """
        if version != "latest":
            return version.lstrip("v")
        outcome = self.api.get_latest_release_tag(RELEASES_OWNER, RELEASES_REPO)
        if not outcome.ok:
            raise InstallError(f"Could not resolve latest gitpwned release: {outcome.failure}")
        return outcome.value.lstrip("v")

    def install(self, version: str) -> Path:
        """Download and unpack gitpwned.

        Args:
            version: Concrete version or "latest"

        Returns:
            Path to the gitpwned executable

        Raises:
            InstallError: If the download or extraction fails
        """
        resolved = self.resolve_version(version)
        print(f"gitpwned version: {resolved}")

        system, arch = get_platform_info()
        install_dir = self.install_root / f"gitpwned-{resolved}"
        binary = install_dir / ("gitpwned.exe" if system == "windows" else "gitpwned")
        print(f"Version to install: {resolved} (target directory: {install_dir})")

        if binary.is_file():
            print(f"gitpwned {resolved} already present in {install_dir}")
        else:
            url = download_url(resolved, system, arch)
            print(f"Downloading gitpwned from {url}")
            archive = self.install_root / f"gitpwned-{resolved}.tar.gz"
            self._download(url, archive)
            self._extract(archive, install_dir)
            if not binary.is_file():
                raise InstallError(f"{binary.name} not found in archive {url}")
            binary.chmod(binary.stat().st_mode | 0o111)

        add_github_path(self.github_path_file, install_dir)
        return binary

    # ============================================================
    # Private Helpers
    # ============================================================

    def _download(self, url: str, destination: Path) -> None:
        try:
            with self.session.get(url, stream=True, timeout=_DOWNLOAD_TIMEOUT_SECONDS) as response:
                response.raise_for_status()
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                        f.write(chunk)
        except (requests.RequestException, OSError) as e:
            raise InstallError(f"could not install gitpwned from {url}, error: {e}")
        log_debug(f"Downloaded {url} to {destination}")

    @staticmethod
    def _extract(archive: Path, install_dir: Path) -> None:
        try:
            install_dir.mkdir(parents=True, exist_ok=True)
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(install_dir, filter="data")
        except (tarfile.TarError, OSError) as e:
            raise InstallError(f"could not extract {archive}: {e}")


def require_version(version: str) -> str:
    """Validate a GITPWNED_VERSION value before any network work."""
    if version == "latest":
        return version
    if not version.lstrip("v").replace(".", "").isdigit():
        raise ConfigurationError(f"GITPWNED_VERSION [{version}] is not a version number")
    return version
