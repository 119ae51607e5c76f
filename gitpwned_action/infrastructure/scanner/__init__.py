"""Scanner infrastructure - binary installation and subprocess runner."""

from .installer import InstallError, ScannerInstaller, require_version
from .runner import GitpwnedRunner, ScannerRunner, shell_exit_status

__all__ = [
    "GitpwnedRunner",
    "InstallError",
    "ScannerInstaller",
    "ScannerRunner",
    "require_version",
    "shell_exit_status",
]
