"""Workflow artifact upload.

Talks to the Actions results service (artifact protocol v4): create the
artifact, PUT a zip of the files to the signed blob URL, then finalize it
with size and sha256. Every failure is reported as a transient Outcome.
"""

from __future__ import annotations

import base64
import hashlib
import io
import json
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

import requests

from gitpwned_action.domain.outcome import Outcome

_SERVICE_PATH = "twirp/github.actions.results.api.v1.ArtifactService"
_RESULTS_SCOPE_PREFIX = "Actions.Results:"
_TIMEOUT_SECONDS = 60


def parse_backend_ids(runtime_token: str) -> tuple[str, str]:
    """Extract (workflow run, workflow job run) backend ids from the runtime JWT.

    The ids live in the "scp" claim as "Actions.Results:<run>:<job>".

    Raises:
        ValueError: If the token has no results scope
    """
    parts = runtime_token.split(".")
    if len(parts) < 2:
        raise ValueError("runtime token is not a JWT")
    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    claims = json.loads(base64.urlsafe_b64decode(payload))
    for scope in str(claims.get("scp", "")).split(" "):
        if scope.startswith(_RESULTS_SCOPE_PREFIX):
            _, run_id, job_id = scope.split(":", 2)
            return run_id, job_id
    raise ValueError("runtime token has no Actions.Results scope")


def zip_files(files: list[Path]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in files:
            archive.write(path, arcname=path.name)
    return buffer.getvalue()


@dataclass
class ArtifactUploader:
    """Uploads files as a workflow run artifact."""

    runtime_token: str | None
    results_url: str | None
    session: requests.Session = field(default_factory=requests.Session)

    def upload(self, name: str, files: list[Path]) -> Outcome[str]:
        """Upload files as a single artifact.

        Args:
            name: Artifact name shown on the run page
            files: Files to include (stored flat in the archive)

        Returns:
            Outcome with the artifact id
        """
        if not self.runtime_token or not self.results_url:
            return Outcome.transient(
                "ACTIONS_RUNTIME_TOKEN/ACTIONS_RESULTS_URL not set, cannot upload artifacts"
            )
        missing = [str(p) for p in files if not p.is_file()]
        if missing:
            return Outcome.transient(f"artifact files not found: {', '.join(missing)}")

        try:
            run_id, job_id = parse_backend_ids(self.runtime_token)
            content = zip_files(files)
        except (ValueError, OSError) as e:
            return Outcome.transient(f"could not prepare artifact {name}: {e}")

        ids = {"workflowRunBackendId": run_id, "workflowJobRunBackendId": job_id}
        try:
            created = self._call("CreateArtifact", {**ids, "name": name, "version": 4})
            upload_url = created.get("signedUploadUrl")
            if not created.get("ok") or not upload_url:
                return Outcome.transient(f"CreateArtifact rejected artifact {name}")

            response = self.session.put(
                upload_url,
                data=content,
                headers={"x-ms-blob-type": "BlockBlob", "Content-Type": "application/zip"},
                timeout=_TIMEOUT_SECONDS,
            )
            response.raise_for_status()

            finalized = self._call(
                "FinalizeArtifact",
                {
                    **ids,
                    "name": name,
                    "size": str(len(content)),
                    "hash": f"sha256:{hashlib.sha256(content).hexdigest()}",
                },
            )
        except (requests.RequestException, ValueError) as e:
            return Outcome.transient(f"uploading artifact {name} failed: {e}")

        if not finalized.get("ok"):
            return Outcome.transient(f"FinalizeArtifact rejected artifact {name}")
        return Outcome.success(str(finalized.get("artifactId", "")))

    # ============================================================
    # Private Helpers
    # ============================================================

    def _call(self, method: str, body: dict) -> dict:
        url = f"{self.results_url.rstrip('/')}/{_SERVICE_PATH}/{method}"
        response = self.session.post(
            url,
            json=body,
            headers={"Authorization": f"Bearer {self.runtime_token}"},
            timeout=_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()
