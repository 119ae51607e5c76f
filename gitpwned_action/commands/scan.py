"""Scan command.

Thin command that builds the configuration, wires services and runs the
pipeline. No business logic - just wiring and coordination.
"""

from __future__ import annotations

import json
import os
from typing import Mapping

from gitpwned_action.domain.config import ActionConfig, ConfigurationError
from gitpwned_action.domain.event import EventPayload, EventType, UnsupportedEventError
from gitpwned_action.infrastructure import (
    ArtifactUploader,
    GitHubApiClient,
    GitpwnedRunner,
    ScannerInstaller,
    log_error,
)
from gitpwned_action.infrastructure.scanner import require_version
from gitpwned_action.services import (
    CommentPublisher,
    RangeSelector,
    ScanPipeline,
    ScanService,
    SummaryWriter,
)


def cmd_scan(env: Mapping[str, str] | None = None, dry_run: bool = False) -> int:
    """Run the full scan for the triggering workflow event.

    Thin command that:
    1. Builds ActionConfig once from the environment
    2. Validates the event and parses its payload
    3. Initializes services with dependencies
    4. Runs the pipeline and returns its exit code

    Args:
        env: Environment mapping (default: os.environ)
        dry_run: Print review comments instead of posting them

    Returns:
        Process exit code
    """
    # --------------------------------------------------------
    # 1. Configuration and event validation (fatal, before any work)
    # --------------------------------------------------------
    try:
        config = ActionConfig.from_env(os.environ if env is None else env)
        event_type = EventType.parse(config.event_name)
        require_version(config.version)
    except (ConfigurationError, UnsupportedEventError) as e:
        log_error(f"ERROR: {e}")
        return 1

    try:
        event = EventPayload.from_file(
            event_type,
            config.event_path,
            fallback_repository=config.repository,
            fallback_owner=config.repository_owner,
            server_url=config.server_url,
        )
    except (OSError, json.JSONDecodeError) as e:
        log_error(f"ERROR: could not read event payload {config.event_path}: {e}")
        return 1

    # --------------------------------------------------------
    # 2. Initialize services with dependencies
    # --------------------------------------------------------
    api = GitHubApiClient(token=config.github_token, api_url=config.api_url, dry_run=dry_run)

    def build_scan_service() -> ScanService:
        installer = ScannerInstaller(api=api, github_path_file=config.github_path_file)
        binary = installer.install(config.version)
        return ScanService(
            runner=GitpwnedRunner(binary=binary, delay_seconds=config.scan_delay_seconds),
            uploader=ArtifactUploader(
                runtime_token=config.runtime_token, results_url=config.results_url
            ),
            report_path=config.report_path,
            enable_upload_artifact=config.enable_upload_artifact,
            output_path=config.output_path,
        )

    pipeline = ScanPipeline(
        config=config,
        range_selector=RangeSelector(api=api, github_token=config.github_token),
        scan_service_factory=build_scan_service,
        comment_publisher=CommentPublisher(
            repo=event.repository.full_name,
            api=api,
            notify_user_list=config.notify_user_list,
        ),
        summary_writer=SummaryWriter(summary_path=config.step_summary_path),
    )

    # --------------------------------------------------------
    # 3. Run
    # --------------------------------------------------------
    return pipeline.run(event)
