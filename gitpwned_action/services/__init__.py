"""Services for gitpwned-action.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from gitpwned_action.services.comment_publisher import CommentPublisher, PublishReport
from gitpwned_action.services.range_selector import NoCommitsToScan, RangeSelector
from gitpwned_action.services.scan_pipeline import (
    PipelineState,
    ScanPipeline,
    final_exit_code,
)
from gitpwned_action.services.scan_service import (
    ARTIFACT_NAME,
    ScanInvocation,
    ScanService,
    build_log_opts,
    build_scan_args,
)
from gitpwned_action.services.summary_writer import SummaryWriter, render_summary

__all__ = [
    "ARTIFACT_NAME",
    "CommentPublisher",
    "NoCommitsToScan",
    "PipelineState",
    "PublishReport",
    "RangeSelector",
    "ScanInvocation",
    "ScanPipeline",
    "ScanService",
    "SummaryWriter",
    "build_log_opts",
    "build_scan_args",
    "final_exit_code",
    "render_summary",
]
