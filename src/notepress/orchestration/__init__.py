"""Publish orchestration."""

from notepress.orchestration.exceptions import DocumentNotFoundError, OrchestrationError
from notepress.orchestration.pipeline import PublishPipeline, PublishResult, ReadFailure
from notepress.utils.exceptions import CommitError

__all__ = [
    "CommitError",
    "DocumentNotFoundError",
    "OrchestrationError",
    "PublishPipeline",
    "PublishResult",
    "ReadFailure",
]
