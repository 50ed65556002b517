"""Notepress - publish flagged markdown notes into a git-tracked site tree."""

from notepress.config.settings import PublishSettings
from notepress.orchestration.pipeline import PublishPipeline, PublishResult
from notepress.utils.git import CommitOutcome

__version__ = "0.1.0"

__all__ = ["CommitOutcome", "PublishPipeline", "PublishResult", "PublishSettings", "__version__"]
