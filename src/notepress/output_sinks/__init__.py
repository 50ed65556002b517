"""Target tree writers."""

from notepress.output_sinks.mirror import Mirror, MirrorReport, TargetLayout, WriteFailure

__all__ = ["Mirror", "MirrorReport", "TargetLayout", "WriteFailure"]
