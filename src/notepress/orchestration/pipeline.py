"""Publish pipeline: select, mirror, commit.

Two entry points:

- :meth:`PublishPipeline.publish_all` mirrors every document whose
  frontmatter carries the publish flag.
- :meth:`PublishPipeline.publish_one` mirrors a single document, offering to
  add the flag first when it is missing.

Both validate the target layout before touching any file, mirror every
selected document, and only then run the commit step once for the batch.
Per-file problems are collected on the :class:`PublishResult`; the batch
keeps going.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from notepress.assets.resolver import AssetLookupFailure, AssetResolver
from notepress.config.exceptions import ConfigurationError
from notepress.data_primitives.document import CorpusFile, Document
from notepress.markdown.frontmatter import PUBLISH_FLAG_LINE, add_publish_flag, is_publishable
from notepress.orchestration.exceptions import DocumentNotFoundError
from notepress.output_sinks.mirror import Mirror, MirrorReport, TargetLayout, WriteFailure
from notepress.utils.exceptions import CommitError
from notepress.utils.git import CommitOutcome, Committer

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from notepress.config.settings import PublishSettings
    from notepress.data_primitives.protocols import (
        ConfirmationProvider,
        CorpusReader,
        CorpusWriter,
        Notifier,
    )

logger = logging.getLogger(__name__)


def _log_notifier(message: str) -> None:
    logger.info(message)


@dataclass(frozen=True, slots=True)
class ReadFailure:
    """A document that could not be read from the corpus."""

    source: str
    error: str

    def __str__(self) -> str:
        return f"Failed to read {self.source}: {self.error}"


@dataclass(slots=True)
class PublishResult:
    """What a publish run did. Produced once per run."""

    selected: list[str] = field(default_factory=list)
    reports: list[MirrorReport] = field(default_factory=list)
    read_failures: list[ReadFailure] = field(default_factory=list)
    commit_outcome: CommitOutcome | None = None
    commit_message: str | None = None
    commit_sha: str | None = None
    commit_error: str | None = None
    aborted: bool = False

    @property
    def documents_published(self) -> int:
        return sum(1 for report in self.reports if report.document_written)

    @property
    def documents_failed(self) -> int:
        return sum(1 for report in self.reports if not report.document_written)

    @property
    def assets_copied(self) -> int:
        return sum(len(report.assets_written) for report in self.reports)

    @property
    def asset_failures(self) -> list[AssetLookupFailure]:
        return [failure for report in self.reports for failure in report.lookup_failures]

    @property
    def write_failures(self) -> list[WriteFailure]:
        return [failure for report in self.reports for failure in report.write_failures]

    @property
    def ok(self) -> bool:
        """True when every file was read and written and the commit step did not fail."""
        return (
            not self.aborted
            and not self.read_failures
            and not self.write_failures
            and self.commit_outcome is not CommitOutcome.FAILED
        )


class PublishPipeline:
    """Mirror publishable documents into a git repository and commit them."""

    def __init__(
        self,
        settings: PublishSettings,
        corpus: CorpusReader,
        *,
        writer: CorpusWriter | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        self.corpus = corpus
        self.writer = writer
        self.notify: Notifier = notifier or _log_notifier
        self.clock = clock

    def _layout(self) -> TargetLayout:
        try:
            return TargetLayout.from_settings(self.settings)
        except ConfigurationError:
            if not self.settings.repo_path:
                self.notify("Please configure git repository path in settings")
            raise

    def _read(self, file: CorpusFile, failures: list[ReadFailure]) -> Document | None:
        try:
            return Document(file=file, content=self.corpus.read_text(file))
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not read %s: %s", file.path, exc)  # noqa: TRY400
            failures.append(ReadFailure(source=file.path, error=str(exc)))
            return None

    def select_publishable(self, failures: list[ReadFailure] | None = None) -> list[Document]:
        """Read every document and keep those carrying the publish flag.

        Documents that cannot be read are skipped and, when ``failures`` is
        given, appended to it.
        """
        failures = [] if failures is None else failures
        selected = []
        for file in self.corpus.list_documents():
            document = self._read(file, failures)
            if document is not None and is_publishable(document.content):
                selected.append(document)
        logger.debug("Selected %d publishable document(s)", len(selected))
        return selected

    def publish_all(self) -> PublishResult:
        """Publish every document marked with the publish flag.

        Raises:
            ConfigurationError: If the target is misconfigured. Nothing is written.

        """
        layout = self._layout()

        read_failures: list[ReadFailure] = []
        documents = self.select_publishable(read_failures)
        result = PublishResult(
            selected=[document.path for document in documents],
            read_failures=read_failures,
        )
        if not documents:
            self.notify('No files found with "publish: true" frontmatter')
            return result

        self.notify(f"Publishing {len(documents)} notes...")
        self._mirror(layout, documents, result)
        self._commit(layout, result)

        self.notify(self._summary(result, f"{len(documents)} notes"))
        return result

    def publish_one(self, document_id: str, confirm: ConfirmationProvider | None = None) -> PublishResult:
        """Publish a single document.

        When the document lacks the publish flag, ``confirm`` is asked whether to
        add it. A negative answer, or no ``confirm`` at all, aborts the run
        without changing anything.

        Raises:
            ConfigurationError: If the target is misconfigured. Nothing is written.
            DocumentNotFoundError: If ``document_id`` is not a document in the corpus.

        """
        layout = self._layout()

        file = self.corpus.get_file(document_id)
        if file is None or file not in self.corpus.list_documents():
            raise DocumentNotFoundError(document_id)

        result = PublishResult(selected=[file.path])
        document = self._read(file, result.read_failures)
        if document is None:
            self.notify(f"Error publishing current note: {result.read_failures[0]}")
            return result

        if not is_publishable(document.content):
            prompt = (
                f'"{document.name}" doesn\'t have "{PUBLISH_FLAG_LINE}" in its frontmatter. '
                "Would you like to add it and publish the note?"
            )
            if confirm is None or not confirm(prompt):
                logger.info("Publishing %s cancelled", document.path)
                result.aborted = True
                return result
            document = self._add_flag(document)
            self.notify(f'Added "{PUBLISH_FLAG_LINE}" to frontmatter')

        self._mirror(layout, [document], result)
        self._commit(layout, result)

        self.notify(self._summary(result, "current note"))
        return result

    def _add_flag(self, document: Document) -> Document:
        if self.writer is None:
            msg = "Adding the publish flag requires a corpus writer"
            raise RuntimeError(msg)
        content = add_publish_flag(document.content)
        self.writer.write_text(document.file, content)
        logger.info("Added publish flag to %s", document.path)
        return Document(file=document.file, content=content)

    def _mirror(self, layout: TargetLayout, documents: list[Document], result: PublishResult) -> None:
        mirror = Mirror(self.corpus, layout, AssetResolver(self.corpus))
        for document in documents:
            report = mirror.mirror_document(document)
            result.reports.append(report)
            logger.info(
                "Mirrored %s (%d asset(s), %d missing)",
                document.path,
                len(report.assets_written),
                len(report.lookup_failures),
            )

    def _commit(self, layout: TargetLayout, result: PublishResult) -> None:
        if not self.settings.auto_commit:
            logger.debug("Auto commit disabled, leaving changes in %s uncommitted", layout.root)
            return

        committer = Committer(layout.root, self.settings.commit_message, clock=self.clock)
        try:
            commit = committer.commit()
        except CommitError as exc:
            logger.error("Commit failed: %s", exc)  # noqa: TRY400
            result.commit_outcome = CommitOutcome.FAILED
            result.commit_error = str(exc)
            return

        result.commit_outcome = commit.outcome
        result.commit_message = commit.message
        result.commit_sha = commit.sha

    def _summary(self, result: PublishResult, subject: str) -> str:
        if result.commit_outcome is CommitOutcome.FAILED:
            return f"Error publishing {subject}: {result.commit_error}"

        problems = []
        if result.read_failures:
            problems.append(f"{len(result.read_failures)} note(s) could not be read")
        if result.write_failures:
            problems.append(f"{len(result.write_failures)} file(s) failed to copy")
        if result.asset_failures:
            problems.append(f"{len(result.asset_failures)} asset(s) not found")
        suffix = f" ({'; '.join(problems)})" if problems else ""

        if result.read_failures or result.write_failures:
            return f"Finished publishing {subject} with errors{suffix}"
        if result.commit_outcome is CommitOutcome.NO_CHANGES:
            return f"Copied {subject} (no changes to commit){suffix}"
        return f"Successfully published {subject}{suffix}"
