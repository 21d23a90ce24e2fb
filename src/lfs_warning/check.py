"""Pull request check: ensure label, fetch files, classify, report."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from lfs_warning.analysis.file_classifier import (
    ChangedFile,
    ClassificationResult,
    classify_files,
    remove_excluded,
)
from lfs_warning.analysis.size_limit import parse_size_limit
from lfs_warning.config import Config
from lfs_warning.context import EventContext, MissingContextError
from lfs_warning.github_client import GitHubTransportError, Label, PRFile
from lfs_warning.output import console
from lfs_warning.output.github_comment import flatten, format_as_markdown
from lfs_warning.probes import AttributeProber, TextProbe

FAILURE_MESSAGE = (
    "Large file(s) detected! Setting PR status to failed. "
    "Consider using git-lfs to track the LFS file(s)"
)


class RepoFileProvider(Protocol):
    def list_changed_files(self, pr_number: int) -> list[PRFile]: ...

    def fetch_blob_size(self, sha: str) -> int | None: ...


class IssueAnnotator(Protocol):
    def get_label(self, name: str) -> Label | None: ...

    def create_label(self, name: str, color: str, description: str) -> Label: ...

    def add_label(self, pr_number: int, name: str) -> None: ...

    def remove_label(self, pr_number: int, name: str) -> None: ...

    def list_labels(self, pr_number: int) -> set[str]: ...

    def post_comment(self, pr_number: int, body: str) -> str: ...


class CheckStatus(Enum):
    """Final state of a check run."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class CheckOutcome:
    """Result of one check run."""

    status: CheckStatus
    lfs_files: list[str] = field(default_factory=list)
    result: ClassificationResult | None = None
    comment_body: str | None = None
    label_removed: bool = False

    @property
    def failed(self) -> bool:
        return self.status == CheckStatus.FAILED


class LfsCheck:
    """Runs the LFS warning check for one pull request event.

    All collaborators are passed in; the check holds no global state.
    """

    def __init__(
        self,
        config: Config,
        provider: RepoFileProvider,
        annotator: IssueAnnotator,
        attributes: AttributeProber,
        text_probe: TextProbe,
        max_workers: int = 8,
    ):
        self.config = config
        self.threshold = parse_size_limit(config.file_size_limit)
        config.patterns.validate()
        self.provider = provider
        self.annotator = annotator
        self.attributes = attributes
        self.text_probe = text_probe
        self.max_workers = max_workers

    def run(self, context: EventContext) -> CheckOutcome:
        console.info(f"Default configured filesizelimit is set to {self.threshold} bytes...")
        console.info(f"Name of Repository is {context.repo} and the owner is {context.owner}")
        console.info(f"Triggered event is {context.event_name}")

        self.ensure_label()

        if not context.is_pull_request:
            console.info("No Pull Request detected. Skipping LFS warning check")
            return CheckOutcome(status=CheckStatus.SKIPPED)

        if context.pr_number is None:
            raise MissingContextError("Could not get PR number")
        pr_number = context.pr_number
        console.info(f"The PR number is: {pr_number}")

        files = self.fetch_files(pr_number)
        console.debug(f"Files with blob size: {[(f.path, f.blob_size) for f in files]}")

        result = classify_files(
            files,
            self.config.patterns,
            self.threshold,
            self.attributes,
            self.text_probe,
            log=console.info,
        )
        lfs_files = flatten(result)

        if lfs_files:
            return self._report(pr_number, result, lfs_files)

        console.info("No large file(s) detected...")
        label_removed = self._clear_label(pr_number)
        return CheckOutcome(
            status=CheckStatus.PASSED, result=result, label_removed=label_removed
        )

    def ensure_label(self) -> None:
        """Create the warning label if the repository does not have it.

        Lookup failures other than a missing label are logged and ignored.
        """
        name = self.config.label_name
        try:
            label = self.annotator.get_label(name)
        except GitHubTransportError as e:
            console.error(f"getLabel error: {e}")
            return

        if label is None:
            console.info("No lfs warning label detected. Creating new label ...")
            self.annotator.create_label(
                name, self.config.label_color, self.config.label_description
            )
            console.info("LFS warning label created")

    def fetch_files(self, pr_number: int) -> list[ChangedFile]:
        """Changed files with their blob sizes.

        Removed files keep an unknown size and still go through the LFS checks.
        """
        pr_files = self.provider.list_changed_files(pr_number)
        kept_names = {
            f.path
            for f in remove_excluded(
                (ChangedFile(path=f.filename) for f in pr_files),
                self.config.exclusion_patterns,
                console.info,
            )
        }
        pr_files = [f for f in pr_files if f.filename in kept_names]

        def with_size(f: PRFile) -> ChangedFile:
            if f.status == "removed" or not f.sha:
                return ChangedFile(path=f.filename, patch=f.patch)
            size = self.provider.fetch_blob_size(f.sha)
            return ChangedFile(path=f.filename, blob_size=size, patch=f.patch)

        if not pr_files:
            return []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(with_size, pr_files))

    def _report(
        self, pr_number: int, result: ClassificationResult, lfs_files: list[str]
    ) -> CheckOutcome:
        console.info("Detected file(s) that should be in LFS: ")
        console.info("\n".join(lfs_files))

        body = format_as_markdown(result, self.threshold)
        with ThreadPoolExecutor(max_workers=2) as executor:
            label_future = executor.submit(
                self.annotator.add_label, pr_number, self.config.label_name
            )
            comment_future = executor.submit(self.annotator.post_comment, pr_number, body)
            label_future.result()
            comment_future.result()

        return CheckOutcome(
            status=CheckStatus.FAILED,
            lfs_files=lfs_files,
            result=result,
            comment_body=body,
        )

    def _clear_label(self, pr_number: int) -> bool:
        name = self.config.label_name
        if name not in self.annotator.list_labels(pr_number):
            return False
        self.annotator.remove_label(pr_number, name)
        console.info(f"label {name} removed")
        return True
