"""GitHub client for pull request files, labels and comments."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from github import Github, GithubException, UnknownObjectException

from lfs_warning.errors import LfsWarningError

T = TypeVar("T")


class GitHubTransportError(LfsWarningError):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


@dataclass
class PRFile:
    """A file entry from the pull request's file list."""

    filename: str
    sha: str | None
    status: str
    patch: str | None


@dataclass
class Label:
    """A repository label."""

    name: str
    color: str
    description: str | None = None


class GitHubClient:
    """Client for one repository on the GitHub API."""

    def __init__(self, token: str, owner: str, repo: str):
        """Initialize with GitHub token and target repository."""
        self.client = Github(token)
        self.owner = owner
        self.repo = repo
        self._repo_obj = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def _call(self, action: str, fn: Callable[[], T]) -> T:
        """Run an API call, wrapping failures in GitHubTransportError."""
        try:
            return fn()
        except GithubException as e:
            raise GitHubTransportError(
                f"GitHub API error while trying to {action} on {self.full_name} "
                f"({e.status}): {e.data}",
                status=e.status,
            ) from e

    def _repository(self):
        if self._repo_obj is None:
            self._repo_obj = self._call(
                "load repository", lambda: self.client.get_repo(self.full_name)
            )
        return self._repo_obj

    def list_changed_files(self, pr_number: int) -> list[PRFile]:
        """List every file in the pull request, across all pages."""

        def fetch() -> list[PRFile]:
            pr = self._repository().get_pull(pr_number)
            return [
                PRFile(filename=f.filename, sha=f.sha, status=f.status, patch=f.patch)
                for f in pr.get_files()
            ]

        return self._call(f"list files of PR #{pr_number}", fetch)

    def fetch_blob_size(self, sha: str) -> int | None:
        """Size in bytes of a blob, or None when GitHub does not know it."""
        try:
            return self._call(
                f"fetch blob {sha}", lambda: self._repository().get_git_blob(sha).size
            )
        except GitHubTransportError as e:
            if e.status == 404:
                return None
            raise

    def get_label(self, name: str) -> Label | None:
        """Look up a repository label; None if it does not exist."""
        try:
            label = self._repository().get_label(name)
        except UnknownObjectException:
            return None
        except GithubException as e:
            raise GitHubTransportError(
                f"GitHub API error while trying to get label {name!r} ({e.status}): {e.data}",
                status=e.status,
            ) from e
        return Label(name=label.name, color=label.color, description=label.description)

    def create_label(self, name: str, color: str, description: str) -> Label:
        label = self._call(
            f"create label {name!r}",
            lambda: self._repository().create_label(name, color, description),
        )
        return Label(name=label.name, color=label.color, description=label.description)

    def add_label(self, pr_number: int, name: str) -> None:
        self._call(
            f"add label {name!r} to #{pr_number}",
            lambda: self._repository().get_issue(pr_number).add_to_labels(name),
        )

    def remove_label(self, pr_number: int, name: str) -> None:
        self._call(
            f"remove label {name!r} from #{pr_number}",
            lambda: self._repository().get_issue(pr_number).remove_from_labels(name),
        )

    def list_labels(self, pr_number: int) -> set[str]:
        return self._call(
            f"list labels of #{pr_number}",
            lambda: {
                label.name for label in self._repository().get_issue(pr_number).get_labels()
            },
        )

    def post_comment(self, pr_number: int, body: str) -> str:
        """Post a comment on a PR. Returns the comment URL."""
        comment = self._call(
            f"comment on #{pr_number}",
            lambda: self._repository().get_issue(pr_number).create_comment(body),
        )
        return comment.html_url
