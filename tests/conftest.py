"""Shared test fixtures and configuration."""

from dataclasses import dataclass, field

import pytest

from lfs_warning.github_client import Label, PRFile


@dataclass
class FakeAttributes:
    """Attribute prober answering from a set of LFS-filtered paths."""

    lfs_paths: set = field(default_factory=set)
    calls: list = field(default_factory=list)

    def is_lfs_filtered(self, path: str) -> bool:
        self.calls.append(path)
        return path in self.lfs_paths


@dataclass
class FakeTextProbe:
    """Text probe answering from a set of binary paths."""

    binary_paths: set = field(default_factory=set)
    calls: list = field(default_factory=list)

    def looks_binary(self, path: str) -> bool:
        self.calls.append(path)
        return path in self.binary_paths


@dataclass
class FakeGitHub:
    """In-memory stand-in for the GitHub client."""

    files: list = field(default_factory=list)
    blob_sizes: dict = field(default_factory=dict)
    repo_labels: dict = field(default_factory=dict)
    pr_labels: set = field(default_factory=set)
    comments: list = field(default_factory=list)
    created_labels: list = field(default_factory=list)
    removed_labels: list = field(default_factory=list)

    def list_changed_files(self, pr_number: int) -> list:
        return list(self.files)

    def fetch_blob_size(self, sha: str):
        return self.blob_sizes.get(sha)

    def get_label(self, name: str):
        return self.repo_labels.get(name)

    def create_label(self, name: str, color: str, description: str):
        label = Label(name=name, color=color, description=description)
        self.repo_labels[name] = label
        self.created_labels.append(label)
        return label

    def add_label(self, pr_number: int, name: str) -> None:
        self.pr_labels.add(name)

    def remove_label(self, pr_number: int, name: str) -> None:
        self.pr_labels.discard(name)
        self.removed_labels.append(name)

    def list_labels(self, pr_number: int) -> set:
        return set(self.pr_labels)

    def post_comment(self, pr_number: int, body: str) -> str:
        self.comments.append(body)
        return f"https://github.com/owner/repo/pull/{pr_number}#issuecomment-{len(self.comments)}"


def pr_file(filename: str, sha: str | None = None, patch: str | None = None,
            status: str = "added") -> PRFile:
    return PRFile(filename=filename, sha=sha or f"sha-{filename}", status=status, patch=patch)


@pytest.fixture
def attributes():
    return FakeAttributes()


@pytest.fixture
def text_probe():
    return FakeTextProbe()


@pytest.fixture
def fake_github():
    return FakeGitHub()
