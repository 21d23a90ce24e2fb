"""GitHub event context for the current workflow run."""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from lfs_warning.errors import LfsWarningError

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


class MissingContextError(LfsWarningError):
    """Raised when the run lacks the repository or pull request it needs."""


@dataclass
class EventContext:
    """What triggered this run."""

    event_name: str
    owner: str
    repo: str
    pr_number: int | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.event_name in PULL_REQUEST_EVENTS


def load_event_context(environ: Mapping[str, str]) -> EventContext:
    """Build the context from the variables the Actions runner sets."""
    event_name = environ.get("GITHUB_EVENT_NAME", "")
    repository = environ.get("GITHUB_REPOSITORY", "")
    if "/" not in repository:
        raise MissingContextError(
            f"GITHUB_REPOSITORY must be owner/repo, got {repository!r}"
        )
    owner, repo = repository.split("/", 1)

    context = EventContext(event_name=event_name, owner=owner, repo=repo)
    if not context.is_pull_request:
        return context

    payload = _read_payload(environ.get("GITHUB_EVENT_PATH"))
    number = (payload.get("pull_request") or {}).get("number")
    if number is None:
        raise MissingContextError("Could not get PR number")
    context.pr_number = int(number)
    return context


def _read_payload(event_path: str | None) -> dict:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        return {}
    with open(path) as f:
        return json.load(f) or {}
