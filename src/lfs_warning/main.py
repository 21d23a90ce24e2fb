"""CLI entrypoint for the LFS warning check."""

import argparse
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from lfs_warning.analysis.size_limit import parse_size_limit
from lfs_warning.check import FAILURE_MESSAGE, CheckOutcome, LfsCheck
from lfs_warning.config import DEFAULT_CONFIG_PATH, Config, apply_action_inputs, load_config
from lfs_warning.context import EventContext, MissingContextError, load_event_context
from lfs_warning.errors import LfsWarningError
from lfs_warning.github_client import GitHubClient
from lfs_warning.output import console
from lfs_warning.probes import GitAttributeProber, build_text_probe


def run_check(
    config: Config,
    context: EventContext,
    github_client: GitHubClient,
    workdir: Path,
) -> CheckOutcome:
    """Run the check against the working tree at ``workdir``."""
    check = LfsCheck(
        config=config,
        provider=github_client,
        annotator=github_client,
        attributes=GitAttributeProber(workdir),
        text_probe=build_text_probe(config.binary_probe, workdir),
    )
    return check.run(context)


def build_github_client(environ: Mapping[str, str], owner: str, repo: str) -> GitHubClient:
    """Create a client from the action token input or GITHUB_TOKEN.

    Raises:
        ValueError: If no token is configured.
    """
    github_token = environ.get("INPUT_TOKEN") or environ.get("GITHUB_TOKEN")
    if not github_token:
        raise ValueError("Either the token input or GITHUB_TOKEN is required")
    return GitHubClient(github_token, owner, repo)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    from dotenv import load_dotenv
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Flag pull request files that should be tracked in Git LFS",
        prog="lfs-warning",
    )
    parser.add_argument("--repo", help="GitHub repo (owner/repo), defaults to GITHUB_REPOSITORY")
    parser.add_argument("--pr", type=int, help="PR number, defaults to the triggering event")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config file path")
    parser.add_argument("--workdir", default=".", help="Checked out working tree")
    parser.add_argument("--filesizelimit", help="Size limit such as 500kb or 10mb")

    args = parser.parse_args(argv)
    environ = dict(os.environ)

    if args.repo and "/" not in args.repo:
        parser.error("--repo must be owner/repo")

    try:
        if args.repo:
            environ["GITHUB_REPOSITORY"] = args.repo

        if args.pr is not None:
            repository = environ.get("GITHUB_REPOSITORY", "")
            if "/" not in repository:
                raise MissingContextError("--pr needs --repo or GITHUB_REPOSITORY")
            owner, repo = repository.split("/", 1)
            context = EventContext(
                event_name="pull_request", owner=owner, repo=repo, pr_number=args.pr
            )
        else:
            context = load_event_context(environ)

        config = apply_action_inputs(load_config(Path(args.config)), environ)
        if args.filesizelimit:
            config.file_size_limit = args.filesizelimit
        parse_size_limit(config.file_size_limit)
        config.patterns.validate()

        github_client = build_github_client(environ, context.owner, context.repo)
        outcome = run_check(config, context, github_client, Path(args.workdir))
    except (LfsWarningError, ValueError) as e:
        console.set_failed(str(e))
        return 1
    except Exception as e:
        console.set_failed(f"Unexpected error: {e}")
        return 1

    console.set_output("lfsFiles", outcome.lfs_files)
    if outcome.failed:
        console.set_failed(FAILURE_MESSAGE)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
