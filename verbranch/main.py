"""verbranch entry point.

Reads action inputs (INPUT_* env, optional YAML config), creates or updates
the versioning branch and its pull request, and writes step outputs. Any
failure is reported once as an error annotation with exit status 1.
Usage: verbranch [--config PATH] [--check].
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from verbranch.adapters.github import GitHubAdapter
from verbranch.config import AppConfig, load_config
from verbranch.errors import InvalidInputError
from verbranch.logging import VerbranchLogging
from verbranch.outputs import set_failed, write_outputs
from verbranch.services.pipeline import PipelineResult, run_pipeline

LOG = logging.getLogger("verbranch.main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="verbranch",
        description="Create a semantic versioning branch and its pull request",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Optional YAML config file (inputs, github, logging sections)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def run(config: AppConfig) -> PipelineResult:
    """Run the pipeline against GitHub with the resolved token and repository."""
    token = config.token_resolved
    repo = config.repository_resolved
    if not token:
        raise InvalidInputError("Must provide github-token.")
    if not repo or "/" not in repo:
        raise InvalidInputError(f"Invalid repository: {repo or ''}, expected owner/name.")

    inputs = config.inputs
    LOG.info("repository: %s", repo)
    LOG.info("base-branch: %s", inputs.base_branch or "")
    LOG.info("version-level: %s", inputs.version_level.value if inputs.version_level else "")
    LOG.info("name-prefix: %s", inputs.name_prefix)
    LOG.info("pre-id: %s", inputs.pre_id)
    LOG.info("custom-version: %s", inputs.custom_version)

    adapter = GitHubAdapter(token=token, api_url=config.github.api_url)
    return run_pipeline(adapter, repo, inputs)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, run the pipeline, write outputs or the failure."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        VerbranchLogging(config.logging).setup()
        if args.check:
            print("Config OK:", config.repository_resolved or "", config.inputs.base_branch or "")
            return 0
        result = run(config)
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return set_failed(str(e))

    write_outputs(result.as_outputs(), output_file=os.environ.get("GITHUB_OUTPUT"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
