#!/usr/bin/env python3
"""
Trac Publisher - links GitHub Actions builds to the Trac tickets their commits reference
"""

import os
import sys
from typing import Optional
from build_log import BuildLog
from github_client import GitHubClient
from issue_updater import TracIssueUpdater
from models import CommentStyle, TracSettings


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("true", "yes", "1", "on")


class TracPublisher:
    """Main class for Trac publisher functionality"""

    def __init__(self):
        self.github_token = os.getenv("INPUT_GITHUB_TOKEN")
        self.repository = os.getenv("GITHUB_REPOSITORY")
        self.run_id = os.getenv("INPUT_RUN_ID") or None
        self.build_result = os.getenv("INPUT_BUILD_RESULT") or None

        # Base URL for build links; GitHub sets GITHUB_SERVER_URL on every runner
        self.ci_base_url = os.getenv("INPUT_CI_BASE_URL") or os.getenv("GITHUB_SERVER_URL") or None

        self.settings = TracSettings(
            rpc_url=os.getenv("INPUT_TRAC_RPC_URL") or None,
            username=os.getenv("INPUT_TRAC_USERNAME") or None,
            password=os.getenv("INPUT_TRAC_PASSWORD") or None,
            comment_style=CommentStyle.from_flag(_as_bool(os.getenv("INPUT_DETAILED_COMMENTS"))),
        )

        self.log = BuildLog()

        if not all([self.github_token, self.repository]):
            raise ValueError("Missing required environment variables")

        self.github = GitHubClient(self.github_token, self.repository, self.log)

    def run(self) -> None:
        """Main execution method"""
        print("🔍 Trac publisher starting...")

        run_id = self.run_id or self.github.get_triggering_run_id()
        if not run_id:
            raise ValueError("Could not determine the workflow run to publish")

        build = self.github.get_build(run_id, result=self.build_result)
        print(f"🏗️  Publishing {build.display_name} (result: {build.result})")

        # The run has no conclusion yet when the action is one of its own jobs
        if build.result is None:
            self.log.warning(
                f"{build.display_name} has not finished, so no tickets will be updated. "
                "Pass build_result (e.g. the result of the jobs it needs) to publish it."
            )

        updater = TracIssueUpdater(build, self.settings, self.ci_base_url, self.log)
        updated = updater.update_issues()

        print(f"✅ Updated {updated} Trac issue(s)")


def main():
    """Entry point for Trac publisher"""
    try:
        publisher = TracPublisher()
        publisher.run()
    except Exception as e:
        print(f"❌ Trac publisher failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
