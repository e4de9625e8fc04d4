#!/usr/bin/env python3
"""
GitHub client utilities
"""

import json
import os

from typing import List, Optional
from github import Github, GithubException
from build_log import BuildLog


class RunHistory:
    """Lazily paged list of runs older than the published one"""

    def __init__(self, runs):
        self._runs = iter(runs)
        self._loaded = []

    def get(self, index: int):
        while len(self._loaded) <= index:
            try:
                self._loaded.append(next(self._runs))
            except StopIteration:
                return None
        return self._loaded[index]


class GitHubBuild:
    """A workflow run seen as a build with a link to its predecessor"""

    def __init__(self, client: "GitHubClient", run, history: RunHistory, index: int = -1,
                 result: Optional[str] = None):
        self.client = client
        self.run = run
        self.history = history
        self.index = index
        self._result = result
        self._previous = None
        self._commit_messages = None

    @property
    def result(self) -> Optional[str]:
        return self._result or self.run.conclusion

    @property
    def display_name(self) -> str:
        return f"{self.run.name} #{self.run.run_number}"

    @property
    def url(self) -> str:
        return f"{self.client.repository}/actions/runs/{self.run.id}"

    @property
    def previous_build(self) -> Optional["GitHubBuild"]:
        if self._previous is None:
            run = self.history.get(self.index + 1)
            if run is None:
                return None
            self._previous = GitHubBuild(self.client, run, self.history, self.index + 1)
        return self._previous

    @property
    def commit_messages(self) -> List[str]:
        """Messages of the commits built since the previous run, oldest first"""
        if self._commit_messages is None:
            previous = self.previous_build
            if previous is None:
                self._commit_messages = self._head_commit_message()
            else:
                self._commit_messages = self.client.get_commit_messages(
                    previous.run.head_sha, self.run.head_sha, fallback=self._head_commit_message
                )
        return self._commit_messages

    def _head_commit_message(self) -> List[str]:
        head_commit = self.run.head_commit
        if head_commit is None or not head_commit.message:
            return []
        return [head_commit.message]


class GitHubClient:
    def __init__(self, github_token: str, repository: str, log: Optional[BuildLog] = None):
        self.github_token = github_token
        self.repository = repository
        self.github = Github(self.github_token)
        self.log = log or BuildLog()
        self.event_name = os.getenv("GITHUB_EVENT_NAME")
        self._repo = None

    @property
    def repo(self):
        if self._repo is None:
            self._repo = self.github.get_repo(self.repository)
        return self._repo

    def get_triggering_run_id(self) -> Optional[int]:
        """Get the id of the workflow run to publish"""
        # For workflow_run events, publish the run that triggered this workflow
        if self.event_name == "workflow_run":
            event_path = os.getenv("GITHUB_EVENT_PATH")
            if event_path and os.path.exists(event_path):
                with open(event_path, 'r') as f:
                    event_data = json.load(f)
                run_id = event_data.get("workflow_run", {}).get("id")
                if run_id:
                    return int(run_id)

        run_id = os.getenv("GITHUB_RUN_ID")
        return int(run_id) if run_id else None

    def get_build(self, run_id: int, result: Optional[str] = None) -> GitHubBuild:
        """Get a workflow run and its history of completed runs on the same branch"""
        run = self.repo.get_workflow_run(int(run_id))
        workflow = self.repo.get_workflow(run.workflow_id)
        runs = workflow.get_runs(branch=run.head_branch, status="completed")

        older_runs = (r for r in runs if r.id != run.id and r.run_number < run.run_number)
        return GitHubBuild(self, run, RunHistory(older_runs), result=result)

    def get_commit_messages(self, base_sha: str, head_sha: str, fallback=None) -> List[str]:
        """Get commit messages between two revisions, oldest first"""
        if base_sha == head_sha:
            return []

        try:
            comparison = self.repo.compare(base_sha, head_sha)
            return [commit.commit.message for commit in comparison.commits]
        except GithubException as e:
            self.log.warning(f"Could not compare {base_sha[:8]}...{head_sha[:8]}: {e}")
            return fallback() if fallback else []
