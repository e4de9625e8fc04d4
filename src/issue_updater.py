#!/usr/bin/env python3
"""
Publishes a finished build to the Trac tickets its commits reference
"""

import xmlrpc.client
from typing import Dict, List, Optional
from xml.parsers.expat import ExpatError

import requests

from build_log import BuildLog
from comments import create_comment as format_comment
from constants import SUCCESS_RESULT
from issue_refs import collect_prior_issue_refs, extract_issue_refs
from models import IssueClassification, IssueUpdate, TracSettings
from trac_client import TracClient, is_valid_rpc_url

# Failures of a single ticket update that must not stop the others
TICKET_UPDATE_ERRORS = (xmlrpc.client.Error, requests.RequestException, ExpatError, OverflowError)


class TracIssueUpdater:
    """Updates the Trac tickets referenced by a successful build.

    Tickets referenced by the build's own commits are "successful"; tickets
    referenced only by the failing builds since the last success are
    "corrected". An instance services a single build, create a new one for
    each publish.
    """

    def __init__(self, build, settings: TracSettings, ci_base_url: Optional[str],
                 log: Optional[BuildLog] = None):
        self.build = build
        self.settings = settings
        self.ci_base_url = ci_base_url
        self.log = log or BuildLog()
        self.successful_refs: Dict[int, str] = {}
        self.corrected_refs: Dict[int, str] = {}

    def update_issues(self) -> int:
        """Comment on every referenced ticket, returning how many were updated"""
        if self.build.result != SUCCESS_RESULT:
            return 0

        self.successful_refs = extract_issue_refs(self.build.commit_messages)
        self.corrected_refs = collect_prior_issue_refs(self.build)

        # Only update once, a direct reference supersedes a prior one
        for issue in self.successful_refs:
            self.corrected_refs.pop(issue, None)

        updates = self.classify_issues()
        if not updates:
            return 0

        self.log.info(
            f"📝 Updating {len(updates)} Trac issue(s): "
            f"server={self.settings.rpc_url}, user={self.settings.username}"
        )

        if not self._can_dispatch():
            return 0

        client = TracClient(
            self.settings.rpc_url,
            self.settings.username,
            self.settings.password,
            self.settings.timeout,
        )
        try:
            return sum(1 for update in updates if self._update_issue(client, update))
        finally:
            client.close()

    def classify_issues(self) -> List[IssueUpdate]:
        updates = [
            IssueUpdate(issue, IssueClassification.SUCCESSFUL, text)
            for issue, text in self.successful_refs.items()
        ]
        updates.extend(
            IssueUpdate(issue, IssueClassification.CORRECTED, text)
            for issue, text in self.corrected_refs.items()
        )
        return updates

    def create_comment(self, update: IssueUpdate) -> str:
        return format_comment(self.settings.comment_style, update, self.ci_base_url, self.build)

    def _can_dispatch(self) -> bool:
        if not self.ci_base_url:
            self.log.warning("CI base URL is not set, please configure it to enable issue updating.")
            return False
        if not self.settings.rpc_url:
            self.log.warning("Trac XML-RPC URL is not set, please configure it to enable issue updating.")
            return False
        if not is_valid_rpc_url(self.settings.rpc_url):
            self.log.warning(
                f"Trac XML-RPC URL '{self.settings.rpc_url}' is not a valid http(s) URL, "
                "skipping issue updates."
            )
            return False
        return True

    def _update_issue(self, client: TracClient, update: IssueUpdate) -> bool:
        label = update.classification.label
        self.log.info(f"🔗 Updating {label} issue #{update.issue_id} with {self.build.display_name}")

        try:
            client.update_ticket(update.issue_id, self.create_comment(update))
        except TICKET_UPDATE_ERRORS as e:
            self.log.error(f"Failed to update {label} issue #{update.issue_id}: {e}")
            return False

        return True
