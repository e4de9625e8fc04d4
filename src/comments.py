#!/usr/bin/env python3
"""
Ticket comment formatting
"""

from models import CommentStyle, IssueUpdate


def format_terse_comment(update: IssueUpdate, ci_base_url: str, build_url: str, build_name: str) -> str:
    return f"{update.classification.value} [{ci_base_url}/{build_url} {build_name}]"


def format_detailed_comment(update: IssueUpdate, ci_base_url: str, build_url: str, build_name: str) -> str:
    """Terse comment followed by the commit messages that referenced the ticket"""
    return f"{update.classification.value} [{ci_base_url}/{build_url} {build_name}]:\n{update.commit_text}"


COMMENT_FORMATTERS = {
    CommentStyle.TERSE: format_terse_comment,
    CommentStyle.DETAILED: format_detailed_comment,
}


def create_comment(style: CommentStyle, update: IssueUpdate, ci_base_url: str, build) -> str:
    """Build the comment for a ticket update from the published build"""
    formatter = COMMENT_FORMATTERS[style]
    return formatter(update, ci_base_url.rstrip("/"), build.url, build.display_name)
