#!/usr/bin/env python3
"""
Data models for the Trac publisher
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from constants import CORRECTED_ISSUE_MESSAGE, DEFAULT_RPC_TIMEOUT, SUCCESSFUL_ISSUE_MESSAGE


class IssueClassification(Enum):
    """How a ticket relates to the build being published"""
    SUCCESSFUL = SUCCESSFUL_ISSUE_MESSAGE
    CORRECTED = CORRECTED_ISSUE_MESSAGE

    @property
    def label(self) -> str:
        return self.name.lower()


class CommentStyle(Enum):
    TERSE = "terse"
    DETAILED = "detailed"

    @classmethod
    def from_flag(cls, detailed: bool) -> "CommentStyle":
        return cls.DETAILED if detailed else cls.TERSE


@dataclass
class TracSettings:
    """Connection and formatting settings for the Trac instance"""
    rpc_url: Optional[str]
    username: Optional[str] = None
    password: Optional[str] = None
    comment_style: CommentStyle = CommentStyle.TERSE
    timeout: int = DEFAULT_RPC_TIMEOUT


@dataclass
class IssueUpdate:
    """A single ticket comment to post"""
    issue_id: int
    classification: IssueClassification
    commit_text: str = ""  # Commit messages that referenced the ticket
