#!/usr/bin/env python3
"""
Ticket reference extraction from commit messages and build history
"""

from typing import Dict, Iterable

from constants import ISSUE_REFERENCE_PATTERN, MAX_ISSUE_ID_DIGITS, SUCCESS_RESULT


def extract_issue_refs(messages: Iterable[str]) -> Dict[int, str]:
    """Map each referenced ticket id to the messages that mention it.

    A message is recorded once per ticket it mentions, however many times it
    repeats the reference. Messages for the same ticket are joined with
    newlines in the order they are given. Ids of zero or with more than
    MAX_ISSUE_ID_DIGITS significant digits are skipped. Returns an empty dict
    when nothing is referenced.
    """
    referenced = {}

    for message in messages:
        if not message:
            continue

        seen = set()
        for match in ISSUE_REFERENCE_PATTERN.finditer(message):
            digits = match.group(1).lstrip("0")
            if not digits or len(digits) > MAX_ISSUE_ID_DIGITS:
                continue
            issue = int(digits)
            if issue in seen:
                continue
            seen.add(issue)
            referenced.setdefault(issue, []).append(message)

    return {issue: "\n".join(texts) for issue, texts in referenced.items()}


def merge_issue_refs(target: Dict[int, str], refs: Dict[int, str]) -> Dict[int, str]:
    """Append refs into target, newline-joining text for tickets already present"""
    for issue, text in refs.items():
        if issue in target:
            target[issue] = f"{target[issue]}\n{text}"
        else:
            target[issue] = text
    return target


def collect_prior_issue_refs(build) -> Dict[int, str]:
    """Collect ticket references from the failing builds before this one.

    Walks back from the build's predecessor until the last successful build
    (excluded) or the start of history. Most recent builds come first in the
    accumulated text.
    """
    prior_refs = {}

    prior_build = build.previous_build
    while prior_build is not None and prior_build.result != SUCCESS_RESULT:
        merge_issue_refs(prior_refs, extract_issue_refs(prior_build.commit_messages))
        prior_build = prior_build.previous_build

    return prior_refs
