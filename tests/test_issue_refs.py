#!/usr/bin/env python3
"""
Tests for ticket reference extraction
"""

import unittest
from dataclasses import dataclass, field
from typing import List, Optional
import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from issue_refs import collect_prior_issue_refs, extract_issue_refs, merge_issue_refs


@dataclass
class FakeBuild:
    result: str
    commit_messages: List[str] = field(default_factory=list)
    display_name: str = "CI #1"
    url: str = "owner/repo/actions/runs/1"
    previous_build: Optional["FakeBuild"] = None


class TestExtractIssueRefs(unittest.TestCase):
    """Test extraction of ticket references from commit messages"""

    def test_no_messages(self):
        self.assertEqual(extract_issue_refs([]), {})

    def test_no_references(self):
        result = extract_issue_refs(["Initial commit", "Fix typo in README", "issue 12"])
        self.assertEqual(result, {})

    def test_single_reference(self):
        result = extract_issue_refs(["fixes #42"])
        self.assertEqual(result, {42: "fixes #42"})

    def test_repeated_reference_in_one_message_is_recorded_once(self):
        """Test a message mentioning a ticket twice is joined with later messages only once"""
        messages = ["fixes #12 and #12 again", "see #12"]
        result = extract_issue_refs(messages)

        self.assertEqual(list(result), [12])
        self.assertEqual(result[12], "fixes #12 and #12 again\nsee #12")

    def test_multiple_tickets_in_one_message(self):
        result = extract_issue_refs(["refs #3, #4"])
        self.assertEqual(result, {3: "refs #3, #4", 4: "refs #3, #4"})

    def test_messages_joined_in_input_order(self):
        messages = ["second try for #8", "unrelated", "first try for #8"]
        result = extract_issue_refs(messages)
        self.assertEqual(result[8], "second try for #8\nfirst try for #8")

    def test_identical_messages_are_not_deduplicated(self):
        result = extract_issue_refs(["fix #5", "fix #5"])
        self.assertEqual(result[5], "fix #5\nfix #5")

    def test_reference_without_word_boundary(self):
        """Test a '#' glued to preceding text still counts as a reference"""
        result = extract_issue_refs(["text#123"])
        self.assertEqual(result, {123: "text#123"})

    def test_leading_zeros_parse_as_decimal(self):
        result = extract_issue_refs(["see #007 and #010"])
        self.assertEqual(sorted(result), [7, 10])

    def test_zero_is_not_a_ticket(self):
        self.assertEqual(extract_issue_refs(["#0 and #000"]), {})

    def test_hash_without_digits(self):
        self.assertEqual(extract_issue_refs(["# heading", "#abc", "C#"]), {})

    def test_ten_digit_ids_are_extracted(self):
        """Test ids beyond 32-bit range are kept; dispatch decides what to do with them"""
        result = extract_issue_refs(["see #9999999999"])
        self.assertEqual(list(result), [9999999999])

    def test_overlong_digit_runs_are_skipped(self):
        result = extract_issue_refs(["fix #12", "dump #" + "9" * 5000, "see #99999999999"])
        self.assertEqual(result, {12: "fix #12"})

    def test_leading_zeros_do_not_count_towards_length(self):
        result = extract_issue_refs(["see #00000000000042"])
        self.assertEqual(list(result), [42])

    def test_empty_messages_are_skipped(self):
        self.assertEqual(extract_issue_refs(["", None, "fix #1"]), {1: "fix #1"})


class TestMergeIssueRefs(unittest.TestCase):
    """Test merging of reference maps"""

    def test_merge_new_and_existing(self):
        target = {1: "a #1"}
        merge_issue_refs(target, {1: "b #1", 2: "c #2"})
        self.assertEqual(target, {1: "a #1\nb #1", 2: "c #2"})

    def test_merge_empty(self):
        target = {1: "a #1"}
        self.assertEqual(merge_issue_refs(target, {}), {1: "a #1"})


class TestCollectPriorIssueRefs(unittest.TestCase):
    """Test walking back through failing builds"""

    def test_no_previous_build(self):
        build = FakeBuild("success", ["fix #1"])
        self.assertEqual(collect_prior_issue_refs(build), {})

    def test_previous_build_succeeded(self):
        previous = FakeBuild("success", ["fix #1"])
        build = FakeBuild("success", ["fix #2"], previous_build=previous)
        self.assertEqual(collect_prior_issue_refs(build), {})

    def test_walk_stops_at_last_success(self):
        oldest = FakeBuild("failure", ["broke #9"])
        last_success = FakeBuild("success", ["done #8"], previous_build=oldest)
        build_a = FakeBuild("failure", ["try #5"], previous_build=last_success)
        build_b = FakeBuild("failure", ["retry #5 and #7"], previous_build=build_a)
        build_c = FakeBuild("success", ["fix #7"], previous_build=build_b)

        result = collect_prior_issue_refs(build_c)

        self.assertEqual(sorted(result), [5, 7])
        # Most recent failing build first
        self.assertEqual(result[5], "retry #5 and #7\ntry #5")
        self.assertEqual(result[7], "retry #5 and #7")

    def test_walk_to_start_of_history(self):
        first = FakeBuild("cancelled", ["start #1"])
        second = FakeBuild("failure", ["continue #1"], previous_build=first)
        build = FakeBuild("success", [], previous_build=second)

        self.assertEqual(collect_prior_issue_refs(build), {1: "continue #1\nstart #1"})

    def test_non_failure_results_are_included(self):
        previous = FakeBuild("timed_out", ["slow #4"])
        build = FakeBuild("success", [], previous_build=previous)
        self.assertEqual(collect_prior_issue_refs(build), {4: "slow #4"})


if __name__ == "__main__":
    unittest.main()
