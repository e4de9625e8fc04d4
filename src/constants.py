#!/usr/bin/env python3
"""
Constants for the Trac publisher action
"""

import re

# Ticket reference in a commit message, e.g. "fixes #123"
ISSUE_REFERENCE_PATTERN = re.compile(r"#(\d+)")

# Longest digit run treated as a ticket id; XML-RPC integers are 32-bit
MAX_ISSUE_ID_DIGITS = 10

# Build result that ends a streak of failing builds
SUCCESS_RESULT = "success"

# Comment prefixes posted to Trac tickets
SUCCESSFUL_ISSUE_MESSAGE = "Referenced in build"
CORRECTED_ISSUE_MESSAGE = "Referenced in unsuccessful builds prior to"

# Trac XML-RPC method used to append a ticket comment
TICKET_UPDATE_METHOD = "ticket.update"

# Seconds to wait on a single Trac request
DEFAULT_RPC_TIMEOUT = 60
