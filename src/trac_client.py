#!/usr/bin/env python3
"""
Trac XML-RPC client
"""

import xmlrpc.client
from typing import Optional
from urllib.parse import urlparse

import requests

from constants import DEFAULT_RPC_TIMEOUT, TICKET_UPDATE_METHOD


def is_valid_rpc_url(url: Optional[str]) -> bool:
    """Check that the url can be used as an XML-RPC endpoint"""
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class RequestsTransport(xmlrpc.client.Transport):
    """XML-RPC transport that posts through a requests session"""

    def __init__(self, session: requests.Session, url: str, timeout: int = DEFAULT_RPC_TIMEOUT):
        super().__init__()
        self.session = session
        self.url = url
        self.timeout = timeout

    def request(self, host, handler, request_body, verbose=False):
        response = self.session.post(
            self.url,
            data=request_body,
            headers={"Content-Type": "text/xml"},
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise xmlrpc.client.ProtocolError(
                self.url, response.status_code, response.reason, dict(response.headers)
            )

        parser, unmarshaller = self.getparser()
        parser.feed(response.content)
        parser.close()
        return unmarshaller.close()


class TracClient:
    """Client for the Trac XML-RPC plugin"""

    def __init__(self, rpc_url: str, username: Optional[str] = None, password: Optional[str] = None,
                 timeout: int = DEFAULT_RPC_TIMEOUT):
        self.rpc_url = rpc_url
        self.username = username
        self.session = requests.Session()
        if username:
            self.session.auth = (username, password or "")
        self.transport = RequestsTransport(self.session, rpc_url, timeout)
        self.server = xmlrpc.client.ServerProxy(rpc_url, transport=self.transport)

    def update_ticket(self, ticket_id: int, comment: str):
        """Append a comment to a ticket without changing its fields.

        Raises xmlrpc.client.Error, requests.RequestException or
        ExpatError when the call fails, and OverflowError when the ticket id
        does not fit an XML-RPC integer.
        """
        update = getattr(self.server, TICKET_UPDATE_METHOD)
        return update(ticket_id, comment, {}, False)

    def close(self) -> None:
        self.session.close()
