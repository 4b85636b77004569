"""Shared fixtures for junction tests."""

import pytest

from junction.http.request import Request
from junction.http.response import Response


@pytest.fixture
def request_response() -> tuple[Request, Response]:
    """A bare GET / exchange, not attached to any transport."""
    return Request(method="GET", url="/"), Response()
