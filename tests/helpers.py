"""Assertion helpers for Problem Details responses."""

from httpx import Response


def error_code(response: Response) -> str:
    """The machine-readable code at the end of the problem ``type`` URI."""
    return response.json()["type"].rsplit("/", 1)[-1]
