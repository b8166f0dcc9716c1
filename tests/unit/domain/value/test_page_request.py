"""Unit tests for PageRequest clamping."""

import pytest

from invitely.domain.value import PageRequest


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (None, None, (1, 10)),
        (3, 25, (3, 25)),
        (0, 500, (1, 100)),
        (-4, 0, (1, 1)),
    ],
)
def test_clamp(page, limit, expected):
    request = PageRequest.clamp(page, limit)

    assert (request.page, request.limit) == expected


def test_clamp_uses_default_limit():
    assert PageRequest.clamp(None, None, default_limit=20).limit == 20


def test_offset_and_total_pages():
    request = PageRequest(page=3, limit=10)

    assert request.offset == 20
    assert request.total_pages(0) == 0
    assert request.total_pages(21) == 3
    assert request.total_pages(30) == 3
