"""Unit tests for the response envelope."""

from invitely.domain.value import PageRequest
from invitely.interface.api.envelope import ApiResponse, failure, ok, paginated


def test_single_payload_has_no_meta():
    body = ok({"id": "1"}).model_dump(by_alias=True)

    assert body == {"success": True, "data": {"id": "1"}, "error": None}


def test_paginated_meta_uses_camel_case_total_pages():
    body = paginated([1, 2], PageRequest(page=1, limit=2), total=5).model_dump(
        by_alias=True
    )

    assert body["data"] == [1, 2]
    assert body["meta"] == {"page": 1, "limit": 2, "total": 5, "totalPages": 3}


def test_empty_page():
    body = paginated([], PageRequest(), total=0).model_dump(by_alias=True)

    assert body["meta"]["totalPages"] == 0


def test_failure_body():
    assert failure("Invitation not found") == {
        "success": False,
        "data": None,
        "error": "Invitation not found",
    }
    assert ApiResponse(success=False, error="x").model_dump()["data"] is None
