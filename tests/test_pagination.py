"""Tests for Relay connection helpers."""

from src.services.pagination import (
    build_page_variables,
    page_result,
    title_filter,
    unwrap_connection,
    unwrap_connections,
)


class TestBuildPageVariables:
    """Test suite for cursor variable construction."""

    def test_first_page(self):
        assert build_page_variables(10) == {"first": 10}

    def test_forward_with_after(self):
        assert build_page_variables(5, after="abc") == {"first": 5, "after": "abc"}

    def test_backward_with_before(self):
        assert build_page_variables(5, before="xyz") == {"last": 5, "before": "xyz"}

    def test_before_wins_over_after(self):
        """Mixed directions page backwards and drop the after cursor."""
        variables = build_page_variables(5, after="abc", before="xyz")

        assert variables == {"last": 5, "before": "xyz"}

    def test_empty_cursors_ignored(self):
        assert build_page_variables(3, after="", before="") == {"first": 3}


class TestTitleFilter:

    def test_wraps_in_wildcards(self):
        assert title_filter("coffee") == "title:*coffee*"

    def test_empty_means_no_filter(self):
        assert title_filter(None) is None
        assert title_filter("") is None


class TestUnwrap:
    """Test suite for flattening edges/node envelopes."""

    def test_unwrap_connection(self, connection):
        assert unwrap_connection(connection([{"id": 1}, {"id": 2}])) == [{"id": 1}, {"id": 2}]

    def test_unwrap_none(self):
        assert unwrap_connection(None) == []

    def test_unwrap_nested_connections(self, connection):
        order = {
            "id": "gid://shopify/Order/1",
            "lineItems": connection([{"id": "li-1", "title": "Grinder"}]),
            "fulfillments": [
                {
                    "id": "f-1",
                    "fulfillmentLineItems": connection(
                        [{"id": "fli-1", "lineItem": {"id": "li-1"}}]
                    ),
                }
            ],
            "customer": {"id": "c-1"},
        }

        result = unwrap_connections(order)

        assert result["lineItems"] == [{"id": "li-1", "title": "Grinder"}]
        assert result["fulfillments"][0]["fulfillmentLineItems"] == [
            {"id": "fli-1", "lineItem": {"id": "li-1"}}
        ]
        assert result["customer"] == {"id": "c-1"}

    def test_scalars_untouched(self):
        assert unwrap_connections({"tags": ["a", "b"], "note": None}) == {
            "tags": ["a", "b"],
            "note": None,
        }


class TestPageResult:

    def test_splits_nodes_cursors_and_page_info(self, connection, sample_page_info):
        conn = connection(
            [{"id": 1, "variants": connection([{"id": "v1"}])}, {"id": 2}],
            cursors=["c1", "c2"],
            page_info=sample_page_info,
        )

        nodes, page_info, cursors = page_result(conn)

        assert nodes == [{"id": 1, "variants": [{"id": "v1"}]}, {"id": 2}]
        assert cursors == ["c1", "c2"]
        assert page_info == sample_page_info

    def test_missing_connection(self):
        nodes, page_info, cursors = page_result(None)

        assert nodes == []
        assert cursors == []
        assert page_info["hasNextPage"] is False
        assert page_info["endCursor"] is None
