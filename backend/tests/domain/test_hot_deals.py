"""Tests for hot deals ranking."""
from decimal import Decimal

import pytest

from savrdeals.domain.hot_deals import (
    HOT_DEAL_MIN_DISCOUNT,
    count_likes,
    discount_percent,
    eligible_deal_ids,
    parse_price,
    rank_hot_deals,
)

pytestmark = pytest.mark.unit


LISTINGS = [
    {"id": 1, "price": 45, "old_price": 100},
    {"id": 2, "price": 50, "old_price": 100},
    {"id": 3, "price": 40, "old_price": 90},
]


def _likes(**counts: int) -> list[dict]:
    events = []
    for deal_id, count in counts.items():
        events.extend({"deal_id": int(deal_id.lstrip("d")), "user_id": f"u{i}"} for i in range(count))
    return events


class TestParsePrice:
    def test_numbers_and_numeric_strings(self):
        assert parse_price(45) == Decimal("45")
        assert parse_price(44.5) == Decimal("44.5")
        assert parse_price(" 1299.00 ") == Decimal("1299.00")

    @pytest.mark.parametrize("value", [None, "", "abc", "12abc", "NaN", "inf", True, [], {}])
    def test_non_numeric_is_none(self, value):
        assert parse_price(value) is None

    def test_float_nan_is_none(self):
        assert parse_price(float("nan")) is None


class TestDiscountPercent:
    def test_whole_number_discount(self):
        assert discount_percent(45, 100) == 55
        assert discount_percent(50, 100) == 50

    def test_rounds_to_nearest(self):
        # 50 / 90 = 55.55...%
        assert discount_percent(40, 90) == 56

    def test_half_rounds_up(self):
        assert discount_percent(44.5, 100) == 56
        assert discount_percent("45.5", "100") == 55

    def test_string_prices(self):
        assert discount_percent("2499", "7999") == 69

    def test_equal_prices_are_not_a_discount(self):
        assert discount_percent(100, 100) is None

    def test_price_increase_is_not_a_discount(self):
        assert discount_percent(120, 100) is None

    def test_malformed_prices(self):
        assert discount_percent("free", 100) is None
        assert discount_percent(10, None) is None

    def test_zero_old_price(self):
        assert discount_percent(-5, 0) is None

    def test_negative_price_is_not_a_discount(self):
        assert discount_percent(-10, 100) is None
        assert discount_percent("-1e30", 1) is None

    def test_extreme_magnitudes_return_none(self):
        assert discount_percent("1e-999999999", "1e999999999") is None
        assert discount_percent(0, "1e999") == 100


class TestCountLikes:
    def test_counts_per_deal(self):
        likes = [{"deal_id": 1}, {"deal_id": 3}, {"deal_id": 1}]
        assert count_likes(likes) == {1: 2, 3: 1}

    def test_no_likes(self):
        assert count_likes([]) == {}

    def test_unhashable_deal_ids_are_skipped(self):
        likes = [{"deal_id": [1]}, {"deal_id": {"id": 1}}, {"deal_id": 1}]
        assert count_likes(likes) == {1: 1}


class TestRankHotDeals:
    def test_threshold_is_inclusive(self):
        ranked = rank_hot_deals(LISTINGS, [])
        assert [d["id"] for d in ranked] == [1, 3]
        assert [d["discount_percent"] for d in ranked] == [55, 56]

    def test_threshold_constant(self):
        assert HOT_DEAL_MIN_DISCOUNT == 55

    def test_equal_likes_keep_input_order(self):
        ranked = rank_hot_deals(LISTINGS, _likes(d1=3, d3=3))
        assert [d["id"] for d in ranked] == [1, 3]
        assert [d["like_count"] for d in ranked] == [3, 3]

    def test_equal_likes_keep_reversed_input_order(self):
        ranked = rank_hot_deals(list(reversed(LISTINGS)), _likes(d1=3, d3=3))
        assert [d["id"] for d in ranked] == [3, 1]

    def test_sorted_by_likes_descending(self):
        assert [d["id"] for d in rank_hot_deals(LISTINGS, _likes(d1=5, d3=2))] == [1, 3]
        assert [d["id"] for d in rank_hot_deals(LISTINGS, _likes(d1=2, d3=5))] == [3, 1]

    def test_missing_likes_count_as_zero(self):
        ranked = rank_hot_deals(LISTINGS, _likes(d3=1))
        assert ranked[0]["id"] == 3
        assert ranked[1]["like_count"] == 0

    def test_likes_for_non_hot_deals_are_ignored(self):
        ranked = rank_hot_deals(LISTINGS, _likes(d2=10))
        assert 2 not in [d["id"] for d in ranked]

    def test_equal_price_excluded_regardless_of_likes(self):
        listings = [{"id": 7, "price": 100, "old_price": 100}]
        assert rank_hot_deals(listings, _likes(d7=50)) == []

    def test_non_numeric_price_excluded_without_error(self):
        listings = [{"id": 8, "price": "call us", "old_price": 100}, *LISTINGS]
        assert [d["id"] for d in rank_hot_deals(listings, [])] == [1, 3]

    def test_unpublished_listing_excluded(self):
        listings = [{"id": 9, "price": 10, "old_price": 100, "published": False}]
        assert rank_hot_deals(listings, []) == []

    def test_published_listing_kept(self):
        listings = [{"id": 9, "price": 10, "old_price": 100, "published": True}]
        assert rank_hot_deals(listings, [])[0]["discount_percent"] == 90

    def test_no_hot_deals_is_empty(self):
        assert rank_hot_deals([{"id": 2, "price": 50, "old_price": 100}], []) == []
        assert rank_hot_deals([], []) == []

    def test_original_fields_preserved_and_input_untouched(self):
        listings = [{"id": 1, "price": "45", "old_price": "100", "title": "Blender"}]
        ranked = rank_hot_deals(listings, [])
        assert ranked[0]["title"] == "Blender"
        assert ranked[0]["price"] == "45"
        assert "like_count" not in listings[0]

    def test_custom_threshold(self):
        assert [d["id"] for d in rank_hot_deals(LISTINGS, [], min_discount=50)] == [1, 2, 3]

    def test_same_input_same_output(self):
        likes = _likes(d1=1, d3=4)
        assert rank_hot_deals(LISTINGS, likes) == rank_hot_deals(LISTINGS, likes)

    def test_negative_price_excluded_without_error(self):
        listings = [{"id": 10, "price": "-1e30", "old_price": 1}]
        assert rank_hot_deals(listings, []) == []

    def test_unhashable_listing_id_excluded(self):
        listings = [
            {"id": [1], "price": 10, "old_price": 100},
            {"id": {"k": 2}, "price": 10, "old_price": 100},
            *LISTINGS,
        ]
        assert [d["id"] for d in rank_hot_deals(listings, [])] == [1, 3]

    def test_unhashable_like_deal_id_ignored(self):
        ranked = rank_hot_deals(LISTINGS, [{"deal_id": [1]}, {"deal_id": 3}])
        assert [(d["id"], d["like_count"]) for d in ranked] == [(3, 1), (1, 0)]


class TestEligibleDealIds:
    def test_only_hot_candidates(self):
        assert eligible_deal_ids(LISTINGS) == [1, 3]

    def test_empty(self):
        assert eligible_deal_ids([]) == []

    def test_unhashable_ids_excluded(self):
        listings = [{"id": [7], "price": 10, "old_price": 100}, *LISTINGS]
        assert eligible_deal_ids(listings) == [1, 3]
