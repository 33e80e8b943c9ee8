from pricewise.domain.models import AggregationPolicy
from pricewise.engine.aggregator import (
    DiscountAggregator,
    discount_cap,
    filter_exclusive_groups,
    select_best_one,
)

from conftest import line


def amounts(result):
    return [d.amount for d in result.discounts]


class TestPassThrough:
    def test_no_cap_keeps_amounts(self):
        result = DiscountAggregator().aggregate(144000, [line(10080), line(14400)])
        assert amounts(result) == [10080, 14400]
        assert result.subtotal == 144000
        assert result.total == 119520

    def test_cap_above_raw_total_keeps_amounts(self):
        policy = AggregationPolicy(max_discount_rate=0.3)
        result = DiscountAggregator(policy).aggregate(144000, [line(10080), line(14400)])
        assert amounts(result) == [10080, 14400]
        assert result.total == 119520

    def test_no_candidates(self):
        result = DiscountAggregator(AggregationPolicy(max_discount_rate=0.1)).aggregate(5000, [])
        assert result.discounts == ()
        assert result.total == 5000


class TestCap:
    def test_discount_cap(self):
        assert discount_cap(144000, 0.1) == 14400
        assert discount_cap(999, 0.1) == 99
        assert discount_cap(144000, None) is None

    def test_exact_proportional_redistribution(self):
        policy = AggregationPolicy(max_discount_rate=0.3)
        result = DiscountAggregator(policy).aggregate(1000, [line(600), line(400)])
        assert amounts(result) == [180, 120]
        assert result.total == 700

    def test_lossy_redistribution_undershoots_cap(self):
        policy = AggregationPolicy(max_discount_rate=0.1)
        result = DiscountAggregator(policy).aggregate(1000, [line(100), line(100), line(100)])
        assert amounts(result) == [33, 33, 33]
        assert result.discount_total == 99
        assert result.total == 901

    def test_capped_end_to_end_numbers(self):
        policy = AggregationPolicy(max_discount_rate=0.1)
        result = DiscountAggregator(policy).aggregate(144000, [line(10080), line(14400)])
        assert amounts(result) == [5929, 8470]
        assert result.total == 129601

    def test_zero_rate_scales_lines_to_zero(self):
        policy = AggregationPolicy(max_discount_rate=0.0)
        result = DiscountAggregator(policy).aggregate(1000, [line(100, "a"), line(50, "b")])
        assert [(d.label, d.amount) for d in result.discounts] == [("a", 0), ("b", 0)]
        assert result.total == 1000

    def test_redistribution_keeps_labels_and_groups(self):
        policy = AggregationPolicy(max_discount_rate=0.1)
        result = DiscountAggregator(policy).aggregate(
            144000, [line(10080, "tier", "membership"), line(14400, "coupon", "coupon")]
        )
        assert [(d.label, d.group) for d in result.discounts] == [("tier", "membership"), ("coupon", "coupon")]

    def test_inputs_are_not_rewritten(self):
        candidates = [line(600), line(400)]
        DiscountAggregator(AggregationPolicy(max_discount_rate=0.3)).aggregate(1000, candidates)
        assert [c.amount for c in candidates] == [600, 400]


class TestSelection:
    def test_best_one(self):
        policy = AggregationPolicy(only_best_one=True)
        result = DiscountAggregator(policy).aggregate(10000, [line(50), line(120), line(80)])
        assert amounts(result) == [120]
        assert result.total == 9880

    def test_best_one_tie_goes_to_first(self):
        assert [c.label for c in select_best_one([line(70, "a"), line(70, "b")])] == ["a"]

    def test_best_one_empty(self):
        assert select_best_one([]) == []

    def test_exclusive_group_keeps_largest(self):
        candidates = [line(40, "new", "membership"), line(90, "tier", "membership")]
        assert [c.amount for c in filter_exclusive_groups(candidates, {"membership"})] == [90]

    def test_exclusive_group_preserves_order_of_others(self):
        candidates = [
            line(40, "new", "membership"),
            line(30, "coupon", "coupon"),
            line(90, "tier", "membership"),
            line(10, "misc"),
        ]
        kept = filter_exclusive_groups(candidates, {"membership"})
        assert [c.label for c in kept] == ["coupon", "tier", "misc"]

    def test_exclusive_group_tie_goes_to_first(self):
        candidates = [line(50, "a", "membership"), line(50, "b", "membership")]
        assert [c.label for c in filter_exclusive_groups(candidates, {"membership"})] == ["a"]

    def test_unconfigured_group_is_untouched(self):
        candidates = [line(40, group="bulk"), line(90, group="bulk")]
        assert filter_exclusive_groups(candidates, {"membership"}) == candidates

    def test_groups_filter_before_best_one(self):
        policy = AggregationPolicy.of(only_best_one=True, exclusive_groups=["membership"])
        result = DiscountAggregator(policy).aggregate(
            10000, [line(40, "new", "membership"), line(90, "tier", "membership"), line(60, "coupon")]
        )
        assert [d.label for d in result.discounts] == ["tier"]


class TestTotal:
    def test_total_floors_at_zero(self):
        result = DiscountAggregator().aggregate(500, [line(800)])
        assert amounts(result) == [800]
        assert result.total == 0

    def test_total_matches_discounts(self):
        policies = [
            AggregationPolicy(),
            AggregationPolicy(max_discount_rate=0.05),
            AggregationPolicy.of(only_best_one=True),
            AggregationPolicy.of(max_discount_rate=0.2, exclusive_groups=["g"]),
        ]
        candidate_sets = [[], [line(1)], [line(7, group="g"), line(13, group="g"), line(29)], [line(5000), line(9)]]
        for policy in policies:
            for candidates in candidate_sets:
                for subtotal in (0, 17, 1000, 4321):
                    result = DiscountAggregator(policy).aggregate(subtotal, candidates)
                    assert result.total == max(0, subtotal - sum(d.amount for d in result.discounts))
