"""
Unit tests for the aggregation service.

Tests the browse-by views, totals, top bucket tie-break and the
aging-well list.
"""

from datetime import date
from decimal import Decimal

import pytest

from exceptions import InvalidDimensionError
from models.analytics import AgingStatus, BrowseDimension
from services.aggregation_service import (
    aging_status,
    aging_well,
    browse,
    collection_summary,
    collection_totals,
    country_buckets,
    parse_date_added,
    strength_buckets,
    top_bucket,
    wrapper_buckets,
)
from services.value_aggregator import item_quantity
from tests.factories import CigarFactory


def as_pairs(buckets):
    return [(b.label, b.quantity) for b in buckets]


# ===================
# WRAPPER
# ===================

class TestWrapperBuckets:

    def test_blank_wrapper_is_unknown_and_sorted(self):
        items = [
            CigarFactory.create(wrapper="Maduro"),
            CigarFactory.create(wrapper="Maduro"),
            CigarFactory.create(wrapper=""),
        ]
        assert as_pairs(wrapper_buckets(items)) == [("Maduro", 2), ("Unknown", 1)]

    def test_alphabetical_order(self, sample_inventory):
        labels = [b.label for b in wrapper_buckets(sample_inventory)]
        assert labels == ["Colorado", "Connecticut", "Habano", "Maduro", "Unknown"]

    def test_filter_value_matches_label(self):
        bucket = wrapper_buckets([CigarFactory.create(wrapper="Sumatra")])[0]
        assert bucket.filter_value == "Sumatra"

    def test_zero_quantity_wrapper_dropped(self):
        items = [
            CigarFactory.create(wrapper="Oscuro", quantity=0),
            CigarFactory.create(wrapper="Natural", quantity=2),
        ]
        assert as_pairs(wrapper_buckets(items)) == [("Natural", 2)]


# ===================
# STRENGTH
# ===================

class TestStrengthBuckets:

    def test_taxonomy_order_and_exclusion(self, sample_inventory):
        assert as_pairs(strength_buckets(sample_inventory)) == [
            ("Mild Cigars", 2),
            ("Medium Cigars", 4),
            ("Full Bodied Cigars", 5),
        ]

    def test_unrecognized_strength_not_fabricated(self, sample_inventory):
        bucket_total = sum(b.quantity for b in strength_buckets(sample_inventory))
        item_total = sum(item_quantity(i) for i in sample_inventory)
        assert bucket_total <= item_total
        assert item_total - bucket_total == 4  # the "Flavored" entry

    def test_filter_values(self, sample_inventory):
        assert [b.filter_value for b in strength_buckets(sample_inventory)] == ["Mild", "Medium", "Full"]


# ===================
# COUNTRY
# ===================

class TestCountryBuckets:

    def test_catalog_order_and_other(self, sample_inventory):
        assert as_pairs(country_buckets(sample_inventory)) == [
            ("Dominican Cigars", 2),
            ("Nicaraguan Cigars", 5),
            ("Cuban Cigars", 3),
            ("Other Countries", 5),
        ]

    def test_every_unit_in_exactly_one_bucket(self, sample_inventory):
        bucket_total = sum(b.quantity for b in country_buckets(sample_inventory))
        assert bucket_total == sum(item_quantity(i) for i in sample_inventory)

    def test_missing_country_key(self):
        items = [CigarFactory.create(country=CigarFactory.ABSENT, quantity=2)]
        assert as_pairs(country_buckets(items)) == [("Other Countries", 2)]

    def test_other_filter_value(self):
        items = [CigarFactory.create(country="Brazil")]
        assert country_buckets(items)[0].filter_value == "Other"


# ===================
# BROWSE
# ===================

class TestBrowse:

    def test_browse_by_dimension_name(self, sample_inventory):
        response = browse(sample_inventory, "country")
        assert response.dimension == BrowseDimension.COUNTRY
        assert response.total_quantity == 15

    def test_unknown_dimension(self, sample_inventory):
        with pytest.raises(InvalidDimensionError):
            browse(sample_inventory, "vitola")

    def test_empty_inventory(self):
        for dimension in BrowseDimension:
            response = browse([], dimension)
            assert response.buckets == []
            assert response.total_quantity == 0

    def test_does_not_mutate_items(self, sample_inventory):
        before = [dict(i) for i in sample_inventory]
        browse(sample_inventory, "wrapper")
        collection_summary(sample_inventory)
        assert sample_inventory == before


# ===================
# TOTALS
# ===================

class TestCollectionTotals:

    def test_totals(self, sample_inventory):
        totals = collection_totals(sample_inventory)
        assert totals.total_cigars == 15
        assert totals.total_value == Decimal("167.50")
        assert totals.item_count == 5

    def test_empty_inventory(self):
        totals = collection_totals([])
        assert totals.total_cigars == 0
        assert totals.total_value == Decimal("0")

    def test_negative_and_missing_quantity_contribute_zero(self):
        items = [
            CigarFactory.create(quantity=-5, price=10),
            CigarFactory.create(quantity=CigarFactory.ABSENT, price=10),
            CigarFactory.create(quantity=2, price="abc"),
        ]
        totals = collection_totals(items)
        assert totals.total_cigars == 2
        assert totals.total_value == Decimal("0")


# ===================
# TOP BUCKET
# ===================

class TestTopBucket:

    def test_tie_goes_to_first_seen(self):
        items = [
            CigarFactory.create(country="Cuba", quantity=3),
            CigarFactory.create(country="Mexico", quantity=3),
        ]
        assert top_bucket(items, "country") == "Cuba"

    def test_tie_order_reversed(self):
        items = [
            CigarFactory.create(country="Mexico", quantity=3),
            CigarFactory.create(country="Cuba", quantity=3),
        ]
        assert top_bucket(items, "country") == "Mexico"

    def test_strictly_greater_wins(self, sample_inventory):
        assert top_bucket(sample_inventory, "country") == "Nicaragua"

    def test_unknown_country_never_top(self):
        items = [
            CigarFactory.create(country="", quantity=10),
            CigarFactory.create(country="Unknown", quantity=10),
            CigarFactory.create(country="Honduras", quantity=1),
        ]
        assert top_bucket(items, "country") == "Honduras"

    def test_nothing_qualifies(self):
        assert top_bucket([], "country") is None
        assert top_bucket([CigarFactory.create(quantity=0)], "country") is None

    def test_strength_and_wrapper_use_labels(self, sample_inventory):
        assert top_bucket(sample_inventory, "strength") == "Full Bodied Cigars"
        assert top_bucket(sample_inventory, "wrapper") == "Maduro"


# ===================
# SUMMARY
# ===================

class TestCollectionSummary:

    def test_summary(self, sample_inventory):
        summary = collection_summary(sample_inventory)
        assert summary.totals.total_cigars == 15
        assert summary.top_country == "Nicaragua"
        assert len(summary.wrapper) == 5
        assert len(summary.strength) == 3
        assert len(summary.country) == 4


# ===================
# AGING WELL
# ===================

class TestAgingWell:

    TODAY = date(2025, 6, 1)

    @pytest.mark.parametrize("days,status", [
        (0, AgingStatus.YOUNG),
        (179, AgingStatus.YOUNG),
        (180, AgingStatus.MATURING),
        (365, AgingStatus.READY_TO_SMOKE),
        (729, AgingStatus.READY_TO_SMOKE),
        (730, AgingStatus.PERFECTLY_AGED),
    ])
    def test_aging_status(self, days, status):
        assert aging_status(days) == status

    def test_oldest_first_limited(self):
        items = [
            CigarFactory.create(name="New", dateAdded="2025-05-01"),
            CigarFactory.create(name="Oldest", dateAdded="2022-01-15T10:00:00Z"),
            CigarFactory.create(name="Undated"),
            CigarFactory.create(name="Middle", dateAdded="2024-05-01"),
            CigarFactory.create(name="Old", dateAdded="2023-03-01"),
        ]
        result = aging_well(items, today=self.TODAY, limit=3)
        assert [c.name for c in result] == ["Oldest", "Old", "Middle"]
        assert result[0].status == AgingStatus.PERFECTLY_AGED
        assert result[2].status == AgingStatus.READY_TO_SMOKE

    def test_unparseable_dates_skipped(self):
        items = [
            CigarFactory.create(dateAdded="last summer"),
            CigarFactory.create(dateAdded=12345),
        ]
        assert aging_well(items, today=self.TODAY) == []

    def test_future_date_is_zero_days(self):
        items = [CigarFactory.create(dateAdded="2030-01-01")]
        assert aging_well(items, today=self.TODAY)[0].age_days == 0

    def test_parse_date_added(self):
        assert parse_date_added("2024-02-03") == date(2024, 2, 3)
        assert parse_date_added("2024-02-03T23:10:00.000Z") == date(2024, 2, 3)
        assert parse_date_added(date(2024, 2, 3)) == date(2024, 2, 3)
        assert parse_date_added("") is None
        assert parse_date_added(None) is None
