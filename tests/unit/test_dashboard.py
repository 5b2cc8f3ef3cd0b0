"""Tests for dashboard aggregates."""

from datetime import date, datetime, timezone

import pytest

from app.domain.enums import VendorStatus
from app.services.dashboard import (
    DEFAULT_BADGE,
    budget_stats,
    category_overview,
    category_status_text,
    format_wedding_date,
    recent_activity,
    remaining_budget,
    status_badge,
    time_ago,
    total_budget,
    total_spent,
)
from tests.factories import NOW, make_category, make_vendor


class TestBudget:
    def test_total_budget_sums_categories(self, sample_categories):
        assert total_budget(sample_categories) == 15000

    def test_total_spent_counts_selected_vendors_only(self, sample_categories):
        assert total_spent(sample_categories) == 2500

    def test_remaining(self, sample_categories):
        assert remaining_budget(sample_categories) == 12500

    def test_empty(self):
        assert total_budget([]) == 0
        assert total_spent([]) == 0

    def test_stats(self, sample_categories):
        stats = budget_stats(sample_categories)

        assert stats.categories_complete == 1
        assert stats.total_categories == 3
        assert stats.total_vendors == 3
        # one negotiating + one interested with "portfolio" in notes
        assert stats.vendors_needing_input == 2


class TestStatusBadge:
    @pytest.mark.parametrize(
        "status, color, icon",
        [
            ("confirmed", "green", "check-circle"),
            ("negotiating", "yellow", "message-square"),
            ("interested", "blue", "eye"),
            ("pending", "purple", "clock"),
            ("declined", "red", "alert-circle"),
            ("uncontacted", "gray", "clock"),
        ],
    )
    def test_known_statuses(self, status, color, icon):
        badge = status_badge(status)
        assert (badge.color, badge.icon) == (color, icon)

    def test_every_status_has_a_badge(self):
        for status in VendorStatus:
            assert status_badge(status.value) is not None

    def test_unknown_status_gets_default(self):
        assert status_badge("on_hold") == DEFAULT_BADGE


class TestCategoryOverview:
    def test_confirmed_category(self, sample_categories):
        item = category_overview(sample_categories[0])

        assert item.confirmed is True
        assert item.status_text == "Confirmed: Lens & Light"
        assert item.selected_vendor_price == 2500
        assert item.progress_percentage == 100

    def test_negotiating_wins_over_interested(self, sample_categories):
        assert category_status_text(sample_categories[1]) == "1 negotiating"

    def test_pending_outreach(self):
        category = make_category(vendors=[make_vendor(), make_vendor(id="v2", status="pending")])

        assert category_status_text(category) == "2 pending outreach"
        assert category_overview(category).progress_percentage == 0

    def test_no_active_vendors(self):
        category = make_category(vendors=[make_vendor(status="declined")])
        assert category_status_text(category) == "No active vendors"

    def test_progress_counts_contacted_vendors(self):
        category = make_category(
            vendors=[
                make_vendor(status="interested"),
                make_vendor(id="v2"),
                make_vendor(id="v3"),
            ]
        )
        item = category_overview(category)

        assert item.contacted_count == 1
        assert item.progress_percentage == 33

    def test_empty_category(self):
        item = category_overview(make_category())
        assert item.vendor_count == 0
        assert item.progress_percentage == 0


class TestTimeAgo:
    @pytest.mark.parametrize(
        "now, expected",
        [
            (datetime(2024, 6, 1, 0, 30, tzinfo=timezone.utc), "Just now"),
            (datetime(2024, 6, 1, 5, 0, tzinfo=timezone.utc), "5 hours ago"),
            (datetime(2024, 6, 2, 3, 0, tzinfo=timezone.utc), "1 day ago"),
            (datetime(2024, 6, 4, 12, 0, tzinfo=timezone.utc), "3 days ago"),
        ],
    )
    def test_relative_strings(self, now, expected):
        assert time_ago(date(2024, 6, 1), now) == expected


class TestRecentActivity:
    def test_newest_first_with_labels(self, sample_categories):
        activity = recent_activity(sample_categories, NOW)

        assert [a.vendor for a in activity] == ["Bloom & Petal", "Lens & Light", "Wildflower Co"]
        assert activity[0].action == "Price negotiation in progress"
        assert activity[0].category == "Florist"
        assert activity[1].action == "Contract confirmed"
        assert activity[2].action == "Vendor showed interest"
        assert activity[1].badge.color == "green"

    def test_skips_vendors_never_contacted(self):
        category = make_category(vendors=[make_vendor()])
        assert recent_activity([category], NOW) == []

    def test_limited_to_six(self):
        vendors = [
            make_vendor(id=f"v{day}", last_contact=date(2024, 5, day)) for day in range(1, 10)
        ]
        activity = recent_activity([make_category(vendors=vendors)], NOW)

        assert len(activity) == 6
        assert activity[0].last_contact == date(2024, 5, 9)
        assert activity[0].action == "Initial contact made"


class TestWeddingDate:
    def test_long_form_is_kept(self):
        assert format_wedding_date("September 15, 2024") == "September 15, 2024"

    def test_iso_date(self):
        assert format_wedding_date("2024-09-05") == "September 5, 2024"

    def test_unparseable_text_passes_through(self):
        assert format_wedding_date("Next spring") == "Next spring"
