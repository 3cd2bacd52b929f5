"""Tests for seafoodtruck_bot.bot.formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from seafoodtruck_bot.bot.formatting import (
    CATEGORY_EMOJI,
    category_line,
    clock_time,
    display_time,
    event_day,
    link,
    parse_timestamp,
    photo_url,
    round_half_away_from_zero,
    star_rating,
    truck_url,
)


class TestStarRating:
    @pytest.mark.parametrize(
        "rating, expected",
        [
            (4.6, "★★★★★"),
            (4.4, "★★★★☆"),
            (0.0, "☆☆☆☆☆"),
            (5.0, "★★★★★"),
            (2.5, "★★★☆☆"),
            (0.49, "☆☆☆☆☆"),
        ],
    )
    def test_glyphs(self, rating, expected):
        assert star_rating(rating) == expected

    def test_always_five_glyphs(self):
        for tenth in range(0, 51):
            assert len(star_rating(tenth / 10)) == 5

    def test_monotonic(self):
        counts = [star_rating(t / 10).count("★") for t in range(0, 51)]
        assert counts == sorted(counts)

    def test_out_of_range_is_clamped(self):
        assert star_rating(7.2) == "★★★★★"
        assert star_rating(-1.0) == "☆☆☆☆☆"

    @pytest.mark.parametrize("rating", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_is_empty(self, rating):
        assert star_rating(rating) == "☆☆☆☆☆"

    def test_idempotent(self):
        assert star_rating(3.7) == star_rating(3.7)


class TestRounding:
    def test_halves_go_away_from_zero(self):
        assert round_half_away_from_zero(0.5) == 1
        assert round_half_away_from_zero(2.5) == 3
        assert round_half_away_from_zero(-2.5) == -3

    def test_below_half(self):
        assert round_half_away_from_zero(4.4) == 4


class TestCategories:
    def test_mapped_category(self):
        assert category_line("Tacos") == ":taco: Tacos"

    def test_unmapped_category_has_no_prefix(self):
        assert category_line("Fusion") == "Fusion"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_EMOJI["Fusion"] = ":star:"


class TestLinks:
    def test_link(self):
        assert link("https://x", "X") == "<https://x|X>"

    def test_urls(self):
        assert truck_url("marination") == "https://www.seattlefoodtruck.com/food-trucks/marination"
        assert photo_url("a/b.jpg").endswith("/seattlefoodtruck-uploads-prod/a/b.jpg")


class TestTimes:
    def test_clock_time(self):
        assert clock_time(datetime(2024, 5, 6, 0, 5)) == "12:05AM"
        assert clock_time(datetime(2024, 5, 6, 11, 0)) == "11:00AM"
        assert clock_time(datetime(2024, 5, 6, 12, 30)) == "12:30PM"
        assert clock_time(datetime(2024, 5, 6, 15, 4)) == "3:04PM"

    def test_event_day(self):
        assert event_day(datetime(2024, 5, 6, 11, 0)) == "Mon, May 6"

    def test_parse_timestamp_keeps_offset(self):
        parsed = parse_timestamp("2024-05-06T11:00:00-07:00")
        assert parsed.hour == 11
        assert parsed.utcoffset() == timedelta(hours=-7)

    def test_parse_timestamp_zulu(self):
        assert parse_timestamp("2024-05-06T18:00:00Z").tzinfo is not None

    def test_parse_timestamp_garbage(self):
        assert parse_timestamp("not a time") is None
        assert parse_timestamp("") is None

    def test_display_time_in_pacific(self):
        moment = datetime(2024, 1, 15, 20, 0, tzinfo=timezone.utc)
        assert display_time(moment) == "15 Jan 24 12:00 PST"

    def test_display_time_daylight_saving(self):
        moment = datetime(2024, 7, 4, 19, 30, tzinfo=timezone.utc)
        assert display_time(moment) == "04 Jul 24 12:30 PDT"
