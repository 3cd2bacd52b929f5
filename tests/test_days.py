"""Tests for seafoodtruck_bot.foodtruck.days."""

from datetime import date

import pytest

from seafoodtruck_bot.foodtruck.days import is_day_token, normalize_day, resolve_day

FIXED = date(2024, 12, 31)


class TestResolveDay:
    def test_today(self):
        assert resolve_day("today", FIXED) == "2024-12-31"

    def test_tomorrow_crosses_year(self):
        assert resolve_day("tomorrow", FIXED) == "2025-01-01"

    @pytest.mark.parametrize("token", [None, "", "Tomorrow", "TODAY", "friday", " tomorrow", "yesterday"])
    def test_unrecognized_tokens_resolve_to_today(self, token):
        assert resolve_day(token, FIXED) == resolve_day("today", FIXED)

    def test_uses_local_date_by_default(self):
        assert resolve_day("today") == date.today().isoformat()


class TestTokens:
    def test_is_day_token(self):
        assert is_day_token("today")
        assert is_day_token("tomorrow")
        assert not is_day_token("Today")
        assert not is_day_token(None)

    def test_normalize_day(self):
        assert normalize_day("tomorrow") == "tomorrow"
        assert normalize_day("monday") == "today"
