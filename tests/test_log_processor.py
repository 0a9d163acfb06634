"""
Unit tests for streaks, pain frequency and follow-up prompts.
"""

from datetime import datetime, timedelta, timezone

from recoverytrack.constants import MOTIVATIONAL_MESSAGES
from recoverytrack.services.log_processor import (
    calculate_pain_frequency,
    calculate_streak_data,
    generate_follow_up_prompt,
    get_motivational_message,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

DAY = timedelta(days=1)


class TestStreakData:
    """Tests for calculate_streak_data."""

    def test_no_logs(self):
        streak = calculate_streak_data([])
        assert streak.model_dump(by_alias=True) == {"currentStreak": 0, "longestStreak": 0, "totalLogs": 0}

    def test_single_log(self, make_log):
        streak = calculate_streak_data([make_log(NOW)])
        assert (streak.current_streak, streak.longest_streak, streak.total_logs) == (1, 1, 1)

    def test_consecutive_days(self, make_log):
        logs = [make_log(NOW - DAY), make_log(NOW), make_log(NOW - 2 * DAY)]
        streak = calculate_streak_data(logs)
        assert (streak.current_streak, streak.longest_streak, streak.total_logs) == (3, 3, 3)

    def test_gap_ends_current_streak(self, make_log):
        logs = [make_log(NOW), make_log(NOW - DAY), make_log(NOW - 5 * DAY)]
        streak = calculate_streak_data(logs)
        assert (streak.current_streak, streak.longest_streak, streak.total_logs) == (2, 2, 3)

    def test_longest_streak_in_the_past(self, make_log):
        logs = [make_log(NOW), make_log(NOW - 3 * DAY), make_log(NOW - 4 * DAY), make_log(NOW - 5 * DAY)]
        streak = calculate_streak_data(logs)
        assert (streak.current_streak, streak.longest_streak) == (1, 3)

    def test_same_day_logs_break_the_run(self, make_log):
        logs = [
            make_log(NOW.replace(hour=10)),
            make_log(NOW.replace(hour=8)),
            make_log(NOW - DAY),
        ]
        streak = calculate_streak_data(logs)
        assert (streak.current_streak, streak.longest_streak, streak.total_logs) == (1, 2, 3)

    def test_days_are_utc(self, make_log):
        # 01:00 at +05:00 is the previous day in UTC
        plus_five = timezone(timedelta(hours=5))
        logs = [
            make_log(datetime(2026, 10, 19, 1, 0, tzinfo=plus_five)),
            make_log(datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)),
        ]
        assert calculate_streak_data(logs).current_streak == 2

    def test_naive_timestamps_are_utc(self, make_log):
        logs = [make_log(datetime(2026, 10, 19, 0, 30)), make_log(datetime(2026, 10, 18, 23, 30))]
        assert calculate_streak_data(logs).current_streak == 2


class TestPainFrequency:
    """Tests for calculate_pain_frequency."""

    def test_no_logs(self):
        assert calculate_pain_frequency([]) == []

    def test_counts_sorted_descending(self, make_log):
        logs = [make_log(NOW, ["Knee"]), make_log(NOW - DAY, ["Shoulder", "Knee"])]
        result = [(item.location, item.count) for item in calculate_pain_frequency(logs)]
        assert result == [("Knee", 2), ("Shoulder", 1)]

    def test_ties_keep_first_seen_order(self, make_log):
        logs = [make_log(NOW, ["Hip", "Ankle"]), make_log(NOW - DAY, ["Ankle", "Hip"]), make_log(NOW, ["Neck"])]
        result = [(item.location, item.count) for item in calculate_pain_frequency(logs)]
        assert result == [("Hip", 2), ("Ankle", 2), ("Neck", 1)]

    def test_logs_without_tags(self, make_log):
        assert calculate_pain_frequency([make_log(NOW), make_log(NOW - DAY)]) == []


class TestFollowUpPrompt:
    """Tests for generate_follow_up_prompt."""

    def test_no_logs(self):
        assert generate_follow_up_prompt([]) == "Tell me how you feel."

    def test_pain_location_yesterday(self, make_log):
        logs = [make_log(NOW - timedelta(hours=27), ["Knee"])]
        assert generate_follow_up_prompt(logs, now=NOW) == (
            "You mentioned knee discomfort yesterday. How is it feeling now?"
        )

    def test_pain_location_relative_to_current_time(self, make_log):
        logs = [make_log(datetime.now(timezone.utc) - DAY - timedelta(hours=1), ["Lower Back"])]
        prompt = generate_follow_up_prompt(logs)
        assert "lower back" in prompt
        assert "yesterday" in prompt

    def test_pain_location_earlier_today(self, make_log):
        logs = [make_log(NOW - timedelta(hours=3), ["Shoulder", "Elbow"])]
        assert generate_follow_up_prompt(logs, now=NOW) == (
            "You mentioned shoulder discomfort earlier today. How is it feeling now?"
        )

    def test_pain_location_days_ago(self, make_log):
        logs = [make_log(NOW - 3 * DAY - timedelta(hours=2), ["Ankle"])]
        assert generate_follow_up_prompt(logs, now=NOW) == (
            "You mentioned ankle discomfort 3 days ago. How is it feeling now?"
        )

    def test_high_soreness(self, make_log):
        logs = [make_log(NOW, soreness_level=8)]
        assert generate_follow_up_prompt(logs, now=NOW) == (
            "Your soreness level was high last time. Has it improved?"
        )

    def test_low_energy(self, make_log):
        logs = [make_log(NOW, energy_level=3, soreness_level=5)]
        assert generate_follow_up_prompt(logs, now=NOW) == (
            "How is your energy level today compared to last time?"
        )

    def test_soreness_takes_priority_over_energy(self, make_log):
        logs = [make_log(NOW, energy_level=2, soreness_level=7)]
        assert "soreness" in generate_follow_up_prompt(logs, now=NOW)

    def test_default_prompt(self, make_log):
        logs = [make_log(NOW, energy_level=8, soreness_level=2)]
        assert generate_follow_up_prompt(logs, now=NOW) == (
            "How are you feeling today? Any changes since your last check-in?"
        )

    def test_uses_most_recent_log(self, make_log):
        logs = [
            make_log(NOW - 2 * DAY, ["Knee"]),
            make_log(NOW - timedelta(hours=1), soreness_level=9),
        ]
        assert "soreness" in generate_follow_up_prompt(logs, now=NOW)


class TestMotivationalMessage:

    def test_same_message_for_the_same_day(self):
        day = NOW.date()
        assert get_motivational_message(day) == get_motivational_message(day)
        assert get_motivational_message(day) in MOTIVATIONAL_MESSAGES

    def test_rotates_daily(self):
        day = NOW.date()
        assert get_motivational_message(day) != get_motivational_message(day + DAY)
