import pytest

from playlytics.analysis import format_one_decimal, generate_insights, stat_deltas, win_rate
from playlytics.config import InsightThresholds
from playlytics.models import PlayerRecord


def _player(name: str, **stats) -> PlayerRecord:
    return PlayerRecord(id=name.lower(), name=name, sport="Basketball", **stats)


def test_leader_named_when_total_exceeds_twenty_percent():
    ada = _player("Ada", score=120)
    ben = _player("Ben", score=90)

    insights = generate_insights(ada, ben)

    assert insights[0] == "Ada demonstrates significantly higher overall performance with 120 total stats vs 90."


def test_swapping_inputs_swaps_leader_and_keeps_numbers():
    ada = _player("Ada", score=90)
    ben = _player("Ben", score=120)

    insights = generate_insights(ada, ben)

    assert insights[0] == "Ben demonstrates significantly higher overall performance with 120 total stats vs 90."


def test_small_gap_is_comparable():
    ada = _player("Ada", score=50, assists=30, rebounds=20)
    ben = _player("Ben", score=45, assists=30, rebounds=20)

    insights = generate_insights(ada, ben)

    assert insights[0] == "Both players show comparable overall performance levels."


def test_leader_threshold_is_strict():
    ada = _player("Ada", score=60)
    ben = _player("Ben", score=50)

    insights = generate_insights(ada, ben)

    assert insights[0] == "Both players show comparable overall performance levels."


def test_win_rate_sentence_names_higher_rate():
    ada = _player("Ada", matches=10, wins=8, score=10, assists=10, rebounds=10)
    ben = _player("Ben", matches=10, wins=4, score=10, assists=10, rebounds=10)

    insights = generate_insights(ada, ben)

    assert insights == [
        "Both players show comparable overall performance levels.",
        "Ada has a superior win rate of 80.0% compared to 40.0%.",
    ]


def test_identical_profiles_only_produce_comparable_sentence():
    ada = _player("Ada", matches=10, wins=5, score=10, assists=10, rebounds=10)
    ben = _player("Ben", matches=10, wins=5, score=10, assists=10, rebounds=10)

    assert generate_insights(ada, ben) == ["Both players show comparable overall performance levels."]


def test_consistency_sentence_uses_stats_per_match():
    ada = _player("Ada", matches=10, score=10, assists=10, rebounds=10)
    ben = _player("Ben", matches=20, score=10, assists=10, rebounds=10)

    insights = generate_insights(ada, ben)

    assert insights == [
        "Both players show comparable overall performance levels.",
        "Ada shows better consistency with 3.0 stats per match vs 1.5.",
    ]


def test_zero_matches_yield_zero_ratios():
    ada = _player("Ada", matches=0, wins=3, score=10, assists=10, rebounds=10)
    ben = _player("Ben", matches=0, wins=0, score=10, assists=10, rebounds=10)

    assert generate_insights(ada, ben) == ["Both players show comparable overall performance levels."]


def test_trend_and_specialization_order():
    ada = _player("Ada", score=1, assists=3, rebounds=5)
    ben = _player("Ben", score=5, assists=3, rebounds=1)

    insights = generate_insights(ada, ben)

    assert insights == [
        "Both players show comparable overall performance levels.",
        "Ada shows an improving performance trend across different metrics.",
        "Ben shows a declining trend in certain performance areas.",
        "Ben is primarily a scorer with 5 points.",
    ]


def test_trend_band_is_strict():
    # slope is exactly 0.5 for both players
    ada = _player("Ada", score=2, assists=2, rebounds=3)
    ben = _player("Ben", score=3, assists=9, rebounds=4)

    insights = generate_insights(ada, ben)

    assert not any("trend" in sentence for sentence in insights)
    assert insights[-1] == "Ben excels in playmaking with 9 assists."


def test_rebound_led_and_tied_profiles_have_no_specialization():
    rebounder = _player("Ada", score=3, assists=3, rebounds=3)
    tied = _player("Ben", score=4, assists=4, rebounds=1)

    insights = generate_insights(rebounder, tied)

    assert not any("scorer" in sentence or "playmaking" in sentence for sentence in insights)


def test_full_insight_sequence():
    ada = _player("Ada", matches=10, wins=7, score=10, assists=50, rebounds=20)
    ben = _player("Ben", matches=10, wins=3, score=30, assists=2, rebounds=1)

    insights = generate_insights(ada, ben)

    assert insights == [
        "Ada demonstrates significantly higher overall performance with 80 total stats vs 33.",
        "Ada shows better consistency with 8.0 stats per match vs 3.3.",
        "Ada has a superior win rate of 70.0% compared to 30.0%.",
        "Ada shows an improving performance trend across different metrics.",
        "Ben shows a declining trend in certain performance areas.",
        "Ada excels in playmaking with 50 assists.",
        "Ben is primarily a scorer with 30 points.",
    ]


def test_generation_is_deterministic():
    ada = _player("Ada", matches=10, wins=7, score=10, assists=50, rebounds=20)
    ben = _player("Ben", matches=10, wins=3, score=30, assists=2, rebounds=1)

    assert generate_insights(ada, ben) == generate_insights(ada, ben)


def test_custom_thresholds_change_leader_cutoff():
    ada = _player("Ada", score=100)
    ben = _player("Ben", score=95)
    thresholds = InsightThresholds().with_overrides(leader_ratio=1.01)

    insights = generate_insights(ada, ben, thresholds)

    assert insights[0].startswith("Ada demonstrates significantly higher overall performance")


def test_wins_above_matches_are_tolerated():
    odd = _player("Ada", matches=2, wins=5)
    assert win_rate(odd) == pytest.approx(250.0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(2.25, "2.3"), (1.45, "1.4"), (80.0, "80.0"), (0, "0.0"), (10 / 3, "3.3")],
)
def test_one_decimal_formatting(value, expected):
    assert format_one_decimal(value) == expected


def test_stat_deltas_subtract_player2():
    ada = _player("Ada", matches=10, score=30, assists=4, rebounds=9, wins=6)
    ben = _player("Ben", matches=12, score=25, assists=7, rebounds=9, wins=2)

    assert stat_deltas(ada, ben) == {
        "matches": -2,
        "score": 5,
        "assists": -3,
        "rebounds": 0,
        "wins": 4,
    }


def test_consistency_threshold_is_strict():
    # 1.15 stats per match against 1.0 sits exactly on the ratio
    ada = _player("Ada", matches=100, score=115)
    ben = _player("Ben", matches=100, score=100)

    insights = generate_insights(ada, ben)

    assert not any("consistency" in sentence for sentence in insights)


def test_consistency_just_above_threshold_names_leader():
    ada = _player("Ada", matches=100, score=100)
    ben = _player("Ben", matches=100, score=116)

    insights = generate_insights(ada, ben)

    assert "Ben shows better consistency with 1.2 stats per match vs 1.0." in insights
