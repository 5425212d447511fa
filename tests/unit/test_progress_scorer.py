"""
Модульные тесты для ProgressScorer.

Покрываемые методы:
- progress_to_goal: снижение/набор веса, цель совпадает со стартом, перелёт цели
- completion_rate: деление на ноль
- current_streak: подряд идущие дни, записи за один день, разрыв
- user_metrics: все производные поля по одной записи пользователя
- leaderboard: фильтрация, сортировка по combined_score, стабильность, ранги

Расчёт не зависит от БД, "сейчас" фиксируется параметром now.
"""

import pytest
from datetime import date, datetime, timedelta

from app.services.progress_scorer import ProgressScorer, ScoringInputError
from tests.conftest import make_user, make_workout

pytestmark = pytest.mark.unit

NOW = datetime(2026, 10, 18, 12, 0)
TODAY = NOW.date()


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


# ---------------------------------------------------------------------------
# progress_to_goal
# ---------------------------------------------------------------------------

def test_weight_loss_half_way_scenario():
    """100 -> 95 при цели 90: пройдена половина пути."""
    user = make_user(weights=[100.0, 95.0], target_weight=90.0)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.starting_weight == 100.0
    assert entry.current_weight_from_history == 95.0
    assert entry.actual_weight_change == -5.0
    assert entry.total_weight_change_needed == 10.0
    assert entry.is_losing_weight is True
    assert entry.progress_to_goal == pytest.approx(50.0)


def test_single_entry_at_target_is_full_progress():
    """Одна запись 150 при цели 150: изменение не требуется, прогресс 100."""
    user = make_user(weights=[150.0], target_weight=150.0)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.total_weight_change_needed == 0
    assert entry.progress_to_goal == 100.0
    assert entry.goal_reached is True


def test_starting_equals_target_is_100_regardless_of_current():
    """Старт равен цели -> 100, даже если текущий вес ушёл в сторону."""
    assert ProgressScorer.progress_to_goal(starting=80, current=95, target=80) == 100.0


def test_weight_gain_progress():
    """Набор массы 150 -> 155 при цели 160: 50%."""
    assert ProgressScorer.progress_to_goal(starting=150, current=155, target=160) == pytest.approx(50.0)


def test_gaining_user_weight_difference_is_absolute():
    """Фронт выводит "Gaining 5.0 lbs to goal": расстояние до цели без знака."""
    user = make_user(weights=[150.0, 155.0], target_weight=160.0)

    dumped = ProgressScorer.user_metrics(user, now=NOW).model_dump(by_alias=True)

    assert dumped["weightDifference"] == pytest.approx(5.0)
    assert dumped["isLosingWeight"] is False


def test_losing_user_weight_difference():
    user = make_user(weights=[100.0, 95.0], target_weight=90.0)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.weight_difference == pytest.approx(5.0)
    assert entry.is_losing_weight is True


def test_weight_loss_in_wrong_direction_clamped_to_zero():
    """Вес вырос при цели на снижение: прогресс не уходит ниже нуля."""
    assert ProgressScorer.progress_to_goal(starting=100, current=104, target=90) == 0.0


def test_overshoot_clamped_to_100_and_goal_reached():
    """Сбросил больше нужного: прогресс 100 и явный флаг достижения цели."""
    user = make_user(weights=[100.0, 85.0], target_weight=90.0)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.progress_to_goal == 100.0
    assert entry.goal_reached is True
    assert entry.is_losing_weight is False


@pytest.mark.parametrize("starting, current, target", [
    (100, 95, 90),
    (100, 80, 90),
    (100, 120, 90),
    (150, 170, 160),
    (150, 140, 160),
    (150, 150, 150),
    (0, 0, 10),
])
def test_progress_always_within_bounds(starting, current, target):
    progress = ProgressScorer.progress_to_goal(starting, current, target)
    assert 0.0 <= progress <= 100.0


# ---------------------------------------------------------------------------
# completion_rate
# ---------------------------------------------------------------------------

def test_completion_rate_zero_planned_sets():
    """Нет запланированных подходов -> 0 без деления на ноль."""
    workouts = [make_workout(days_ago(0), 0, 0), make_workout(days_ago(1), 0, 0)]
    user = make_user(weights=[100.0], target_weight=90.0, workouts=workouts)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.total_sets_planned == 0
    assert entry.workout_completion_rate == 0.0


def test_completion_rate_uses_stored_rollups():
    workouts = [make_workout(days_ago(0), 10, 20), make_workout(days_ago(1), 5, 20)]
    user = make_user(weights=[100.0], target_weight=90.0, workouts=workouts)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.total_sets_completed == 15
    assert entry.total_sets_planned == 40
    assert entry.workout_completion_rate == pytest.approx(37.5)


def test_completion_rate_treats_missing_counters_as_zero():
    workout = make_workout(days_ago(0))
    workout.total_sets_completed = None
    workout.total_sets_planned = None
    user = make_user(weights=[100.0], target_weight=90.0, workouts=[workout])

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.workout_completion_rate == 0.0


# ---------------------------------------------------------------------------
# current_streak
# ---------------------------------------------------------------------------

def test_streak_three_consecutive_days_then_gap():
    """Сегодня, вчера, позавчера и затем разрыв в 2 дня -> серия 3."""
    workouts = [
        make_workout(days_ago(4)),
        make_workout(days_ago(2)),
        make_workout(days_ago(0)),
        make_workout(days_ago(1)),
    ]
    user = make_user(weights=[100.0], target_weight=90.0, workouts=workouts)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.current_streak == 3


def test_streak_allows_one_day_grace_from_today():
    """Последняя тренировка вчера: серия ещё не прервана."""
    streak = ProgressScorer.current_streak([days_ago(1), days_ago(2)], TODAY)
    assert streak == 2


def test_streak_broken_when_last_workout_two_days_ago():
    assert ProgressScorer.current_streak([days_ago(2), days_ago(3)], TODAY) == 0


def test_streak_counts_same_day_duplicates():
    """Две записи за один день обе продолжают серию."""
    streak = ProgressScorer.current_streak([days_ago(0), days_ago(0), days_ago(1)], TODAY)
    assert streak == 3


def test_streak_empty_workouts():
    assert ProgressScorer.current_streak([], TODAY) == 0


# ---------------------------------------------------------------------------
# user_metrics: остальные поля
# ---------------------------------------------------------------------------

def test_metrics_without_workouts_or_history():
    """Пустые тренировки и история: метрики по current_weight, без ошибок."""
    user = make_user(current_weight=200.0, target_weight=180.0)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.starting_weight == 200.0
    assert entry.current_weight == 200.0
    assert entry.progress_to_goal == 0.0
    assert entry.total_workouts == 0
    assert entry.last_workout_date is None
    assert entry.last_workout_title is None
    assert entry.days_since_last_workout is None
    assert entry.weight_change_from_last_workout is None
    assert entry.current_streak == 0
    assert entry.combined_score == 0.0


def test_last_workout_and_weight_change():
    workouts = [
        make_workout(days_ago(5), 3, 10, title="Legs"),
        make_workout(days_ago(3), 8, 10, title="Back & Biceps"),
    ]
    user = make_user(weights=[210.0, 205.0, 203.5], target_weight=190.0, workouts=workouts)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.last_workout_date == days_ago(3).isoformat()
    assert entry.last_workout_title == "Back & Biceps"
    assert entry.last_workout_sets_completed == 8
    assert entry.days_since_last_workout == 3
    assert entry.weight_change_from_last_workout == pytest.approx(-1.5)


def test_days_since_joining_and_average_per_week():
    workouts = [make_workout(days_ago(i), 1, 1) for i in range(6)]
    user = make_user(
        weights=[100.0], target_weight=90.0, workouts=workouts,
        created_at=NOW - timedelta(days=21, hours=3),
    )

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.days_since_joining == 21
    assert entry.average_workouts_per_week == pytest.approx(2.0)


def test_average_per_week_uses_at_least_one_week():
    workouts = [make_workout(days_ago(0)), make_workout(days_ago(1))]
    user = make_user(weights=[100.0], target_weight=90.0, workouts=workouts,
                     created_at=NOW - timedelta(days=3))

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.average_workouts_per_week == pytest.approx(2.0)


def test_combined_score_weights():
    """combined_score = 0.6 * прогресс + 0.4 * выполнение."""
    workouts = [make_workout(days_ago(0), 5, 10)]
    user = make_user(weights=[100.0, 95.0], target_weight=90.0, workouts=workouts)

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.combined_score == pytest.approx(50.0 * 0.6 + 50.0 * 0.4)


def test_accepts_text_date_labels():
    """Даты в виде текстовых меток тоже поддерживаются."""
    workout = make_workout(days_ago(0))
    workout.date = f"{TODAY:%A}, {TODAY:%B} {TODAY.day}, {TODAY.year}"
    user = make_user(weights=[100.0], target_weight=90.0, workouts=[workout])

    entry = ProgressScorer.user_metrics(user, now=NOW)

    assert entry.current_streak == 1
    assert entry.days_since_last_workout == 0


def test_user_metrics_does_not_mutate_workout_order():
    workouts = [make_workout(days_ago(3)), make_workout(days_ago(0)), make_workout(days_ago(1))]
    user = make_user(weights=[100.0], target_weight=90.0, workouts=list(workouts))

    ProgressScorer.user_metrics(user, now=NOW)

    assert [w.date for w in user.workouts] == [w.date for w in workouts]


def test_missing_target_weight_raises():
    user = make_user(weights=[100.0], target_weight=None)
    with pytest.raises(ScoringInputError):
        ProgressScorer.user_metrics(user, now=NOW)


def test_missing_any_weight_source_raises():
    user = make_user(current_weight=None, target_weight=90.0)
    with pytest.raises(ScoringInputError):
        ProgressScorer.user_metrics(user, now=NOW)


def test_negative_weight_raises():
    user = make_user(weights=[-5.0], target_weight=90.0)
    with pytest.raises(ScoringInputError):
        ProgressScorer.user_metrics(user, now=NOW)


def test_unparseable_workout_date_raises():
    workout = make_workout(days_ago(0))
    workout.date = "not a date"
    user = make_user(weights=[100.0], target_weight=90.0, workouts=[workout])
    with pytest.raises(ScoringInputError):
        ProgressScorer.user_metrics(user, now=NOW)


# ---------------------------------------------------------------------------
# leaderboard
# ---------------------------------------------------------------------------

def test_leaderboard_empty():
    assert ProgressScorer.leaderboard([], now=NOW) == []


def test_leaderboard_skips_users_without_weight_goal():
    eligible = make_user(user_id=1, user_name="eligible", weights=[100.0], target_weight=90.0)
    no_target = make_user(user_id=2, user_name="notarget", weights=[100.0], target_weight=None)
    no_weight = make_user(user_id=3, user_name="noweight", current_weight=None, target_weight=90.0)

    board = ProgressScorer.leaderboard([no_target, eligible, no_weight], now=NOW)

    assert [e.user_name for e in board] == ["eligible"]
    assert board[0].rank == 1


def test_leaderboard_ties_keep_input_order_with_distinct_ranks():
    """Одинаковый combined_score: порядок как на входе, ранги 3 и 4, а не 3 и 3."""
    leader = make_user(user_id=1, user_name="leader", weights=[100.0, 90.0], target_weight=90.0)
    second = make_user(user_id=2, user_name="second", weights=[100.0, 94.0], target_weight=90.0)
    tie_a = make_user(user_id=3, user_name="tie_a", weights=[100.0, 98.0], target_weight=90.0)
    tie_b = make_user(user_id=4, user_name="tie_b", weights=[200.0, 196.0], target_weight=180.0)
    last = make_user(user_id=5, user_name="last", weights=[100.0], target_weight=90.0)

    board = ProgressScorer.leaderboard([last, tie_a, leader, tie_b, second], now=NOW)

    assert [e.user_name for e in board] == ["leader", "second", "tie_a", "tie_b", "last"]
    assert [e.rank for e in board] == [1, 2, 3, 4, 5]
    assert board[2].combined_score == pytest.approx(board[3].combined_score)


def test_leaderboard_ranks_are_total_order_and_scores_non_increasing():
    users = [
        make_user(user_id=i, user_name=f"user{i}", weights=[100.0, 100.0 - i], target_weight=90.0,
                  workouts=[make_workout(days_ago(0), i, 10)])
        for i in range(8)
    ]

    board = ProgressScorer.leaderboard(users, now=NOW)

    ranks = [e.rank for e in board]
    assert ranks == list(range(1, len(users) + 1))
    assert len(set(ranks)) == len(ranks)
    scores = [e.combined_score for e in board]
    assert all(a >= b for a, b in zip(scores, scores[1:]))
