"""Tests for report aggregation arithmetic."""

import pytest
from hypothesis import given, settings, strategies as st

from src.utils.report_calculator import ReportCalculator, ScoreLine, ScoredEvaluation, aggregate_evaluations


def line(indicator_id, score, category="hard", name=None):
    return ScoreLine(indicator_id, name or indicator_id.upper(), category, score)


def scored(evaluatee_id, scores, feedback=None, name=None, division="PSDM"):
    return ScoredEvaluation(evaluatee_id, name or evaluatee_id.title(), division, feedback, scores)


class TestAggregationArithmetic:

    def test_category_average_is_raw_sum_divided_by_rater_count(self):
        results = aggregate_evaluations([
            scored("x", [line("i1", 5), line("i2", 5)]),
            scored("x", [line("i1", 3), line("i2", 3)]),
        ])

        assert len(results) == 1
        result = results[0]
        assert result["rater_count"] == 2
        assert result["overall_avg"] == 4.0
        # (5 + 5 + 3 + 3) / 2 rater, bukan / 4 nilai
        assert result["category_avg"] == {"hard": 8.0}
        assert [i["avg"] for i in result["indicators"]] == [4.0, 4.0]

    def test_overall_is_mean_of_per_rater_means(self):
        # Rater 1 menilai 1 indikator, rater 2 menilai 3 indikator
        results = aggregate_evaluations([
            scored("x", [line("i1", 5)]),
            scored("x", [line("i1", 1), line("i2", 1), line("i3", 4)]),
        ])
        # (5 + 2) / 2, bukan (5 + 1 + 1 + 4) / 4
        assert results[0]["overall_avg"] == 3.5

    def test_categories_are_separated(self):
        result = aggregate_evaluations([
            scored("x", [line("i1", 4, "hard"), line("i2", 2, "soft")]),
        ])[0]
        assert result["overall_avg"] == 3.0
        assert result["category_avg"] == {"hard": 4.0, "soft": 2.0}

    def test_rounding_to_two_decimals(self):
        result = aggregate_evaluations([scored("x", [line("i1", 5), line("i2", 4), line("i3", 4)])])[0]
        assert result["overall_avg"] == 4.33

    def test_decimal_places_configurable(self):
        result = ReportCalculator(decimal_places=1).aggregate(
            [scored("x", [line("i1", 5), line("i2", 4), line("i3", 4)])]
        )[0]
        assert result["overall_avg"] == 4.3

    def test_indicator_metadata_kept(self):
        result = aggregate_evaluations([scored("x", [line("i1", 4, "soft", "Komunikasi")])])[0]
        assert result["indicators"] == [{"id": "i1", "name": "Komunikasi", "category": "soft", "avg": 4.0}]


class TestGroupingAndAnonymity:

    def test_evaluatees_in_first_appearance_order(self):
        results = aggregate_evaluations([
            scored("b", [line("i1", 3)]),
            scored("a", [line("i1", 4)]),
            scored("b", [line("i1", 5)]),
        ])
        assert [r["evaluatee_id"] for r in results] == ["b", "a"]
        assert results[0]["rater_count"] == 2

    def test_evaluation_without_scores_is_ignored(self):
        results = aggregate_evaluations([scored("x", []), scored("y", [line("i1", 2)])])
        assert [r["evaluatee_id"] for r in results] == ["y"]

    def test_empty_input(self):
        assert aggregate_evaluations([]) == []

    def test_feedback_collected_in_order_without_blanks(self):
        result = aggregate_evaluations([
            scored("x", [line("i1", 4)], feedback="Pertama"),
            scored("x", [line("i1", 4)], feedback=""),
            scored("x", [line("i1", 4)], feedback=None),
            scored("x", [line("i1", 4)], feedback="Kedua"),
        ])[0]
        assert result["feedback"] == ["Pertama", "Kedua"]
        assert result["rater_count"] == 4

    def test_result_carries_no_evaluator_identity(self):
        result = aggregate_evaluations([scored("x", [line("i1", 4)], feedback="ok")])[0]
        assert set(result) == {
            "evaluatee_id", "name", "division", "rater_count",
            "overall_avg", "category_avg", "indicators", "feedback",
        }
        assert result["feedback"] == ["ok"]


indicator_sets = st.lists(
    st.tuples(st.sampled_from(["hard", "soft", "other"])),
    min_size=1,
    max_size=6,
)


class TestAggregationProperties:

    @settings(max_examples=150, deadline=None)
    @given(
        categories=indicator_sets,
        raters=st.integers(min_value=1, max_value=8),
        data=st.data(),
    )
    def test_category_average_equals_sum_of_indicator_averages(self, categories, raters, data):
        """Jika semua rater menilai semua indikator, category_avg = jumlah avg indikator di kategori itu."""
        indicators = [(f"i{n}", category) for n, (category,) in enumerate(categories)]
        evaluations = []
        for _ in range(raters):
            scores = data.draw(st.lists(st.integers(1, 5), min_size=len(indicators), max_size=len(indicators)))
            evaluations.append(
                scored("x", [line(ind_id, score, category) for (ind_id, category), score in zip(indicators, scores)])
            )

        result = ReportCalculator(decimal_places=10).aggregate(evaluations)[0]

        assert result["rater_count"] == raters
        for category, value in result["category_avg"].items():
            expected = sum(i["avg"] for i in result["indicators"] if i["category"] == category)
            assert value == pytest.approx(expected, abs=1e-6)

        # semua rater menilai set indikator yang sama -> overall = rata-rata semua nilai mentah
        flat = [s.score for e in evaluations for s in e.scores]
        assert result["overall_avg"] == pytest.approx(sum(flat) / len(flat), abs=1e-6)
        assert 1 <= result["overall_avg"] <= 5
