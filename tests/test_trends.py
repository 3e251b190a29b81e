"""Tests for per-school trend series and growth deltas."""

from __future__ import annotations

import pytest

from src.services.reports import MalformedDateError
from src.services.trends import build_trend, calculate_growth, observation_summary
from tests.factories import make_report


def _report_scoring_20(date: str):
    """100 computers (15) plus power backup (5)."""
    return make_report("S1", date, computers=100, power_backup=True)


def _report_scoring_45(date: str):
    """20 points plus fast internet (10), full literacy (10) and lab hours (5)."""
    return make_report(
        "S1",
        date,
        computers=100,
        power_backup=True,
        internet_connection="Fast",
        student_digital_literacy_rate=100,
        weekly_computer_lab_hours=50,
    )


class TestGrowthDeltas:
    def test_positive_readiness_growth(self):
        reports = [_report_scoring_20("2023-01-15"), _report_scoring_45("2024-01-15")]

        trend = build_trend(reports)

        assert [p.readiness_score for p in trend.series] == [20, 45]
        assert trend.deltas is not None
        assert trend.deltas.readiness_growth == 25

    def test_swapping_latest_flips_sign(self):
        reports = [_report_scoring_20("2024-01-15"), _report_scoring_45("2023-01-15")]

        trend = build_trend(reports)

        assert trend.deltas.readiness_growth == -25

    def test_single_report_has_no_deltas(self):
        trend = build_trend([_report_scoring_20("2024-01-15")])

        assert len(trend.series) == 1
        assert trend.deltas is None

    def test_no_reports(self):
        trend = build_trend([])

        assert trend.series == []
        assert trend.deltas is None

    def test_metric_deltas(self):
        earliest = make_report(
            "S1",
            "2023-03-01",
            functional_devices=12,
            teachers_using_ict=3,
            total_teachers=12,
            student_digital_literacy_rate=30,
        )
        latest = make_report(
            "S1",
            "2024-03-01",
            functional_devices=7,
            teachers_using_ict=9,
            total_teachers=12,
            student_digital_literacy_rate=42.5,
        )

        deltas = calculate_growth(earliest, latest)

        assert deltas.device_growth == -5
        assert deltas.teacher_usage_growth == 50  # 75% - 25%
        assert deltas.literacy_growth == pytest.approx(12.5)

    def test_deltas_use_first_and_last_only(self):
        reports = [
            _report_scoring_20("2022-01-01"),
            make_report("S1", "2023-01-01"),
            _report_scoring_45("2024-01-01"),
        ]
        assert build_trend(reports).deltas.readiness_growth == 25


class TestTrendSeries:
    def test_series_is_chronological(self):
        reports = [
            make_report("S1", "2024-06-01", report_id="C", period="Term 2 2024"),
            make_report("S1", "2023-02-01", report_id="A", period="Term 1 2023"),
            make_report("S1", "2023-09-01", report_id="B", period="Term 3 2023"),
        ]

        series = build_trend(reports).series

        assert [p.report_id for p in series] == ["A", "B", "C"]
        assert [p.period for p in series] == ["Term 1 2023", "Term 3 2023", "Term 2 2024"]

    def test_each_point_scored_on_its_own_report(self):
        """A point is never scored against a later report in the series."""
        series = build_trend([_report_scoring_45("2023-01-01"), _report_scoring_20("2024-01-01")]).series

        assert [p.readiness_score for p in series] == [45, 20]
        assert [p.readiness_level for p in series] == ["Medium", "Low"]

    def test_raw_metrics_carried(self):
        report = make_report(
            "S1",
            "2024-01-01",
            computers=30,
            tablets=12,
            projectors=2,
            printers=1,
            internet_speed_mbps=8.5,
        )
        point = build_trend([report]).series[0]

        assert (point.computers, point.tablets, point.projectors, point.printers) == (30, 12, 2, 1)
        assert point.internet_speed_mbps == 8.5
        assert point.date == "2024-01-01"

    def test_malformed_date_raises(self):
        with pytest.raises(MalformedDateError):
            build_trend([make_report("S1", "2024-01-01"), make_report("S1", "sometime")])


class TestObservationSummary:
    def test_percentages(self):
        report = make_report(
            computers=40,
            tablets=10,
            functional_devices=45,
            teachers_using_ict=7,
            total_teachers=20,
            ict_trained_teachers=5,
            internet_connection="Slow",
            power_backup="Generator",
        )

        summary = observation_summary(report)

        assert summary.teacher_usage_percent == 35
        assert summary.trained_teachers_percent == 25
        assert summary.device_utilization == 90
        assert summary.has_internet is True
        assert summary.has_power_backup is True

    def test_percentages_round_half_up(self):
        report = make_report(teachers_using_ict=1, total_teachers=8)  # 12.5%
        assert observation_summary(report).teacher_usage_percent == 13

    def test_zero_denominators_give_zero(self):
        report = make_report(functional_devices=5, teachers_using_ict=3, ict_trained_teachers=2)

        summary = observation_summary(report)

        assert summary.teacher_usage_percent == 0
        assert summary.trained_teachers_percent == 0
        assert summary.device_utilization == 0

    def test_no_internet_literal(self):
        assert observation_summary(make_report(internet_connection="None")).has_internet is False
        assert observation_summary(make_report(internet_connection="Satellite")).has_internet is True

    def test_summary_readiness_matches_scorer(self):
        summary = observation_summary(_report_scoring_45("2024-01-01"))

        assert summary.readiness_score == 45
        assert summary.readiness_level == "Medium"
