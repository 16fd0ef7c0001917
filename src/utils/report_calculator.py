# ===== src/utils/report_calculator.py =====
"""Kalkulasi hasil penilaian per evaluatee.

Rumus (semua pembagi = jumlah penilai evaluatee tsb):

* overall_avg  : jumlah rata-rata tiap penilaian / jumlah penilai
                 (rata-rata dari rata-rata per penilai, bukan rata-rata semua nilai mentah)
* category_avg : jumlah nilai mentah per kategori / jumlah penilai
* indicators   : jumlah nilai mentah per indikator / jumlah penilai

Contoh: 2 penilai, 2 indikator kategori sama, nilai [5, 5] dan [3, 3]
-> overall 4.0, kategori (5+5+3+3)/2 = 8.0, tiap indikator 4.0.

Feedback dikumpulkan per evaluatee tanpa identitas penilai.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence


class ScoreLine(NamedTuple):
    indicator_id: str
    indicator_name: str
    category: str
    score: int


class ScoredEvaluation(NamedTuple):
    """Satu penilaian yang sudah disubmit, tanpa data penilai."""
    evaluatee_id: str
    evaluatee_name: str
    division_name: Optional[str]
    feedback: Optional[str]
    scores: Sequence[ScoreLine]


class ReportCalculator:
    """Akumulasi nilai per evaluatee lalu hitung rata-rata."""

    def __init__(self, decimal_places: int = 2):
        self.decimal_places = decimal_places

    def aggregate(self, evaluations: Sequence[ScoredEvaluation]) -> List[Dict[str, Any]]:
        """Hitung hasil per evaluatee, urut sesuai kemunculan pertama."""
        buckets: Dict[str, Dict[str, Any]] = {}

        for evaluation in evaluations:
            if not evaluation.scores:
                continue

            bucket = buckets.get(evaluation.evaluatee_id)
            if bucket is None:
                bucket = {
                    "evaluatee_id": evaluation.evaluatee_id,
                    "name": evaluation.evaluatee_name,
                    "division": evaluation.division_name,
                    "rater_count": 0,
                    "overall_sum": 0.0,
                    "category_sums": {},
                    "indicator_sums": {},
                    "feedback": [],
                }
                buckets[evaluation.evaluatee_id] = bucket

            bucket["rater_count"] += 1
            total = sum(line.score for line in evaluation.scores)
            bucket["overall_sum"] += total / len(evaluation.scores)

            for line in evaluation.scores:
                category_sums = bucket["category_sums"]
                category_sums[line.category] = category_sums.get(line.category, 0) + line.score

                indicator = bucket["indicator_sums"].setdefault(
                    line.indicator_id,
                    {"id": line.indicator_id, "name": line.indicator_name, "category": line.category, "sum": 0},
                )
                indicator["sum"] += line.score

            if evaluation.feedback:
                bucket["feedback"].append(evaluation.feedback)

        return [self._finalize(bucket) for bucket in buckets.values()]

    def _finalize(self, bucket: Dict[str, Any]) -> Dict[str, Any]:
        divisor = bucket["rater_count"] or 1

        return {
            "evaluatee_id": bucket["evaluatee_id"],
            "name": bucket["name"],
            "division": bucket["division"],
            "rater_count": bucket["rater_count"],
            "overall_avg": self._round(bucket["overall_sum"] / divisor),
            "category_avg": {
                category: self._round(total / divisor)
                for category, total in bucket["category_sums"].items()
            },
            "indicators": [
                {
                    "id": item["id"],
                    "name": item["name"],
                    "category": item["category"],
                    "avg": self._round(item["sum"] / divisor),
                }
                for item in bucket["indicator_sums"].values()
            ],
            "feedback": list(bucket["feedback"]),
        }

    def _round(self, value: float) -> float:
        return round(value, self.decimal_places)


def aggregate_evaluations(
    evaluations: Sequence[ScoredEvaluation],
    decimal_places: int = 2
) -> List[Dict[str, Any]]:
    """Shortcut untuk ``ReportCalculator(decimal_places).aggregate``."""
    return ReportCalculator(decimal_places).aggregate(evaluations)
