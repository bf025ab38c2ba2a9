"""
Data accuracy evaluation.

Each case is run several times concurrently; a case passes when more than
87.5% of its runs produce exactly the expected labels and values.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence
import asyncio
import logging

import click

from ..agent import ChartAgent
from .models import EvalResult

logger = logging.getLogger(__name__)

RUNS_PER_TEST = 5
PASS_THRESHOLD = 0.875
FLOAT_TOLERANCE = 0.01


@dataclass(frozen=True)
class AccuracyTestCase:
    input: str
    expected_labels: List[str]
    expected_values: List[float]
    description: str


TEST_CASES: List[AccuracyTestCase] = [
    AccuracyTestCase(
        input="Maak een grafiek met Mon=10, Tue=20, Wed=15",
        expected_labels=["Mon", "Tue", "Wed"],
        expected_values=[10, 20, 15],
        description="Simple inline data with English labels",
    ),
    AccuracyTestCase(
        input=(
            "Geef me een grafiek met het aantal checkins per dag bij het OV: Maandag = 4.1, "
            "Dinsdag = 4.2, Woensdag = 4.4, Donderdag = 4.7, Vrijdag = 4.2, Zaterdag = 2.3, "
            "Zondag = 1.7. De getallen zijn in miljoenen check-ins."
        ),
        expected_labels=["Maandag", "Dinsdag", "Woensdag", "Donderdag", "Vrijdag", "Zaterdag", "Zondag"],
        expected_values=[4.1, 4.2, 4.4, 4.7, 4.2, 2.3, 1.7],
        description="OV check-ins (decimal values)",
    ),
    AccuracyTestCase(
        input=(
            "Ik wil een grafiek die aangeeft hoeveel miljard studieschuld studenten hebben in de "
            "laatste jaren. De waarden zijn: 2020 = 25, 2021 = 26, 2022 = 26.5, 2023 = 27.3, "
            "2024 = 27.9, en 2025 = 29."
        ),
        expected_labels=["2020", "2021", "2022", "2023", "2024", "2025"],
        expected_values=[25, 26, 26.5, 27.3, 27.9, 29],
        description="Student debt (year labels)",
    ),
    AccuracyTestCase(
        input="Maak een staafgrafiek: Q1=100, Q2=150, Q3=175, Q4=200",
        expected_labels=["Q1", "Q2", "Q3", "Q4"],
        expected_values=[100, 150, 175, 200],
        description="Quarterly data",
    ),
    AccuracyTestCase(
        input="Lijn grafiek met temperatuur: Jan=5, Feb=7, Mrt=12, Apr=15",
        expected_labels=["Jan", "Feb", "Mrt", "Apr"],
        expected_values=[5, 7, 12, 15],
        description="Temperature data with Dutch month abbreviations",
    ),
]


def sequences_match(actual: Sequence[Any], expected: Sequence[Any]) -> bool:
    """Element-wise equality; numbers compare within FLOAT_TOLERANCE."""
    if len(actual) != len(expected):
        return False
    for a, e in zip(actual, expected):
        if isinstance(a, (int, float)) and isinstance(e, (int, float)):
            if abs(a - e) >= FLOAT_TOLERANCE:
                return False
        elif a != e:
            return False
    return True


async def run_single_test(agent: ChartAgent, test_case: AccuracyTestCase) -> Dict[str, Any]:
    response = await agent.process_request(test_case.input, [], save_to_disk=False)
    if not response.success or response.chart_data is None:
        return {'passed': False, 'reason': response.error or 'No chart created'}

    labels = list(response.chart_data.labels)
    values = list(response.chart_data.values)
    labels_match = sequences_match(labels, test_case.expected_labels)
    values_match = sequences_match(values, test_case.expected_values)

    reasons = []
    if not labels_match:
        reasons.append('Labels mismatch')
    if not values_match:
        reasons.append('Values mismatch')
    return {
        'passed': labels_match and values_match,
        'labels': labels,
        'values': values,
        'reason': ', '.join(reasons) or 'Data matches',
    }


async def run_accuracy_eval(
    agent: ChartAgent,
    test_cases: Sequence[AccuracyTestCase] = TEST_CASES,
    runs_per_test: int = RUNS_PER_TEST,
) -> EvalResult:
    click.echo(f"🧪 Running Data Accuracy Evaluation ({runs_per_test} runs per test)...\n")
    result = EvalResult(test_name="Data Accuracy Evaluation")

    for test_case in test_cases:
        click.echo(f"Testing: {test_case.description}")
        click.echo(f"Expected labels: {test_case.expected_labels}")
        click.echo(f"Expected values: {test_case.expected_values}")

        runs = await asyncio.gather(*(run_single_test(agent, test_case) for _ in range(runs_per_test)))
        for index, run in enumerate(runs, start=1):
            status = '✓' if run['passed'] else '✗'
            click.echo(f"  Run {index}: {status} labels={run.get('labels', 'N/A')} values={run.get('values', 'N/A')}")

        passed_runs = sum(1 for run in runs if run['passed'])
        pass_rate = passed_runs / runs_per_test
        test_passed = pass_rate > PASS_THRESHOLD
        click.echo(f"{'✅ PASSED' if test_passed else '❌ FAILED'} ({passed_runs}/{runs_per_test} runs)\n")

        result.record(test_passed, {
            'description': test_case.description,
            'input': test_case.input,
            'pass_rate': pass_rate,
            'passed_runs': passed_runs,
            'total_runs': runs_per_test,
            'runs': runs,
        })

    logger.info(f"Accuracy eval: {result.passed}/{result.total} cases passed")
    return result
