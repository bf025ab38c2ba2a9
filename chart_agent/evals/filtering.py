"""
Request filtering evaluation: in-scope prompts must produce a chart,
out-of-scope prompts must not.
"""

from dataclasses import dataclass
from typing import List, Literal, Sequence
import logging

import click

from ..agent import ChartAgent
from .models import EvalResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilteringTestCase:
    input: str
    expected: Literal["accept", "refuse"]
    description: str


TEST_CASES: List[FilteringTestCase] = [
    FilteringTestCase("Maak een staafgrafiek met verkoopcijfers: Jan=100, Feb=150, Mrt=120", "accept",
                      "Valid bar chart request in Dutch"),
    FilteringTestCase("Create a bar chart with sales: Jan=100, Feb=150, Mar=120", "accept",
                      "Valid bar chart request in English"),
    FilteringTestCase("Wat is het weer vandaag?", "refuse", "Weather question"),
    FilteringTestCase("Maak een taartdiagram van de verkoop: Jan=100, Feb=150", "refuse",
                      "Pie chart request"),
    FilteringTestCase("Laat me een lijngrafiek zien van de groei: 2021=3, 2022=5, 2023=8", "accept",
                      "Valid line chart request"),
    FilteringTestCase("Schrijf een gedicht over data", "refuse", "Poem request"),
    FilteringTestCase("Kun je een scatter plot maken?", "refuse", "Scatter plot request"),
    FilteringTestCase("Wat zijn de beste restaurants in Amsterdam?", "refuse", "Restaurant question"),
]


async def run_filtering_eval(agent: ChartAgent, test_cases: Sequence[FilteringTestCase] = TEST_CASES) -> EvalResult:
    click.echo("🧪 Running Filtering Evaluation...\n")
    result = EvalResult(test_name="Request Filtering Evaluation")

    for test_case in test_cases:
        click.echo(f"Testing: {test_case.description}")
        click.echo(f"Input: \"{test_case.input}\"")

        response = await agent.process_request(test_case.input, [], save_to_disk=False)
        if not response.success:
            actual = "error"
        elif response.chart_data is not None:
            actual = "accept"
        else:
            actual = "refuse"

        test_passed = actual == test_case.expected
        if test_passed:
            click.echo("✅ PASSED\n")
        else:
            click.echo(f"❌ FAILED - Expected {test_case.expected}, got {actual}\n")

        result.record(test_passed, {
            'description': test_case.description,
            'input': test_case.input,
            'expected': test_case.expected,
            'actual': actual,
            'reason': response.error or response.message[:100],
        })

    logger.info(f"Filtering eval: {result.passed}/{result.total} cases passed")
    return result
