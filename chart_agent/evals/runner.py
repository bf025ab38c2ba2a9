"""Runs the evaluation suites, prints a summary and stores the results as JSON."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List
import asyncio
import json
import time

import click

from ..agent import ChartAgent, OpenAIChatModel, create_chart_agent
from ..charts import ChartOrchestrator
from ..config import get_config, setup_logging
from .accuracy import RUNS_PER_TEST, run_accuracy_eval
from .filtering import run_filtering_eval
from .models import EvalResult

RULE = "═══════════════════════════════════════════════════════\n"


def print_result(label: str, result: EvalResult) -> None:
    click.echo(RULE)
    click.echo(f"📊 {label} Eval Results:")
    click.echo(f"   Total: {result.total}")
    click.echo(f"   Passed: {result.passed} ✅")
    click.echo(f"   Failed: {result.failed} ❌")
    click.echo(f"   Pass Rate: {result.pass_rate * 100:.1f}%\n")


def summarize(results: List[EvalResult]) -> Dict[str, Any]:
    total = sum(r.total for r in results)
    passed = sum(r.passed for r in results)
    return {
        'total_tests': total,
        'total_passed': passed,
        'total_failed': total - passed,
        'pass_rate': f"{(passed / total * 100) if total else 0.0:.1f}%",
    }


async def run_suites(agent: ChartAgent, suite: str, runs: int) -> List[EvalResult]:
    results = []
    if suite in ("all", "filtering"):
        click.echo(RULE)
        result = await run_filtering_eval(agent)
        print_result("Filtering", result)
        results.append(result)
    if suite in ("all", "accuracy"):
        click.echo(RULE)
        result = await run_accuracy_eval(agent, runs_per_test=runs)
        print_result("Accuracy", result)
        results.append(result)
    return results


def save_results(results: List[EvalResult], summary: Dict[str, Any], results_dir: str) -> Path:
    directory = Path(results_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"eval-results-{int(time.time() * 1000)}.json"
    payload = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'evaluations': {r.test_name: r.to_dict() for r in results},
        'summary': summary,
    }
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


@click.command()
@click.option(
    "--suite",
    type=click.Choice(["all", "filtering", "accuracy"], case_sensitive=False),
    default="all",
    help="Which evaluation suite to run (default: all).",
)
@click.option("--runs", type=click.IntRange(min=1), default=RUNS_PER_TEST, help="Runs per accuracy case.")
@click.option("--results-dir", type=click.Path(file_okay=False), default="./eval-results",
              help="Where the JSON results are written.")
def main(suite: str, runs: int, results_dir: str):
    """Evaluate the chart agent against the live model."""
    setup_logging("WARNING")
    click.echo("╔════════════════════════════════════════════════════════╗")
    click.echo("║        Chart Agent - Evaluation Suite                  ║")
    click.echo("╚════════════════════════════════════════════════════════╝\n")

    if not get_config().OPENAI_API_KEY:
        click.echo("❌ Error: OPENAI_API_KEY environment variable is not set", err=True)
        click.echo("Set it with: export OPENAI_API_KEY=your-api-key", err=True)
        raise SystemExit(1)

    agent = create_chart_agent(
        model=OpenAIChatModel(),
        chart_orchestrator=ChartOrchestrator(save_charts=False),
    )
    results = asyncio.run(run_suites(agent, suite.lower(), runs))
    summary = summarize(results)

    click.echo(RULE)
    click.echo("📈 Overall Summary:")
    click.echo(f"   Total Tests: {summary['total_tests']}")
    click.echo(f"   Total Passed: {summary['total_passed']} ✅")
    click.echo(f"   Total Failed: {summary['total_failed']} ❌")
    click.echo(f"   Overall Pass Rate: {summary['pass_rate']}\n")

    path = save_results(results, summary, results_dir)
    click.echo(f"💾 Results saved to: {path}\n")

    if summary['total_failed'] > 0:
        click.echo("⚠️  Some tests failed. Review the results above.\n")
        raise SystemExit(1)
    click.echo("🎉 All tests passed!\n")


if __name__ == "__main__":
    main()
