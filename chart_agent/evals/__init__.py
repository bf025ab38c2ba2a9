"""
Evaluation suites that run fixed prompts against the live model.

    chart-agent-evals --suite all
"""

from .accuracy import AccuracyTestCase, run_accuracy_eval
from .filtering import FilteringTestCase, run_filtering_eval
from .models import EvalResult

__all__ = [
    'AccuracyTestCase',
    'FilteringTestCase',
    'EvalResult',
    'run_accuracy_eval',
    'run_filtering_eval',
]
