from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class EvalResult:
    """Outcome of one evaluation suite."""
    test_name: str
    passed: int = 0
    failed: int = 0
    details: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed

    @property
    def pass_rate(self) -> float:
        return self.passed / self.total if self.total else 0.0

    def record(self, passed: bool, detail: Dict[str, Any]) -> None:
        if passed:
            self.passed += 1
        else:
            self.failed += 1
        self.details.append(detail)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['total'] = self.total
        result['pass_rate'] = round(self.pass_rate, 3)
        return result
