# models/scenario.py
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

PASSED = 'passed'
FAILED = 'failed'
SKIPPED = 'skipped'


@dataclass(frozen=True)
class Scenario:
    name: str
    run: Callable
    description: str = ''
    tags: Tuple[str, ...] = ()
    category: str = ''

    def has_tag(self, tag: str) -> bool:
        return tag.lstrip('@') in self.tags

    def matches(self, tags) -> bool:
        """True when no tags are requested or the scenario carries any of them."""
        if not tags:
            return True
        return any(self.has_tag(tag) for tag in tags)


@dataclass
class ScenarioResult:
    name: str
    status: str
    attempts: int = 1
    duration: float = 0.0
    error_message: str = ''
    tags: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status == PASSED


@dataclass
class SuiteResult:
    results: List[ScenarioResult] = field(default_factory=list)
    started_at: str = ''
    total_time: float = 0.0
    thread_count: int = 1
    report_paths: Dict[str, str] = field(default_factory=dict)
    results_file: Optional[str] = None

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.status == PASSED)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.status == FAILED)

    @property
    def skipped(self) -> int:
        return sum(1 for result in self.results if result.status == SKIPPED)

    @property
    def success(self) -> bool:
        return self.failed == 0

    def summary(self) -> Dict:
        total = len(self.results)
        return {
            'total': total,
            'passed': self.passed,
            'failed': self.failed,
            'skipped': self.skipped,
            'pass_percentage': round((self.passed / total) * 100, 2) if total > 0 else 0,
            'retried': sum(1 for result in self.results if result.attempts > 1),
            'total_time': self.total_time,
        }

    def to_dict(self) -> Dict:
        return {
            'started_at': self.started_at,
            'thread_count': self.thread_count,
            'summary': self.summary(),
            'results': [asdict(result) for result in self.results],
            'report_paths': dict(self.report_paths),
        }
