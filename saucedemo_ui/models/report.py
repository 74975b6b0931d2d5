# models/report.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Status(str, Enum):
    INFO = 'info'
    PASS = 'pass'
    FAIL = 'fail'
    WARNING = 'warning'
    SKIP = 'skip'

    @property
    def color(self) -> str:
        return STATUS_COLORS[self]


STATUS_COLORS = {
    Status.INFO: 'blue',
    Status.PASS: 'green',
    Status.FAIL: 'red',
    Status.WARNING: 'orange',
    Status.SKIP: 'yellow',
}

# most severe first; a node's status is the worst of its entries
STATUS_SEVERITY = [Status.FAIL, Status.SKIP, Status.WARNING, Status.PASS, Status.INFO]


@dataclass
class ReportEntry:
    status: Status
    message: str
    screenshot: Optional[str] = None
    label: bool = False
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat(timespec='seconds'))

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'message': self.message,
            'screenshot': self.screenshot,
            'timestamp': self.timestamp,
        }


@dataclass
class Screenshot:
    path: str
    title: str


@dataclass
class ReportNode:
    name: str
    description: str = ''
    categories: List[str] = field(default_factory=list)
    authors: List[str] = field(default_factory=list)
    entries: List[ReportEntry] = field(default_factory=list)
    screenshots: List[Screenshot] = field(default_factory=list)
    children: List['ReportNode'] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None

    def log(self, status: Status, message: str, label: bool = False) -> ReportEntry:
        entry = ReportEntry(status, message, label=label)
        self.entries.append(entry)
        return entry

    def add_screenshot(self, path: str, title: str) -> None:
        self.screenshots.append(Screenshot(path, title))

    def create_node(self, name: str, description: str = '') -> 'ReportNode':
        child = ReportNode(name, description)
        self.children.append(child)
        return child

    @property
    def status(self) -> Status:
        seen = {entry.status for entry in self.entries}
        seen.update(child.status for child in self.children)
        for status in STATUS_SEVERITY:
            if status in seen:
                return Status.PASS if status is Status.INFO else status
        return Status.PASS

    @property
    def duration_ms(self) -> Optional[int]:
        if self.ended_at is None:
            return None
        return int((self.ended_at - self.started_at).total_seconds() * 1000)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'description': self.description,
            'status': self.status.value,
            'categories': self.categories,
            'authors': self.authors,
            'started_at': self.started_at.isoformat(timespec='seconds'),
            'duration_ms': self.duration_ms,
            'entries': [entry.to_dict() for entry in self.entries],
            'screenshots': [{'path': s.path, 'title': s.title} for s in self.screenshots],
            'children': [child.to_dict() for child in self.children],
        }
