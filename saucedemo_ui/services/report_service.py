# services/report_service.py
import getpass
import json
import logging
import os
import platform
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Hashable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from saucedemo_ui.models.report import ReportNode, Status
from saucedemo_ui.utils.screenshot import TIMESTAMP_FORMAT

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / 'templates'
DEFAULT_AUTHOR = 'Automation Team'


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.getenv('USER', 'unknown')


class ReportService:
    """Per-worker report nodes over one process-wide report document.

    Writers only touch the node of their own worker. `flush` renders the
    whole document and must run once, after every worker has finished.
    """

    def __init__(self, config, registry, screenshots, worker_id: Optional[Callable[[], Hashable]] = None):
        self.config = config
        self.registry = registry
        self.screenshots = screenshots
        self.worker_id = worker_id or registry.worker_id
        self.logger = logging.getLogger(__name__)
        self.tests: List[ReportNode] = []
        self._current: Dict[Hashable, ReportNode] = {}
        self._lock = threading.Lock()
        self.created_at = datetime.now()
        self.system_info = self._system_info()
        self.flushed_paths: Optional[Dict[str, str]] = None

    def _system_info(self) -> Dict[str, str]:
        return {
            'Application URL': self.config.app_url,
            'Browser': self.config.browser,
            'Environment': self.config.environment,
            'Operating System': f"{platform.system()} {platform.release()}",
            'Python Version': platform.python_version(),
            'User': _current_user(),
            'Execution Mode': 'Headless' if self.config.headless else 'GUI',
            'Grid Enabled': str(self.config.grid_enabled).lower(),
        }

    def start_test(self, name: str, description: str = '', category: str = '',
                   author: str = DEFAULT_AUTHOR) -> ReportNode:
        node = ReportNode(name, description or '')
        if category:
            node.categories.append(category)
        node.authors.append(author)
        node.log(Status.INFO, f"Test Started: {name}", label=True)
        with self._lock:
            self.tests.append(node)
            self._current[self.worker_id()] = node
        self.logger.info(f"Test started: {name}")
        return node

    def current(self) -> Optional[ReportNode]:
        with self._lock:
            return self._current.get(self.worker_id())

    def end_test(self) -> Optional[ReportNode]:
        with self._lock:
            node = self._current.pop(self.worker_id(), None)
        if node is not None:
            node.ended_at = datetime.now()
        return node

    def create_child(self, name: str, description: str = '') -> Optional[ReportNode]:
        node = self.current()
        return node.create_node(name, description) if node else None

    def log(self, status: Status, message: str) -> None:
        node = self.current()
        if node is not None:
            node.log(status, message)

    def log_info(self, message: str) -> None:
        self.log(Status.INFO, message)

    def log_pass(self, message: str) -> None:
        self.log(Status.PASS, message)

    def log_fail(self, message: str) -> None:
        self.log(Status.FAIL, message)

    def log_warning(self, message: str) -> None:
        self.log(Status.WARNING, message)

    def record_outcome(self, status: Status, message: str, screenshot_name: Optional[str] = None) -> None:
        """Append a labelled outcome line; a failure also tries to attach a screenshot."""
        node = self.current()
        if node is None:
            self.logger.warning(f"No report node for outcome: {message}")
            return
        node.log(status, message, label=True)
        if status is not Status.FAIL:
            return
        try:
            if self.registry.is_initialized():
                path = self.screenshots.capture_failure(self.registry.get(), screenshot_name or node.name)
                if path is not None:
                    node.add_screenshot(path, 'Failure Screenshot')
                    node.log(Status.INFO, 'Screenshot captured for failed test')
                else:
                    node.log(Status.WARNING, 'Failed to capture screenshot')
        except Exception as e:
            self.logger.error(f"Failed to capture screenshot for failed test {node.name}: {e}")
            node.log(Status.WARNING, f"Failed to capture screenshot: {e}")

    def attach_screenshot(self, path: Optional[str], title: str) -> None:
        if not path:
            return
        try:
            node = self.current()
            if node is not None:
                node.add_screenshot(path, title)
        except Exception as e:
            self.logger.error(f"Failed to add screenshot to report: {path}: {e}")

    def summary(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in (Status.PASS, Status.FAIL, Status.SKIP, Status.WARNING)}
        for node in self.tests:
            counts[node.status.value] = counts.get(node.status.value, 0) + 1
        counts['total'] = len(self.tests)
        return counts

    def to_dict(self) -> dict:
        return {
            'name': self.config.report_name,
            'title': self.config.report_title,
            'created_at': self.created_at.isoformat(timespec='seconds'),
            'system_info': self.system_info,
            'summary': self.summary(),
            'tests': [node.to_dict() for node in self.tests],
        }

    def render_html(self, report_dir: Path) -> str:
        env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(['html', 'j2']),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters['relpath'] = lambda path: os.path.relpath(path, report_dir)
        template = env.get_template('report.html.j2')
        return template.render(
            report=self.to_dict(),
            theme=self.config.report_theme,
        )

    def flush(self) -> Dict[str, str]:
        if self.flushed_paths is not None:
            self.logger.warning("Report already flushed, ignoring repeated flush")
            return self.flushed_paths
        report_dir = Path(self.config.reports_path)
        report_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        html_path = report_dir / f"TestReport_{timestamp}.html"
        json_path = report_dir / f"TestReport_{timestamp}.json"
        html_path.write_text(self.render_html(report_dir), encoding='utf-8')
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        self.flushed_paths = {'html': str(html_path), 'json': str(json_path)}
        self.logger.info(f"Report flushed successfully: {html_path}")
        return self.flushed_paths
