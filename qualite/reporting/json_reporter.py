"""JSON report generator for qualite runs.

Generates structured JSON reports from a run outcome.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..config.schema import RunConfiguration
from ..runner.result_collector import RunOutcome


class JsonReporter:
    """Generates JSON reports from run outcomes."""

    def generate(
        self,
        outcome: RunOutcome,
        config: Optional[RunConfiguration] = None,
        duration_ms: int = 0,
    ) -> dict[str, Any]:
        """Generate a JSON report from a run outcome.

        Args:
            outcome: Collected results of the run.
            config: Configuration the run used.
            duration_ms: Run duration in milliseconds.

        Returns:
            Report dictionary ready for JSON serialization. Files are
            listed in completion order.
        """
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "config": config.to_dict() if config else None,
            "status": outcome.status.value,
            "exit_code": outcome.exit_code,
            "summary": {
                "total": outcome.total_count,
                "succeeded": outcome.succeeded_count,
                "failed": outcome.failed_count,
                "duration_ms": duration_ms,
            },
            "files": [
                {
                    "file": r.filename,
                    "status": "pass" if r.succeeded else "fail",
                    "exit_code": r.exit_code,
                    "failed_to_spawn": r.failed_to_spawn,
                    "duration_ms": r.duration_ms,
                    "output": r.output,
                }
                for r in outcome.results
            ],
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path
