"""Configuration for the PDF report renderer.

Usage
-----
>>> config = RendererConfig()
>>> config.retention_days
30

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class RendererConfig:
    """Settings for where reports are written and how long they are kept.

    Attributes
    ----------
    output_dir
        Directory receiving rendered PDF files. Created on first render.
    retention_days
        Reports whose modification time is older than this many days are
        removed by ``cleanup_old_reports``.
    school_name
        Heading printed at the top of every report.

    """

    output_dir: Path = Path("reports")
    retention_days: int = 30
    school_name: str = "Student Report"

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            msg = f"{env_var} must be an integer, got: {raw!r}"
            raise ValueError(msg) from exc
        if value < 1:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_env(cls) -> RendererConfig:
        """Create configuration from environment variables.

        Reads ``REPORTCARD_OUTPUT_DIR``, ``REPORTCARD_REPORT_RETENTION_DAYS``
        and ``REPORTCARD_SCHOOL_NAME``; unset values keep their defaults.

        Raises
        ------
        ValueError
            If the retention period is not a positive integer.

        """
        defaults = cls()
        raw_dir = os.environ.get("REPORTCARD_OUTPUT_DIR", "").strip()
        school_name = os.environ.get("REPORTCARD_SCHOOL_NAME", "").strip()
        return cls(
            output_dir=Path(raw_dir) if raw_dir else defaults.output_dir,
            retention_days=cls._parse_positive_int(
                "REPORTCARD_REPORT_RETENTION_DAYS", defaults.retention_days
            ),
            school_name=school_name or defaults.school_name,
        )
