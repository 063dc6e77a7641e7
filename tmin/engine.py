from __future__ import annotations

from typing import Optional, TextIO

from .config import JobConfig
from .cutter import SourceUnit
from .invariants import create_invariant
from .lang import get_language
from .minimizer import Minimizer
from .report import FileReport, RunReport
from .strategies import create_strategy
from .version import tool_version


def build_minimizer(job: JobConfig, out: Optional[TextIO] = None) -> Minimizer:
    language = get_language(job.resolve_language())
    units = [SourceUnit(m.input, m.output, job.charset) for m in job.files]
    return Minimizer(
        units,
        language,
        create_invariant(job.invariant.name, job.invariant.options),
        create_strategy(job.strategy.name, job.strategy.options),
        out=out,
    )


def run_job(job: JobConfig, out: Optional[TextIO] = None) -> RunReport:
    """Minimize the job's files in place (in their outputs) and describe the run."""
    minimizer = build_minimizer(job, out)
    minimizer.run()
    return RunReport(
        tool_version=tool_version(),
        language=minimizer.language.name,
        strategy=minimizer.strategy.name,
        invariant=minimizer.invariant.name,
        original_size_bytes=minimizer.original_size,
        original_node_count=minimizer.original_node_count,
        passes=minimizer.pass_number,
        commits=minimizer.commits,
        failed_attempts=minimizer.failed_attempts,
        forced_exit=minimizer.exit_requested,
        history=minimizer.history,
        files=[
            FileReport(
                input=str(cutter.unit.input_path),
                output=str(cutter.unit.working_path),
                size_bytes=cutter.committed_size,
            )
            for cutter in minimizer.cutters
        ],
    )


__all__ = ["build_minimizer", "run_job"]
