from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, PRIORITY_ALGORITHMS, QUANTUM_ALGORITHMS
from .api import simulate
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

ALGORITHM_NAMES = [name.upper() for name in ALGORITHMS]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, RR, PRIORITY-NP, PRIORITY-P).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Shortcut for --log-level DEBUG.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHM_NAMES)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the results table and Gantt chart as JSON.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHM_NAMES),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_NAMES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst"]
    if result.include_priority:
        headers.append("Priority")
    headers += ["Start", "Complete", "Turnaround", "Wait", "Response"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        row = [p.pid, str(p.arrival_time), str(p.burst_time)]
        if result.include_priority:
            row.append(str(p.priority))
        row += [
            str(p.start_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        ]
        proc_table.add_row(*row)

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _run(args: argparse.Namespace, console: Console) -> int:
    workload = load_workload(Path(args.workload))
    result = simulate(
        args.algorithm,
        workload.arrival_times,
        workload.burst_times,
        time_quantum=args.quantum,
        priorities=workload.priorities,
    )
    if args.json:
        console.print_json(data=result.to_dict(include_response=True))
    else:
        _print_result(result, console, plain=args.plain)
    return 0


def _compare(args: argparse.Namespace, console: Console) -> int:
    """
    Run each requested algorithm on the workload and print the summary table.
    """
    workload = load_workload(Path(args.workload))

    summary_table = Table(title=f"Algorithm comparison: {args.workload}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in args.algorithms:
        key = alg.strip().lower()
        if key in PRIORITY_ALGORITHMS and workload.priorities is None:
            logger.warning("Skipping %s: workload has no priorities", alg)
            continue
        result = simulate(
            alg,
            workload.arrival_times,
            workload.burst_times,
            time_quantum=args.quantum if key in QUANTUM_ALGORITHMS else None,
            priorities=workload.priorities,
        )
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else args.log_level)
    console = Console()

    try:
        if args.command == "run":
            return _run(args, console)
        if args.command == "compare":
            return _compare(args, console)
    except (SchedulerError, ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
