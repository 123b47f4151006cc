import math

import pytest

from schedsim.algorithms import (
    ALGORITHMS,
    run_algorithm,
    schedule_fcfs,
    schedule_priority_np,
    schedule_priority_p,
    schedule_rr,
    schedule_sjf,
    schedule_srtf,
)
from schedsim.errors import InputError, SimulationError
from schedsim.models import IDLE, build_processes


def _procs():
    return build_processes([0, 1, 2], [5, 3, 8], priorities=[2, 1, 3])


def _gantt(result):
    return [(s.pid, s.start_time, s.end_time) for s in result.timeline]


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]
    assert res.processes[0].waiting_time == 0
    assert res.processes[1].waiting_time == 4
    assert res.processes[2].waiting_time == 6


def test_fcfs_scenario():
    res = schedule_fcfs(build_processes([0, 2, 4], [5, 3, 2]))
    assert [p.completion_time for p in res.processes] == [5, 8, 10]
    assert [p.waiting_time for p in res.processes] == [0, 3, 4]
    assert all(not s.is_idle for s in res.timeline)


def test_fcfs_equal_arrivals_keep_input_order():
    res = schedule_fcfs(build_processes([0, 0, 0], [3, 1, 2]))
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]


def test_fcfs_idle_gap():
    res = schedule_fcfs(build_processes([0, 5], [2, 2]))
    assert _gantt(res) == [("P1", 0, 2), (IDLE, 2, 5), ("P2", 5, 7)]
    assert res.processes[1].completion_time == 7
    assert res.processes[1].waiting_time == 0
    assert res.system.idle_time == 3


def test_idle_before_first_arrival():
    res = schedule_fcfs(build_processes([3], [2]))
    assert _gantt(res) == [(IDLE, 0, 3), ("P1", 3, 5)]


def test_sjf_order():
    res = schedule_sjf(_procs())
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]


def test_sjf_picks_shortest_ready_job():
    res = schedule_sjf(build_processes([0, 1, 2, 3], [6, 8, 7, 3]))
    assert [s.pid for s in res.timeline] == ["P1", "P4", "P3", "P2"]
    assert [p.completion_time for p in res.processes] == [6, 24, 16, 9]


def test_sjf_tie_breaks_on_input_position():
    res = schedule_sjf(build_processes([0, 1, 1], [2, 3, 3]))
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]


def test_srtf_scenario():
    res = schedule_srtf(build_processes([0, 1, 2, 3], [8, 4, 9, 5]))
    assert [p.waiting_time for p in res.processes] == [9, 0, 15, 2]
    assert [p.turnaround_time for p in res.processes] == [17, 4, 24, 7]
    assert _gantt(res) == [("P1", 0, 1), ("P2", 1, 5), ("P4", 5, 10), ("P1", 10, 17), ("P3", 17, 26)]


def test_srtf_start_time_is_first_dispatch():
    res = schedule_srtf(build_processes([0, 1, 2, 3], [8, 4, 9, 5]))
    assert res.processes[0].start_time == 0
    assert res.processes[0].completion_time == 17


def test_srtf_arrival_at_completion_instant():
    res = schedule_srtf(build_processes([0, 2], [2, 1]))
    assert _gantt(res) == [("P1", 0, 2), ("P2", 2, 3)]


def test_srtf_simultaneous_arrivals():
    res = schedule_srtf(build_processes([0, 0], [3, 1]))
    assert _gantt(res) == [("P2", 0, 1), ("P1", 1, 4)]


def test_srtf_completes():
    res = schedule_srtf(_procs())
    assert {p.pid for p in res.processes} == {"P1", "P2", "P3"}
    assert res.system.cpu_busy_time == sum(p.burst_time for p in _procs())
    assert _gantt(res) == [("P1", 0, 1), ("P2", 1, 4), ("P1", 4, 8), ("P3", 8, 16)]


def test_rr_scenario():
    res = schedule_rr(build_processes([0, 1, 2], [4, 3, 2]), quantum=2)
    assert _gantt(res) == [("P1", 0, 2), ("P2", 2, 4), ("P3", 4, 6), ("P1", 6, 8), ("P2", 8, 9)]
    assert [p.completion_time for p in res.processes] == [8, 9, 6]
    assert [p.waiting_time for p in res.processes] == [4, 5, 2]


def test_rr_quantum_2():
    res = schedule_rr(_procs(), quantum=2)
    # Ensure all processes appear in timeline and total time matches sum of bursts
    assert {s.pid for s in res.timeline} == {"P1", "P2", "P3"}
    assert sum(p.burst_time for p in _procs()) == res.system.cpu_busy_time
    assert [p.completion_time for p in res.processes] == [12, 9, 16]
    # P3's last two slices run back to back and merge.
    assert _gantt(res)[-1] == ("P3", 12, 16)


def test_rr_new_arrivals_queue_ahead_of_preempted_process():
    res = schedule_rr(build_processes([0, 2], [4, 2]), quantum=2)
    assert _gantt(res) == [("P1", 0, 2), ("P2", 2, 4), ("P1", 4, 6)]


def test_rr_simultaneous_mid_slice_arrivals_queue_by_input_position():
    res = schedule_rr(build_processes([0, 1, 1], [3, 2, 2]), quantum=2)
    assert _gantt(res) == [("P1", 0, 2), ("P2", 2, 4), ("P3", 4, 6), ("P1", 6, 7)]


def test_rr_idle_then_resume():
    res = schedule_rr(build_processes([0, 6], [3, 1]), quantum=2)
    assert _gantt(res) == [("P1", 0, 3), (IDLE, 3, 6), ("P2", 6, 7)]


@pytest.mark.parametrize("quantum", [None, 0, -2, 1.5])
def test_rr_rejects_bad_quantum(quantum):
    with pytest.raises(InputError):
        schedule_rr(_procs(), quantum=quantum)


def test_priority_static():
    res = schedule_priority_np(_procs())
    # P1 is alone at t=0 and runs to completion, then P2 (priority 1) beats P3
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]
    assert res.processes[0].priority == 2


def test_priority_np_ties_break_on_arrival():
    res = schedule_priority_np(build_processes([0, 0, 1], [1, 4, 2], priorities=[1, 2, 2]))
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]


def test_priority_preemptive():
    res = schedule_priority_p(_procs())
    assert _gantt(res) == [("P1", 0, 1), ("P2", 1, 4), ("P1", 4, 8), ("P3", 8, 16)]
    assert [p.waiting_time for p in res.processes] == [3, 0, 6]
    assert res.processes[0].start_time == 0


def test_priority_preemptive_lower_priority_arrival_does_not_preempt():
    res = schedule_priority_p(build_processes([0, 1], [4, 2], priorities=[1, 5]))
    assert _gantt(res) == [("P1", 0, 4), ("P2", 4, 6)]


@pytest.mark.parametrize("func", [schedule_priority_np, schedule_priority_p])
def test_priority_requires_priorities(func):
    with pytest.raises(InputError):
        func(build_processes([0, 1], [2, 2]))


def test_float_times():
    res = schedule_fcfs(build_processes([0, 0.5], [1.5, 1]))
    assert _gantt(res) == [("P1", 0, 1.5), ("P2", 1.5, 2.5)]
    assert res.processes[1].waiting_time == pytest.approx(1.0)


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_unreachable_arrival_raises_simulation_error(name):
    processes = build_processes([math.nan], [2], priorities=[1])
    with pytest.raises(SimulationError):
        run_algorithm(name, processes, quantum=2)


def test_run_algorithm_normalizes_name():
    res = run_algorithm("  Priority-P ", _procs())
    assert res.algorithm == "Priority (preemptive)"


def test_run_algorithm_unknown():
    with pytest.raises(InputError, match="not supported"):
        run_algorithm("mlfq", _procs())
