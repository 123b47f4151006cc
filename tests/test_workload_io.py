from pathlib import Path

import pytest

from schedsim.workload_io import Workload, load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"arrival_time":1,"burst_time":2}]')
    wl = load_workload(p)
    assert isinstance(wl, Workload)
    assert wl.arrival_times == [0, 1]
    assert wl.burst_times == [3, 2]
    # One row lacks a priority, so the workload has none.
    assert wl.priorities is None


def test_load_json_request_body(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"algorithm":"RR","arrivalTimes":[0,2],"burstTimes":[4,1.5],"priorities":[2,1]}')
    wl = load_workload(p)
    assert wl.arrival_times == [0, 2]
    assert wl.burst_times == [4, 1.5]
    assert wl.priorities == [2, 1]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time,priority\n0,3,1\n1,2.5,2\n")
    wl = load_workload(p)
    assert wl.arrival_times == [0, 1]
    assert wl.burst_times == [3, 2.5]
    assert wl.priorities == [1, 2]
    assert isinstance(wl.arrival_times[0], int)


def test_load_csv_without_priorities(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time,priority\n0,3,1\n1,2,\n")
    assert load_workload(p).priorities is None


def test_invalid_entry(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,abc\n")
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(ValueError, match="Unsupported workload format"):
        load_workload(p)
