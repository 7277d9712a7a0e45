import csv
import pytest
from benchmark import append_csv, benchmark, main as bench_cli
from lattice import BoundaryMode

def test_benchmark_result():
    result = benchmark(30, 0b101, generations=3, repeats=2)
    assert result.final_cells == 0b110111
    assert result.repeats == 2
    assert result.boundary is BoundaryMode.FIXED
    assert 0 <= result.best_seconds <= result.mean_seconds
    assert result.generations_per_second > 0

def test_benchmark_with_workers_matches():
    seq = benchmark(110, 1 << 64, "periodic", generations=20, repeats=1)
    par = benchmark(110, 1 << 64, "periodic", generations=20, repeats=1, workers=4)
    assert seq.final_cells == par.final_cells

def test_benchmark_invalid_args():
    with pytest.raises(ValueError):
        benchmark(30, 1, repeats=0)
    with pytest.raises(ValueError):
        benchmark(30, 1, generations=-1)

def test_append_csv_writes_header_once(tmp_path):
    path = tmp_path / "results" / "bench.csv"
    result = benchmark(90, 1, generations=5, repeats=1)
    append_csv(result, path)
    append_csv(result, path)
    rows = list(csv.reader(path.open()))
    assert len(rows) == 3
    assert rows[0][0] == "date_utc"
    assert rows[1][1] == "90"

def test_cli(tmp_path, capsys):
    path = tmp_path / "bench.csv"
    bench_cli(["--rule", "30", "--generations", "10", "--repeats", "1", "--csv", str(path)])
    out = capsys.readouterr().out
    assert "Throughput" in out
    assert path.exists()

def test_cli_bad_rule():
    with pytest.raises(SystemExit) as exc:
        bench_cli(["--rule", "999"])
    assert exc.value.code == 2
