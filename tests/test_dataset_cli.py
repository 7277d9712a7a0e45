import json
from generate_dataset import main as gen_cli
from lattice import WIDTH, from_string
from simulate import simulate

def _run_generator(tmp_path, *, n=6, timesteps=2, density=0.35, seed=77, boundary="fixed"):
    """
    Helper that invokes the CLI and returns pathlib.Path to the file.
    """
    outfile = tmp_path / "nested" / "out.jsonl"   # nested dir exercises mkdir
    gen_cli(
        [
            "--n", str(n),
            "--timesteps", str(timesteps),
            "--density", str(density),
            "--seed", str(seed),
            "--boundary", boundary,
            "--outfile", str(outfile),
        ]
    )
    return outfile

def test_cli_generates_jsonl(tmp_path):
    outfile = _run_generator(tmp_path, n=10)
    lines = outfile.read_text().splitlines()

    assert len(lines) == 10
    first = json.loads(lines[0])
    for field in ("rule", "boundary", "timesteps", "init", "target"):
        assert field in first

def test_cli_creates_nested_directories(tmp_path):
    out_path = _run_generator(tmp_path)
    assert out_path.exists()
    assert out_path.parent.is_dir()

def test_cli_deterministic_with_seed(tmp_path):
    first = _run_generator(tmp_path, seed=123).read_text()
    second = _run_generator(tmp_path, seed=123).read_text()
    assert first == second

def test_targets_match_engine(tmp_path):
    outfile = _run_generator(tmp_path, n=8, timesteps=3, boundary="periodic")
    for line in outfile.read_text().splitlines():
        obj = json.loads(line)
        assert len(obj["init"]) == WIDTH
        assert len(obj["target"]) == WIDTH
        assert set(obj["init"]) <= {"0", "1"}
        assert obj["boundary"] == "periodic"
        expected = simulate(from_string(obj["init"]), obj["rule"], obj["timesteps"], obj["boundary"])
        assert from_string(obj["target"]) == expected
