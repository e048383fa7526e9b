import os
import sys
import json

# Add evaluation to path
EVALUATION_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'evaluation'))
if EVALUATION_DIR not in sys.path:
	sys.path.insert(0, EVALUATION_DIR)

import evaluation as ev


SAMPLE_OUTPUT = """
============================= test session starts ==============================
collected 4 items

tests/test_after.py::test_single_symbol_input PASSED                      [ 25%]
tests/test_after.py::test_truncated_stream_behavior FAILED                [ 50%]
tests/test_core.py::test_optimal_cost SKIPPED (no reason)                 [ 75%]
tests/test_cli.py::test_usage_error ERROR                                 [100%]

=========================== short test summary info ============================
"""


def test_parse_pytest_verbose_output():
	tests = ev.parse_pytest_verbose_output(SAMPLE_OUTPUT)
	assert [t["outcome"] for t in tests] == ["passed", "failed", "skipped", "error"]
	assert tests[0]["nodeid"] == "tests/test_after.py::test_single_symbol_input"
	assert tests[0]["name"] == "test_single_symbol_input"


def test_summarize_counts():
	summary = ev.summarize(ev.parse_pytest_verbose_output(SAMPLE_OUTPUT))
	assert summary == {"total": 4, "passed": 1, "failed": 1, "errors": 1, "skipped": 1}


def test_sample_inputs_are_deterministic():
	first = ev.sample_inputs()
	second = ev.sample_inputs()
	assert first == second
	assert all(first.values())


def test_measure_reports_sizes_and_roundtrip():
	svc = ev.HuffmanService()
	row = ev.measure(svc, b"abcd" * 64, repeat=1)
	assert row["roundtrip_ok"]
	assert row["original_size"] == 256
	assert row["compressed_size"] == 64
	assert row["bits_per_symbol"] == 2.0
	assert row["distinct_symbols"] == 4


def test_skewed_sample_compresses():
	svc = ev.HuffmanService()
	data = ev.sample_inputs()["skewed"]
	row = ev.measure(svc, data, repeat=1)
	assert row["compressed_size"] < len(data)
	assert row["ratio"] > 1.0


def test_main_writes_benchmark_report(tmp_path, capsys):
	out = tmp_path / "report.json"
	assert ev.main(["--skip-tests", "--repeat", "1", "--output", str(out)]) == 0
	report = json.loads(out.read_text())
	assert report["success"] is True
	assert report["tests"] is None
	assert set(report["benchmarks"]) == set(ev.sample_inputs())
	assert report["benchmarks"]["single_symbol"]["compressed_size"] == 512
	assert "COMPRESSION BENCHMARKS" in capsys.readouterr().out
