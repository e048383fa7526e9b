#!/usr/bin/env python3
"""
Evaluation runner for the Huffman byte coder.

Measures the coder on a fixed set of sample inputs (size, ratio, bits per
symbol, timings, round-trip check), optionally runs the pytest suite, and
writes everything to one JSON report.

Run with:
    python evaluation/evaluation.py [--repeat N] [--skip-tests] [--output PATH]
"""
import os
import sys
import json
import random
import platform
import subprocess
import time
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
REPO_AFTER = PROJECT_ROOT / "repository_after"
if str(REPO_AFTER) not in sys.path:
    sys.path.insert(0, str(REPO_AFTER))

from huffman_core import HuffmanError
from huffman_service import HuffmanService, compression_ratio


def _log_lines():
    rng = random.Random(13)
    levels = ["INFO"] * 8 + ["WARN", "ERROR"]
    lines = []
    for i in range(400):
        lines.append(
            f"2024-05-{1 + i % 28:02d} 12:{i % 60:02d}:{(i * 7) % 60:02d} "
            f"{rng.choice(levels)} worker-{rng.randint(1, 4)} request handled in {rng.randint(1, 900)}ms\n"
        )
    return "".join(lines).encode("ascii")


def sample_inputs():
    """Named inputs the coder is measured on, all deterministic."""
    rng = random.Random(0)
    return {
        "skewed": b"jjjjjjjjjjjjjjjjjjjjjjjjjjjjhuw8hwerh8wrhv8whe8vwdhjjjjjjjjjjjj",
        "single_symbol": b"a" * 4096,
        "equal_weights": b"abcd" * 1024,
        "all_bytes": bytes(range(256)) * 16,
        "english": b"The quick brown fox jumps over the lazy dog. " * 100,
        "log_lines": _log_lines(),
        "random_4kb": bytes(rng.getrandbits(8) for _ in range(4096)),
    }


def measure(svc, data, repeat=3):
    """Best-of-``repeat`` timings plus size figures for one input."""
    table = svc.build_code_table(data)

    compress_times = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        compressed = svc.compress(data, table)
        compress_times.append(time.perf_counter() - t0)

    decompress_times = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        restored = svc.decompress(compressed, table, len(data))
        decompress_times.append(time.perf_counter() - t0)

    bits = table.encoded_bit_length()
    return {
        "original_size": len(data),
        "compressed_size": len(compressed),
        "ratio": round(compression_ratio(data, compressed), 4),
        "bits_per_symbol": round(bits / len(data), 4),
        "distinct_symbols": len(table),
        "max_code_length": table.max_code_length,
        "compress_ms": round(min(compress_times) * 1000, 3),
        "decompress_ms": round(min(decompress_times) * 1000, 3),
        "roundtrip_ok": restored == data,
    }


def run_benchmarks(repeat=3):
    print(f"\n{'=' * 72}")
    print("COMPRESSION BENCHMARKS")
    print(f"{'=' * 72}")
    print(f"{'sample':<14} {'size':>7} {'packed':>7} {'ratio':>7} {'bits/sym':>9} {'comp ms':>9} {'decomp ms':>10}")

    svc = HuffmanService()
    results = {}
    for name, data in sample_inputs().items():
        try:
            row = measure(svc, data, repeat)
        except HuffmanError as e:
            print(f"💥 {name:<12} {e}")
            results[name] = {"error": str(e), "roundtrip_ok": False}
            continue
        results[name] = row
        icon = "✅" if row["roundtrip_ok"] else "❌"
        print(f"{icon} {name:<12} {row['original_size']:>7} {row['compressed_size']:>7} "
              f"{row['ratio']:>7.3f} {row['bits_per_symbol']:>9.3f} "
              f"{row['compress_ms']:>9.3f} {row['decompress_ms']:>10.3f}")
    return results


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []

    for line in output.split('\n'):
        line_stripped = line.strip()

        # Match lines like: tests/test_after.py::test_single_symbol_input PASSED
        if '::' not in line_stripped:
            continue

        for status_word in (' PASSED', ' FAILED', ' ERROR', ' SKIPPED'):
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": status_word.strip().lower(),
                })
                break

    return tests


def summarize(tests):
    counts = {"passed": 0, "failed": 0, "error": 0, "skipped": 0}
    for t in tests:
        counts[t["outcome"]] += 1
    return {
        "total": len(tests),
        "passed": counts["passed"],
        "failed": counts["failed"],
        "errors": counts["error"],
        "skipped": counts["skipped"],
    }


def run_test_suite(timeout=300):
    print(f"\n{'=' * 72}")
    print("TEST SUITE")
    print(f"{'=' * 72}")

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_AFTER)
    cmd = [sys.executable, "-m", "pytest", str(PROJECT_ROOT / "tests"), "-v", "--tb=short"]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True,
                                cwd=str(PROJECT_ROOT), env=env, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        print(f"❌ Could not run pytest: {e}")
        return {"success": False, "summary": {"error": str(e)}, "tests": []}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    print(f"Results: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['errors']} errors, {summary['skipped']} skipped (total: {summary['total']})")
    for t in tests:
        if t["outcome"] in ("failed", "error"):
            print(f"  ❌ {t['nodeid']}")

    return {
        "success": result.returncode == 0,
        "summary": summary,
        "tests": tests,
        "stdout": result.stdout[-3000:],
    }


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Benchmark and test the Huffman coder")
    parser.add_argument("--repeat", type=int, default=3, help="Timing repetitions per sample")
    parser.add_argument("--skip-tests", action="store_true", help="Only run the benchmarks")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    args = parser.parse_args(argv)

    started_at = datetime.now()
    benchmarks = run_benchmarks(max(1, args.repeat))
    tests = None if args.skip_tests else run_test_suite()

    success = all(b["roundtrip_ok"] for b in benchmarks.values())
    if tests is not None:
        success = success and tests["success"]

    report = {
        "started_at": started_at.isoformat(),
        "duration_seconds": round((datetime.now() - started_at).total_seconds(), 6),
        "success": success,
        "environment": {
            "python_version": platform.python_version(),
            "platform": platform.platform(),
        },
        "benchmarks": benchmarks,
        "tests": tests,
    }

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = (PROJECT_ROOT / "evaluation" / started_at.strftime("%Y-%m-%d")
                       / started_at.strftime("%H-%M-%S") / "report.json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)

    print(f"\nReport saved to: {output_path}")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
