#!/usr/bin/env python3
"""
Evaluation runner for the Huffman text compressor.

Runs the pytest suite under tests/, records the outcome of every test and
writes a JSON report together with environment metadata.

Run with:
    python evaluation/evaluation.py [--output report.json]
"""
import json
import platform
import subprocess
import sys
import uuid
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
STATUS_WORDS = {
    " PASSED": "passed",
    " FAILED": "failed",
    " ERROR": "error",
    " SKIPPED": "skipped",
}


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def _git(*args):
    try:
        result = subprocess.run(["git", *args], capture_output=True, text=True, timeout=5, cwd=str(PROJECT_ROOT))
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    if result.returncode != 0:
        return "unknown"
    return result.stdout.strip()


def get_environment_info():
    """Collect environment information for the report."""
    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": _git("rev-parse", "HEAD")[:8],
        "git_branch": _git("rev-parse", "--abbrev-ref", "HEAD"),
    }


def parse_pytest_verbose_output(output):
    """Parse ``pytest -v`` output into a list of per-test outcomes."""
    tests = []
    for line in output.splitlines():
        line = line.strip()
        if "::" not in line:
            continue
        for status_word, outcome in STATUS_WORDS.items():
            if status_word in line:
                nodeid = line.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break
    return tests


def summarize(tests):
    summary = {outcome: 0 for outcome in STATUS_WORDS.values()}
    for test in tests:
        summary[test["outcome"]] += 1
    summary["total"] = len(tests)
    return summary


def run_pytest(tests_dir, timeout=300):
    """Run pytest on ``tests_dir`` and return the parsed results."""
    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    print(" ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, cwd=str(PROJECT_ROOT), timeout=timeout)
    except subprocess.TimeoutExpired:
        return {"success": False, "exit_code": -1, "tests": [], "summary": {"error": "timeout"},
                "stdout": "", "stderr": ""}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    print(f"Results: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['error']} errors, {summary['skipped']} skipped (total: {summary['total']})")
    for test in tests:
        print(f"  {test['outcome']:>7}  {test['nodeid']}")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def generate_output_path(now=None):
    """Return evaluation/YYYY-MM-DD/HH-MM-SS/report.json under the project root."""
    now = now or datetime.now()
    return PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S") / "report.json"


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Run the test suite and write a JSON report")
    parser.add_argument("--output", type=str, default=None,
                        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)")
    parser.add_argument("--timeout", type=int, default=300, help="Seconds before the test run is abandoned")
    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")

    results = run_pytest(PROJECT_ROOT / "tests", timeout=args.timeout)

    finished_at = datetime.now()
    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round((finished_at - started_at).total_seconds(), 6),
        "success": results["success"],
        "environment": get_environment_info(),
        "results": results,
    }

    output_path = Path(args.output) if args.output else generate_output_path(started_at)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"Report saved to: {output_path}")

    return 0 if results["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
