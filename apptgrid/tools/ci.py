from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple


def _repo_root() -> Path:
    # <repo>/apptgrid/tools/ci.py -> parents[2] == <repo>
    return Path(__file__).resolve().parents[2]


def _fmt_ms(ms: int) -> str:
    s = ms / 1000.0
    if s < 1:
        return f"{ms}ms"
    if s < 60:
        return f"{s:.2f}s"
    m = int(s // 60)
    return f"{m}m{s - m * 60:04.1f}s"


def _run_step(*, label: str, cmd: List[str], cwd: Path, env: dict[str, str]) -> Tuple[int, str]:
    """Run one step; return (rc, combined_output)."""
    start = time.time()
    p = subprocess.run(cmd, cwd=str(cwd), env=env, capture_output=True, text=True)
    dur_ms = int((time.time() - start) * 1000)

    out = p.stdout or ""
    err = p.stderr or ""
    combined = (out + ("\n" if out and err else "") + err).strip()

    status = "OK" if p.returncode == 0 else "FAIL"
    print(f"[apptgrid-ci] {status}: {label} ({_fmt_ms(dur_ms)})")
    if combined and (p.returncode != 0 or label == "unittest"):
        print(combined)
    return p.returncode, combined


def _have(cmd: str) -> bool:
    return shutil.which(cmd) is not None


def build_steps(ns: argparse.Namespace, repo: Path) -> List[Tuple[str, List[str]]]:
    steps: List[Tuple[str, List[str]]] = []
    if not ns.skip_compileall:
        steps.append(("compileall", [sys.executable, "-m", "compileall", "-q", str(repo / "apptgrid")]))
    if not ns.skip_lint:
        if _have("ruff"):
            steps.append(("ruff check", ["ruff", "check", "apptgrid", "tests"]))
        else:
            print("[apptgrid-ci] WARN: ruff not found; skipping lint")
    if not ns.skip_tests:
        cmd = [sys.executable, "-m", "unittest", "discover", "-s", "tests"]
        if ns.pattern:
            cmd += ["-p", ns.pattern]
        steps.append(("unittest", cmd))
    return steps


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="apptgrid-ci",
        description="One-command CI gate (deterministic, UTC).",
    )
    ap.add_argument("--skip-compileall", action="store_true", help="Skip python -m compileall.")
    ap.add_argument("--skip-lint", action="store_true", help="Skip ruff checks (if installed).")
    ap.add_argument("--skip-tests", action="store_true", help="Skip unit/contract tests.")
    ap.add_argument("--pattern", default=None, help="unittest discovery pattern, e.g. 'test_contract_geometry*.py'")
    ns = ap.parse_args(argv)

    repo = _repo_root()

    # Determinism: day boundaries and "today" resolve in UTC.
    env = os.environ.copy()
    env["PYTHONPATH"] = str(repo)
    env["TZ"] = "UTC"
    env["APPTGRID_TZ"] = "UTC"

    started = time.time()
    for label, cmd in build_steps(ns, repo):
        rc, _ = _run_step(label=label, cmd=cmd, cwd=repo, env=env)
        if rc != 0:
            print(f"[apptgrid-ci] RESULT: FAIL ({_fmt_ms(int((time.time() - started) * 1000))})")
            return 2

    print(f"[apptgrid-ci] RESULT: OK ({_fmt_ms(int((time.time() - started) * 1000))})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
