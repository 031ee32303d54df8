"""Automated smoke-run for the recipe notebook CLI.

Checks, against a throwaway recipe directory:
- loads .env
- `sample` bootstraps the sample recipe
- `new` creates a scaffold recipe
- `list`, `show` and `validate` succeed on what was written
- `show` on a missing file exits non-zero

Usage:
  python scripts/smoke_run.py [--keep]

Exit code: 0 on success (all checks), non-zero if any step fails.
"""

import subprocess
import sys
import tempfile
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()
ROOT = Path(__file__).resolve().parents[1]
PY = sys.executable


def run_cli(args, recipes_dir):
    cmd = [PY, "-m", "src.cli"] + list(args) + ["--dir", str(recipes_dir)]
    print("\n>>> Running:", " ".join(cmd))
    p = subprocess.run(cmd, capture_output=True, text=True, cwd=ROOT, timeout=60)
    print("--- stdout ---")
    print(p.stdout[:4000])
    if p.stderr:
        print("--- stderr ---")
        print(p.stderr[:4000])
    return p.returncode, p.stdout


if __name__ == "__main__":
    keep = "--keep" in sys.argv
    recipes_dir = Path(tempfile.mkdtemp(prefix="recipes-smoke-"))
    print("Python:", PY)
    print("Recipe dir:", recipes_dir)

    checks = [
        (["sample"], 0, "Sample ensured"),
        (["new", "Smoke", "Test"], 0, "Created recipe-"),
        (["list"], 0, "sample-stir-fry.md"),
        (["show", "sample-stir-fry.md"], 0, "Blocks: 5"),
        (["validate", "sample-stir-fry.md"], 0, "Round-trip OK"),
        (["show", "missing.md"], 1, "No markdown found"),
    ]

    failed = False
    for args, want_rc, want_text in checks:
        rc, out = run_cli(args, recipes_dir)
        if rc != want_rc or want_text not in out:
            print(f"CHECK FAILED: {args} rc={rc} (want {want_rc}), expected {want_text!r}")
            failed = True

    if not keep:
        for f in recipes_dir.iterdir():
            f.unlink()
        recipes_dir.rmdir()

    if failed:
        print("\nSMOKE RUN: FAIL")
        sys.exit(2)
    print("\nSMOKE RUN: SUCCESS")
    sys.exit(0)
