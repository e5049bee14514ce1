"""
analyze_matrix.py — Print the full analysis of a 2×2 transformation.

No server needed. Useful for checking classifier / eigen output by hand.

Usage:
    python scripts/analyze_matrix.py 0 -1 1 0
    python scripts/analyze_matrix.py 2 0 0 3 --b 1 1 0 1 --phase step_a
    python scripts/analyze_matrix.py 1 1 0 1 --json
    python scripts/analyze_matrix.py 1 0 0 1 --preset shear_x --language ja
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

# ── project root on path ──────────────────────────────────────────────────────
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("analyze_matrix")

from algebra.matrix import IDENTITY, Matrix
from config.settings import settings
from visualizer.phase import Phase
from visualizer.snapshot import Snapshot, compute_snapshot
from visualizer.state import PRESETS


def _fmt_rows(m: Matrix) -> str:
    return f"[[{m.a:.4g}, {m.b:.4g}], [{m.c:.4g}, {m.d:.4g}]]"


def format_report(snap: Snapshot) -> str:
    lines = [
        f"A        = {_fmt_rows(snap.matrix_a)}",
        f"B        = {_fmt_rows(snap.matrix_b)}",
        f"C = B·A  = {_fmt_rows(snap.matrix_c)}",
        f"phase    = {snap.phase.value}  →  current = {_fmt_rows(snap.current)}",
        f"i'       = ({snap.basis_i.x:.4g}, {snap.basis_i.y:.4g})",
        f"j'       = ({snap.basis_j.x:.4g}, {snap.basis_j.y:.4g})",
        f"det      = {snap.determinant:.4g}  (area {snap.area:.4g}, orientation {snap.orientation})",
        f"type     = {snap.classification.title}: {snap.classification.description}",
    ]

    if snap.eigen is None:
        lines.append("eigen    = complex eigenvalues (not visualizable)")
    else:
        for i, (lam, v) in enumerate(zip(snap.eigen.values, snap.eigen.vectors), start=1):
            note = "" if snap.eigen.drawable(i - 1) else "  (degenerate)"
            lines.append(f"λ{i}       = {lam:.4g}  v{i} = ({v.x:.4g}, {v.y:.4g}){note}")

    diag = snap.diagonalization
    if diag is None or not diag.available:
        lines.append("P·D·P⁻¹  = not available")
    else:
        lines.append(f"P        = {_fmt_rows(diag.p)}")
        lines.append(f"D        = {_fmt_rows(diag.d)}")
        lines.append(f"P⁻¹      = {_fmt_rows(diag.p_inv)}")

    lines.append(f"inverse  = {'available' if snap.inverse_available else 'A is singular'}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(description="Analyze a 2×2 linear transformation.")
    parser.add_argument("a", type=float, nargs=4, metavar="N",
                        help="Matrix A, row-major")
    parser.add_argument("--b", type=float, nargs=4, default=None, metavar="N",
                        help="Matrix B, row-major (default: identity)")
    parser.add_argument("--phase", default=Phase.COMPOSITE.value,
                        choices=[p.value for p in Phase])
    parser.add_argument("--preset", default=None, choices=sorted(PRESETS),
                        help="Replace A with a preset (B resets to identity)")
    parser.add_argument("--language", default=settings.default_language, choices=["en", "ja"])
    parser.add_argument("--json", action="store_true", help="Emit the raw snapshot as JSON")
    args = parser.parse_args(argv)

    a = Matrix(*args.a)
    b = Matrix(*args.b) if args.b else IDENTITY
    if args.preset:
        log.info("Using preset '%s' for A", args.preset)
        a, b = PRESETS[args.preset], IDENTITY

    snap = compute_snapshot(a, b, Phase(args.phase), args.language)

    if args.json:
        print(json.dumps(snap.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_report(snap))
    return 0


if __name__ == "__main__":
    sys.exit(main())
