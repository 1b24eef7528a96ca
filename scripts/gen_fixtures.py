#!/usr/bin/env python3
"""Generate heightmap fixtures for parser, adapter and navigation tests.

Fixtures are small hand-designed heightmaps, including deliberately malformed
ones for the structural error cases.

Usage:
    PYTHONPATH=src:. python scripts/gen_fixtures.py

Output:
    tests/fixtures/*.txt (and one .csv)

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path

from shared.fixtures_expected import EXPECTED_FIXTURE_COUNT, EXPECTED_FIXTURES

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

# =============================================================================
# Canonical sample
# =============================================================================
# S at top-left, E near bottom-right; the only route spirals inward through
# q..x around the goal. Fewest steps: 31 from S, 29 from the best 'a'.
CANONICAL_ROWS = [
    "Sabqponm",
    "abcryxxl",
    "accszExk",
    "acctuvwj",
    "abdefghi",
]


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


def write_heightmap(name: str, rows: list[str]) -> None:
    """Write rows as a newline-terminated heightmap file."""
    path = FIXTURES_DIR / name
    path.write_text("".join(f"{row}\n" for row in rows), encoding="utf-8")
    width = len(rows[0]) if rows else 0
    print(f"  Created: {path.name} ({width}x{len(rows)})")


def with_cell(rows: list[str], column: int, row: int, ch: str) -> list[str]:
    """Return a copy of rows with one cell replaced."""
    out = list(rows)
    out[row] = out[row][:column] + ch + out[row][column + 1 :]
    return out


# =============================================================================
# Valid heightmaps
# =============================================================================
def gen_canonical() -> None:
    write_heightmap("heightmap_canonical.txt", CANONICAL_ROWS)


def gen_staircase() -> None:
    # S (a), b..y, E (z): one legal climb per step
    letters = "".join(chr(c) for c in range(ord("b"), ord("y") + 1))
    write_heightmap("heightmap_staircase.txt", [f"S{letters}E"])


def gen_walled() -> None:
    # Column 3 is all 'z'; nothing west of it is higher than 'c'
    write_heightmap("heightmap_walled.txt", ["Sabzxy", "abczyE", "abczxy"])


# =============================================================================
# Malformed heightmaps
# =============================================================================
def gen_ragged() -> None:
    rows = list(CANONICAL_ROWS)
    rows[3] = rows[3][:-1]
    write_heightmap("heightmap_ragged.txt", rows)


def gen_missing_goal() -> None:
    write_heightmap("heightmap_missing_goal.txt", with_cell(CANONICAL_ROWS, 5, 2, "z"))


def gen_duplicate_start() -> None:
    write_heightmap(
        "heightmap_duplicate_start.txt", with_cell(CANONICAL_ROWS, 7, 4, "S")
    )


def gen_bad_char() -> None:
    write_heightmap("heightmap_bad_char.txt", with_cell(CANONICAL_ROWS, 5, 3, "#"))


def gen_empty() -> None:
    path = FIXTURES_DIR / "empty.txt"
    path.write_bytes(b"")
    print(f"  Created: {path.name} (0 bytes)")


def gen_wrong_extension() -> None:
    path = FIXTURES_DIR / "heightmap.csv"
    path.write_text("".join(f"{row}\n" for row in CANONICAL_ROWS), encoding="utf-8")
    print(f"  Created: {path.name} (valid content, unsupported extension)")


def main() -> int:
    """Generate all fixtures and verify them against EXPECTED_FIXTURES."""
    print("=" * 60)
    print("Generating Heightmap Test Fixtures")
    print("=" * 60)

    try:
        ensure_dir()
    except OSError as e:
        print(f"ERROR: Cannot create fixtures directory: {e}")
        return 1

    print("\nValid heightmaps")
    gen_canonical()
    gen_staircase()
    gen_walled()

    print("\nMalformed heightmaps")
    gen_ragged()
    gen_missing_goal()
    gen_duplicate_start()
    gen_bad_char()
    gen_empty()
    gen_wrong_extension()

    found_set = {f.name for f in FIXTURES_DIR.iterdir() if f.is_file()}
    expected_set = set(EXPECTED_FIXTURES)

    if found_set != expected_set:
        print("ERROR: Fixture filenames do not match expected list!")
        missing = expected_set - found_set
        extra = found_set - expected_set
        if missing:
            print(f"  Missing (expected but not generated): {sorted(missing)}")
        if extra:
            print(f"  Extra (generated but not expected): {sorted(extra)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
