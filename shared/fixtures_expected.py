"""Single source of truth for expected heightmap test fixtures.

This module defines the fixture filenames and their expected answers, used by:
- scripts/gen_fixtures.py (generation verification)
- tests/infrastructure/test_fixtures_sanity.py (existence and answer checks)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY this module.
"""

from __future__ import annotations

# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(
    [
        "empty.txt",  # Empty file rejection
        "heightmap.csv",  # Unsupported extension rejection
        "heightmap_bad_char.txt",  # Character outside a-z/S/E
        "heightmap_canonical.txt",  # Canonical 8x5 sample: 31 steps
        "heightmap_duplicate_start.txt",  # Two 'S' markers
        "heightmap_missing_goal.txt",  # No 'E' marker
        "heightmap_ragged.txt",  # Row 3 is one cell short
        "heightmap_staircase.txt",  # Single row climbing a..z
        "heightmap_walled.txt",  # Wall of 'z' cuts start off from goal
    ]
)

EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)

# Valid heightmaps -> (steps from S, steps from any 'a'); None = unreachable
EXPECTED_ANSWERS: dict[str, tuple[int | None, int | None]] = {
    "heightmap_canonical.txt": (31, 29),
    "heightmap_staircase.txt": (25, 25),
    "heightmap_walled.txt": (None, None),
}
