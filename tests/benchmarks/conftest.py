"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: 10-key flat, 100-key nested, 500-key record set.
Each tier provides the Document and its serialized YAML text.
"""

from __future__ import annotations

from typing import Any

import pytest

from docsync import dump_tree


def generate_flat_document(num_keys: int, prefix: str = "key") -> dict[str, Any]:
    """Generate a flat map with deterministic string values."""
    return {f"{prefix}_{i}": f"value_{i}" for i in range(num_keys)}


def _make_nested_100() -> dict[str, Any]:
    """Generate a 100-key nested document.

    Structure: 10 sections x (9 leaf keys each) = 100 total keys.
    """
    return {
        f"section_{i}": {f"field_{i}_{j}": j if j % 2 else f"v_{i}_{j}" for j in range(9)}
        for i in range(10)
    }


def _make_record_set_500() -> dict[str, Any]:
    """Generate a ~500-key record set.

    Structure: 50 records x 9 scalar properties plus a nested address map,
    the shape the form's bulk property actions operate on.
    """
    records = []
    for i in range(50):
        records.append(
            {
                "id": i,
                "name": f"name_{i}",
                "active": i % 3 == 0,
                "score": i * 1.5,
                "note": None,
                "tags": [f"t{i}", f"u{i}"],
                "address": {"city": f"city_{i}", "zip": f"{10000 + i}"},
            }
        )
    return {"records": records}


# --- Fixtures for each size tier ---


@pytest.fixture
def doc_10key() -> dict[str, Any]:
    """10-key flat document."""
    return generate_flat_document(10)


@pytest.fixture
def doc_100key() -> dict[str, Any]:
    """100-key nested document (10 sections x 9 leaf keys)."""
    return _make_nested_100()


@pytest.fixture
def doc_500key() -> dict[str, Any]:
    """~500-key record set (50 records)."""
    return _make_record_set_500()


@pytest.fixture
def text_500key(doc_500key: dict[str, Any]) -> str:
    """Serialized YAML of the 500-key record set."""
    return dump_tree(doc_500key)
