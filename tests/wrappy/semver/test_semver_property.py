# tests/wrappy/semver/test_semver_property.py
from __future__ import annotations

import pytest

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given, strategies as st  # type: ignore[no-redef]

from wrappy.semver.semver import MAX_COMPONENT, Version, parseVersion


component = st.integers(min_value=0, max_value=MAX_COMPONENT)
versions = st.builds(Version, component, component, component)


@given(versions)
def test_format_then_parse_is_identity(v: Version) -> None:
    assert parseVersion(str(v)) == v


@given(versions)
def test_every_version_is_compatible_with_itself(v: Version) -> None:
    assert v.isCompatibleWith(v)


@given(versions, versions)
def test_order_matches_tuple_order(a: Version, b: Version) -> None:
    assert (a < b) == ((a.major, a.minor, a.patch) < (b.major, b.minor, b.patch))


@given(versions, versions)
def test_compatibility_implies_same_major_and_not_older(a: Version, b: Version) -> None:
    if a.isCompatibleWith(b):
        assert a.major == b.major
        assert a >= b
