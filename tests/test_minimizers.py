"""
Tests for Candidate and CandidateSet
"""

import pytest
from interval_bnb import Box, Candidate, CandidateSet, Interval


def _cand(flo: float, fhi: float = None, x0: float = 0.0) -> Candidate:
    box = Box(Interval(x0, x0 + 0.25), Interval(0.0, 0.25))
    return Candidate(box, flo, flo + 1.0 if fhi is None else fhi)


class TestCandidate:
    """Ordering and rendering of candidates."""

    def test_ordered_by_flo(self):
        assert _cand(0.5) < _cand(1.0)
        assert sorted([_cand(3.0), _cand(-1.0), _cand(2.0)])[0].flo == -1.0

    def test_ties_broken_by_fhi_then_box(self):
        assert _cand(1.0, 2.0) < _cand(1.0, 3.0)
        assert _cand(1.0, 2.0, x0=0.0) < _cand(1.0, 2.0, x0=1.0)

    def test_format_uses_full_precision(self):
        text = _cand(1.0 / 3.0, 0.5).format(16)
        assert "0.3333333333333333" in text
        assert text.startswith("[0, 0.25] x [0, 0.25]")

    def test_to_canonical(self):
        data = _cand(1.0, 2.0).to_canonical()
        assert data["flo"] == 1.0
        assert data["fhi"] == 2.0
        assert data["box"]["x"] == {"lo": 0.0, "hi": 0.25}


class TestCandidateSet:
    """Ordered insert and suffix eviction."""

    def test_insert_keeps_order(self):
        cs = CandidateSet()
        for flo in [3.0, 1.0, 2.0, 0.0]:
            cs.insert(_cand(flo))
        assert [c.flo for c in cs] == [0.0, 1.0, 2.0, 3.0]
        assert cs.size() == 4
        assert len(cs) == 4

    def test_duplicates_permitted(self):
        cs = CandidateSet()
        cs.insert(_cand(1.0))
        cs.insert(_cand(1.0))
        assert len(cs) == 2

    def test_evict_from_removes_suffix(self):
        cs = CandidateSet([_cand(f) for f in [0.0, 1.0, 2.0, 3.0]])
        removed = cs.evict_from(2.0)
        assert removed == 2
        assert [c.flo for c in cs] == [0.0, 1.0]

    def test_evict_boundary_is_inclusive(self):
        """Entries with flo equal to the bound are removed."""
        cs = CandidateSet([_cand(1.0, 5.0), _cand(1.0, 6.0), _cand(0.5)])
        cs.evict_from(1.0)
        assert [c.flo for c in cs] == [0.5]

    def test_evict_nothing(self):
        cs = CandidateSet([_cand(0.0), _cand(1.0)])
        assert cs.evict_from(float('inf')) == 0
        assert len(cs) == 2

    def test_evict_everything(self):
        cs = CandidateSet([_cand(0.0), _cand(1.0)])
        assert cs.evict_from(-1.0) == 2
        assert not cs

    def test_is_consistent(self):
        cs = CandidateSet([_cand(0.0), _cand(1.0)])
        assert cs.is_consistent(1.5)
        assert not cs.is_consistent(1.0)
        cs.evict_from(1.0)
        assert cs.is_consistent(1.0)
        assert CandidateSet().is_consistent(float('-inf'))

    def test_merge(self):
        cs = CandidateSet([_cand(2.0)])
        cs.merge([_cand(1.0), _cand(3.0)])
        assert [c.flo for c in cs.to_list()] == [1.0, 2.0, 3.0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
