"""
Tests for the Value History Ledger.

These tests verify:
1. Positions are assigned in append order, starting at zero
2. Out-of-range lookups yield NO_VALUE instead of raising
3. Entries cannot be rewritten once recorded
"""

import dataclasses

import pytest

from chainable.ledger import NO_VALUE, EntryKind, Ledger, LedgerEntry


# =============================================================================
# NO_VALUE MARKER TESTS
# =============================================================================

class TestNoValueMarker:
    """Test the "no value" marker."""
    
    def test_marker_is_falsy(self):
        """NO_VALUE behaves as false in conditions."""
        assert not NO_VALUE
    
    def test_marker_is_not_none(self):
        """NO_VALUE must stay distinguishable from a recorded None."""
        assert NO_VALUE is not None
    
    def test_marker_is_singleton(self):
        """Creating the marker type again returns the same object."""
        assert type(NO_VALUE)() is NO_VALUE
    
    def test_marker_repr(self):
        assert repr(NO_VALUE) == "NO_VALUE"


# =============================================================================
# APPEND / LOOKUP TESTS
# =============================================================================

class TestLedgerAppend:
    """Test append ordering and lookup."""
    
    def test_append_returns_positions_in_order(self):
        """Each append gets the next zero-based position."""
        ledger = Ledger()
        
        assert ledger.append("a") == 0
        assert ledger.append("b") == 1
        assert ledger.append("c") == 2
        assert len(ledger) == 3
    
    def test_at_returns_recorded_value(self):
        ledger = Ledger()
        ledger.append(10)
        ledger.append([1, 2])
        
        assert ledger.at(0) == 10
        assert ledger.at(1) == [1, 2]
    
    def test_none_is_a_recorded_value(self):
        """A None result is stored as None, not as NO_VALUE."""
        ledger = Ledger()
        ledger.append(None)
        
        assert ledger.at(0) is None
    
    def test_past_the_end_is_no_value(self):
        """Lookups beyond the recorded range are not errors."""
        ledger = Ledger()
        ledger.append(1)
        
        assert ledger.at(1) is NO_VALUE
        assert ledger.at(100) is NO_VALUE
    
    def test_negative_index_is_no_value(self):
        """Negative positions are out of range, not counted from the end."""
        ledger = Ledger()
        ledger.append(1)
        
        assert ledger.at(-1) is NO_VALUE
    
    def test_non_integer_index_raises(self):
        ledger = Ledger()
        ledger.append(1)
        
        with pytest.raises(TypeError):
            ledger.at("0")
    
    def test_lookup_does_not_append(self):
        """Reading the ledger never changes its length."""
        ledger = Ledger()
        ledger.append("x")
        
        ledger.at(0)
        ledger.at(0)
        ledger.at(5)
        
        assert len(ledger) == 1
    
    def test_values_in_order(self):
        ledger = Ledger()
        for value in ("a", "b", "c"):
            ledger.append(value)
        
        assert ledger.values() == ["a", "b", "c"]


# =============================================================================
# ENTRY TESTS
# =============================================================================

class TestLedgerEntries:
    """Test entry metadata and immutability."""
    
    def test_entry_carries_member_and_kind(self):
        ledger = Ledger()
        ledger.append(3, member="__len__", kind=EntryKind.CALL)
        ledger.append("x", member="name", kind=EntryKind.WRITE)
        
        first = ledger.entry(0)
        second = ledger.entry(1)
        
        assert first == LedgerEntry(0, "__len__", EntryKind.CALL, 3)
        assert second.kind == EntryKind.WRITE
        assert second.member == "name"
    
    def test_entry_out_of_range_is_none(self):
        assert Ledger().entry(0) is None
    
    def test_entries_are_frozen(self):
        """A recorded entry cannot be modified."""
        ledger = Ledger()
        ledger.append(1)
        
        with pytest.raises(dataclasses.FrozenInstanceError):
            ledger.entry(0).value = 2
    
    def test_iteration_is_a_snapshot(self):
        """Appending while iterating does not affect the iteration."""
        ledger = Ledger()
        ledger.append(1)
        ledger.append(2)
        
        seen = []
        for entry in ledger:
            seen.append(entry.position)
            ledger.append(entry.value * 10)
        
        assert seen == [0, 1]
        assert ledger.values() == [1, 2, 10, 20]
