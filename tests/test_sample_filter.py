"""
Tests for DiscreteOrientation and SampleFilter
===============================================
"""

import pytest

from gesture_rehab.core.types import DiscreteOrientation, Pose
from gesture_rehab.sensing.sample_filter import SampleFilter


class TestToleranceEquality:
    """Test suite for DiscreteOrientation.approx_equals."""

    def test_reflexive(self):
        a = DiscreteOrientation(4, 11, 17)
        assert a.approx_equals(a)
        assert a.approx_equals(a, tolerance=0)

    def test_symmetric(self):
        a = DiscreteOrientation(4, 11, 17)
        b = DiscreteOrientation(6, 9, 16)
        assert a.approx_equals(b) and b.approx_equals(a)

        c = DiscreteOrientation(7, 11, 17)
        assert not a.approx_equals(c) and not c.approx_equals(a)

    def test_not_transitive(self):
        """A ~ B and B ~ C do not imply A ~ C once drift exceeds the tolerance."""
        a = DiscreteOrientation(0, 0, 0)
        b = DiscreteOrientation(2, 2, 2)
        c = DiscreteOrientation(4, 4, 4)

        assert a.approx_equals(b)
        assert b.approx_equals(c)
        assert not a.approx_equals(c)

    def test_single_axis_out_of_tolerance(self):
        a = DiscreteOrientation(9, 9, 9)
        assert not a.approx_equals(DiscreteOrientation(9, 9, 12))
        assert a.approx_equals(DiscreteOrientation(9, 9, 12), tolerance=3)

    def test_immutable(self):
        a = DiscreteOrientation(1, 2, 3)
        with pytest.raises(AttributeError):
            a.roll = 5

    def test_rendering(self):
        a = DiscreteOrientation(1, 2, 3)
        assert str(a) == "[R: 1][P: 2][Y: 3]"
        assert a.to_dict() == {"roll": 1, "pitch": 2, "yaw": 3}
        assert DiscreteOrientation.from_dict(a.to_dict()) == a


class TestPose:
    """Pose helpers."""

    def test_from_string(self):
        assert Pose.from_string("confirm") is Pose.CONFIRM
        assert Pose.from_string("CANCEL") is Pose.CANCEL
        assert Pose.from_string("fist") is Pose.OTHER

    def test_is_control(self):
        assert Pose.CONFIRM.is_control
        assert Pose.CANCEL.is_control
        assert not Pose.NONE.is_control
        assert not Pose.OTHER.is_control


class TestSampleFilter:
    """Test suite for SampleFilter."""

    @pytest.fixture
    def sample_filter(self):
        return SampleFilter()

    def test_first_sample_accepted(self, sample_filter):
        assert sample_filter.accept(DiscreteOrientation(0, 0, 0))
        assert sample_filter.previous == DiscreteOrientation(0, 0, 0)

    def test_duplicate_rejected(self, sample_filter):
        s = DiscreteOrientation(5, 6, 7)
        results = [sample_filter.accept(s), sample_filter.accept(s)]

        assert results == [True, False]
        assert sample_filter.accepted_count == 1
        assert sample_filter.rejected_count == 1

    def test_small_change_accepted(self, sample_filter):
        sample_filter.accept(DiscreteOrientation(5, 6, 7))
        assert sample_filter.accept(DiscreteOrientation(5, 6, 8))

    def test_compares_with_last_accepted_only(self, sample_filter):
        a = DiscreteOrientation(1, 1, 1)
        b = DiscreteOrientation(2, 2, 2)
        accepted = [sample_filter.accept(s) for s in (a, b, a, a, b)]
        assert accepted == [True, True, True, False, True]

    def test_reset(self, sample_filter):
        s = DiscreteOrientation(5, 6, 7)
        sample_filter.accept(s)
        sample_filter.reset()

        assert sample_filter.previous is None
        assert sample_filter.accepted_count == 0
        assert sample_filter.accept(s)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
