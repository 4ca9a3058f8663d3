"""Unit tests for rotor phase kinematics."""

import math

import pytest
from numpy.testing import assert_allclose

from airframe.propulsion import RotorKinematics
from airframe.spatial import TWO_PI, wrap_angle

# =============================================================================
# Angle Wrapping
# =============================================================================


class TestWrapAngle:
    """Test wrapping into [0, 2*pi)."""

    @pytest.mark.parametrize("angle", [0.0, 1.0, TWO_PI, 7.5, 100.0, -0.1, -7.5, -1e-17, 1e9])
    def test_range(self, angle):
        """Wrapped angle lies in [0, 2*pi)."""
        wrapped = wrap_angle(angle)
        assert 0.0 <= wrapped < TWO_PI

    def test_full_turn_is_zero(self):
        """A full turn wraps to zero."""
        assert wrap_angle(TWO_PI) == 0.0

    def test_negative(self):
        """Negative angles wrap from the top of the range."""
        assert_allclose(wrap_angle(-0.5), TWO_PI - 0.5, rtol=1e-12)


# =============================================================================
# Rotor Integration
# =============================================================================


class TestRotorKinematics:
    """Test phase integration."""

    def test_single_step(self):
        """psi += omega * dt."""
        rotor = RotorKinematics(omega=10.0)
        rotor.update(0.01)
        assert_allclose(rotor.psi, 0.1, rtol=1e-12)

    def test_zero_rate_holds_phase(self):
        """Rotor at rest keeps its phase."""
        rotor = RotorKinematics(psi=1.2)
        for _ in range(100):
            rotor.update(0.01)
        assert_allclose(rotor.psi, 1.2, rtol=1e-12)

    @pytest.mark.parametrize("omega", [42.4, -42.4, 0.3, 250.0, -1000.0])
    def test_phase_stays_in_range(self, omega):
        """Phase stays within [0, 2*pi) after every update."""
        rotor = RotorKinematics(omega=omega)
        for _ in range(5000):
            psi = rotor.update(0.0037)
            assert 0.0 <= psi < TWO_PI

    @pytest.mark.parametrize("omega", [42.4, -42.4, 0.3, 250.0, -1000.0])
    def test_unwrapped_phase_differs_by_whole_turns(self, omega):
        """omega * elapsed time equals wrapped phase plus whole turns."""
        dt = 0.0037
        steps = 5000
        rotor = RotorKinematics(omega=omega)
        for _ in range(steps):
            rotor.update(dt)

        unwrapped = omega * dt * steps
        turns = (unwrapped - rotor.psi) / TWO_PI

        assert_allclose(turns, round(turns), atol=1e-6)
        assert rotor.revolutions == round(turns)

    def test_rate_can_change_between_steps(self):
        """Externally driven rate is used from the next step on."""
        rotor = RotorKinematics(omega=1.0)
        rotor.update(0.5)
        rotor.omega = 2.0
        rotor.update(0.5)
        assert_allclose(rotor.psi, 1.5, rtol=1e-12)

    def test_non_finite_rate_rejected(self):
        """A NaN rate keeps the previous rate."""
        rotor = RotorKinematics(omega=3.0)
        rotor.omega = float("nan")
        assert rotor.omega == 3.0

    def test_non_finite_dt_rejected(self):
        """A NaN time step leaves the phase unchanged."""
        rotor = RotorKinematics(omega=3.0, psi=0.5)
        assert rotor.update(float("nan")) == 0.5
        assert math.isfinite(rotor.psi)

    def test_negative_dt_rejected(self):
        """Negative time step is a programming error."""
        with pytest.raises(ValueError):
            RotorKinematics(omega=1.0).update(-0.1)

    def test_reset(self):
        """Reset wraps the new phase and clears the turn count."""
        rotor = RotorKinematics(omega=100.0)
        for _ in range(100):
            rotor.update(0.01)
        assert rotor.revolutions > 0

        rotor.reset(TWO_PI + 0.25)
        assert_allclose(rotor.psi, 0.25, rtol=1e-12)
        assert rotor.revolutions == 0
