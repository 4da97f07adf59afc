"""
Tests for the throttle policy.
"""

import unittest

from summarization.throttle import ThrottleDecision, decide

MINUTE = 60 * 1000
WINDOW = 91 * MINUTE


class TestThrottlePolicy(unittest.TestCase):
    """Test decide()."""

    def test_fresh_inside_window(self):
        decision = decide(now=1_000 + MINUTE, generated_at=1_000, window=WINDOW)
        self.assertTrue(decision.is_fresh)
        self.assertEqual(decision.remaining, WINDOW - MINUTE)
        self.assertEqual(decision.next_eligible_at, 1_000 + WINDOW)

    def test_boundary_is_expired(self):
        """An age equal to the window is expired."""
        decision = decide(now=5_000 + WINDOW, generated_at=5_000, window=WINDOW)
        self.assertFalse(decision.is_fresh)
        self.assertIsNone(decision.remaining)

    def test_one_millisecond_before_boundary_is_fresh(self):
        decision = decide(now=5_000 + WINDOW - 1, generated_at=5_000, window=WINDOW)
        self.assertTrue(decision.is_fresh)
        self.assertEqual(decision.remaining, 1)

    def test_expired_after_window(self):
        decision = decide(now=WINDOW + 1, generated_at=0, window=WINDOW)
        self.assertFalse(decision.is_fresh)
        self.assertEqual(decision.next_eligible_at, WINDOW)

    def test_future_timestamp_not_clamped(self):
        """Clock skew: generated_at after now stays fresh with remaining > window."""
        decision = decide(now=10_000, generated_at=10_000 + MINUTE, window=WINDOW)
        self.assertTrue(decision.is_fresh)
        self.assertEqual(decision.remaining, WINDOW + MINUTE)
        self.assertGreater(decision.remaining, WINDOW)

    def test_matches_definition_over_grid(self):
        for generated_at in (0, 1_000, 1_700_000_000_000):
            for age in (-WINDOW, -1, 0, 1, WINDOW - 1, WINDOW, WINDOW + 1, 3 * WINDOW):
                now = generated_at + age
                decision = decide(now, generated_at, WINDOW)
                self.assertEqual(decision.is_fresh, now - generated_at < WINDOW)

    def test_deterministic(self):
        first = decide(123_456, 100_000, WINDOW)
        second = decide(123_456, 100_000, WINDOW)
        self.assertEqual(first, second)
        self.assertIsInstance(first, ThrottleDecision)


if __name__ == "__main__":
    unittest.main()
