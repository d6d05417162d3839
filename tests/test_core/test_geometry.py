"""
Tests for the geometry helpers.

Covers rotation about a center, normalized corner boxes and the
inverse-rotation point test used by handle hit-testing.
"""

import unittest
import math

from pagesketch.core.geometry import (
    BoundingBox, Point, bounding_box_of, is_valid_coordinate, normalized_rect,
    point_in_rotated_rect, pointer_angle, rotate_point
)


class TestPoint(unittest.TestCase):
    """Test Point arithmetic."""

    def test_subtract(self):
        self.assertEqual(Point(3, 4) - Point(1, 2), Point(2, 2))

    def test_copy_is_independent(self):
        a = Point(1, 1)
        b = a.copy()
        b.x = 10
        self.assertEqual(a.x, 1)


class TestRotation(unittest.TestCase):
    """Test rotate_point and pointer_angle."""

    def test_quarter_turn_is_clockwise_on_screen(self):
        """Positive angles turn +x towards +y (downward)."""
        p = rotate_point(Point(0, 0), Point(10, 0), math.pi / 2)
        self.assertAlmostEqual(p.x, 0.0)
        self.assertAlmostEqual(p.y, 10.0)

    def test_rotation_about_center(self):
        center = Point(50, 50)
        p = rotate_point(center, Point(60, 50), math.pi)
        self.assertAlmostEqual(p.x, 40.0)
        self.assertAlmostEqual(p.y, 50.0)

    def test_round_trip(self):
        """Rotating by an angle and back returns the original point."""
        center = Point(12.5, -3)
        original = Point(100, 42)
        for degrees in (15, 90, 137, -220, 720):
            rad = math.radians(degrees)
            back = rotate_point(center, rotate_point(center, original, rad), -rad)
            self.assertAlmostEqual(back.x, original.x, places=9)
            self.assertAlmostEqual(back.y, original.y, places=9)

    def test_pointer_angle(self):
        self.assertAlmostEqual(pointer_angle(Point(0, 0), Point(0, 10)), math.pi / 2)
        self.assertAlmostEqual(pointer_angle(Point(5, 5), Point(10, 5)), 0.0)


class TestBoxes(unittest.TestCase):
    """Test BoundingBox and box helpers."""

    def test_normalized_rect_handles_reversed_corners(self):
        box = normalized_rect(100, 80, 20, 10)
        self.assertEqual(box, BoundingBox(20, 10, 100, 80))
        self.assertEqual(box.width, 80)
        self.assertEqual(box.height, 70)

    def test_contains_includes_edges(self):
        box = BoundingBox(0, 0, 10, 10)
        self.assertTrue(box.contains(Point(0, 0)))
        self.assertTrue(box.contains(Point(10, 10)))
        self.assertFalse(box.contains(Point(10.01, 5)))

    def test_center_and_top_left(self):
        box = BoundingBox(10, 20, 30, 60)
        self.assertEqual(box.center, Point(20, 40))
        self.assertEqual(box.top_left, Point(10, 20))

    def test_bounding_box_of_points(self):
        box = bounding_box_of([Point(5, 1), Point(-2, 7), Point(3, 3)])
        self.assertEqual(box, BoundingBox(-2, 1, 5, 7))

    def test_bounding_box_of_empty_raises(self):
        with self.assertRaises(ValueError):
            bounding_box_of([])


class TestRotatedRect(unittest.TestCase):
    """Test point_in_rotated_rect."""

    def test_unrotated_matches_contains(self):
        rect = BoundingBox(90, 0, 100, 10)
        self.assertTrue(point_in_rotated_rect(Point(95, 5), rect, Point(50, 50), 0))

    def test_half_turn_moves_rect_to_opposite_corner(self):
        """A top-right handle rotated 180 degrees sits at the bottom-left."""
        rect = BoundingBox(90, 0, 100, 10)
        center = Point(50, 50)
        self.assertFalse(point_in_rotated_rect(Point(95, 5), rect, center, 180))
        self.assertTrue(point_in_rotated_rect(Point(5, 95), rect, center, 180))


class TestCoordinateValidation(unittest.TestCase):
    """Test is_valid_coordinate."""

    def test_valid(self):
        self.assertTrue(is_valid_coordinate(0, 0))
        self.assertTrue(is_valid_coordinate(-3.5, 1e6))

    def test_invalid(self):
        self.assertFalse(is_valid_coordinate(None, 5))
        self.assertFalse(is_valid_coordinate(float("nan"), 5))
        self.assertFalse(is_valid_coordinate(5, float("inf")))
        self.assertFalse(is_valid_coordinate("5", 5))


if __name__ == '__main__':
    unittest.main()
