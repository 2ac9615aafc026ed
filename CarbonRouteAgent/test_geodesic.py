"""
Unit tests for the haversine great-circle distance.
"""

import math
import unittest

from geodesic import Coordinate, EARTH_RADIUS_KM, great_circle_distance_km


class TestGreatCircleDistance(unittest.TestCase):
    """Test suite for great_circle_distance_km."""

    def setUp(self):
        self.sao_paulo = Coordinate(-23.55052, -46.633308)
        self.rio = Coordinate(-22.906847, -43.172896)

    def test_same_point_is_zero(self):
        self.assertEqual(great_circle_distance_km(self.sao_paulo, self.sao_paulo), 0)
        self.assertEqual(great_circle_distance_km(Coordinate(2.8196, -60.6738), Coordinate(2.8196, -60.6738)), 0)

    def test_symmetric(self):
        pairs = [
            (self.sao_paulo, self.rio),
            (Coordinate(-3.119027, -60.021731), Coordinate(-30.027708, -51.228734)),
            (Coordinate(2.8196, -60.6738), Coordinate(-8.047562, -34.877)),
        ]
        for a, b in pairs:
            self.assertAlmostEqual(great_circle_distance_km(a, b), great_circle_distance_km(b, a), places=9)

    def test_one_degree_of_latitude(self):
        d = great_circle_distance_km(Coordinate(-30.0, -50.0), Coordinate(-31.0, -50.0))
        self.assertAlmostEqual(d, EARTH_RADIUS_KM * math.pi / 180, places=6)

    def test_antipodal_points(self):
        d = great_circle_distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
        self.assertAlmostEqual(d, math.pi * EARTH_RADIUS_KM, places=6)

    def test_sao_paulo_to_rio(self):
        d = great_circle_distance_km(self.sao_paulo, self.rio)
        self.assertAlmostEqual(d, 360, delta=8)

    def test_never_negative(self):
        d = great_circle_distance_km(Coordinate(10.0, 10.0), Coordinate(-10.0, -10.0))
        self.assertGreater(d, 0)


if __name__ == '__main__':
    unittest.main()
