import logging
import unittest
from utils import *

class TestUtils(unittest.TestCase):
    def test_lcm(self):
        self.assertEqual(gcd(12, 18), 6)
        self.assertEqual(lcm(2, 3), 6)
        self.assertEqual(lcm(4, 6, 10), 60)
        self.assertEqual(lcm(), 1)

    def test_check_memory(self):
        self.assertGreater(check_memory(verbose=False), 0)

    def test_tf(self):
        self.assertEqual(tf(max, [3, 7]), 7)

    def test_get_logger(self):
        logger = get_logger(stream=False)
        self.assertIsInstance(logger, logging.Logger)

if __name__ == '__main__':
    unittest.main()
