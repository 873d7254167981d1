import logging
import unittest

from gamecorner.utils.logger import configure_logging, get_logger, resolve_level


class LoggerTests(unittest.TestCase):
    def test_resolve_level(self) -> None:
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" Warning "), logging.WARNING)
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)
        self.assertEqual(resolve_level("chatty"), logging.INFO)
        self.assertEqual(resolve_level(None), logging.INFO)

    def test_configure_installs_single_handler(self) -> None:
        configure_logging("ERROR")
        configure_logging("ERROR")
        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 1)
        self.assertEqual(root.level, logging.ERROR)
        self.assertEqual(get_logger().name, "gamecorner")


if __name__ == "__main__":
    unittest.main()
