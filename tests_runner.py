"""Runs every test in the tests directory (a test file must start with test)."""

import os
from unittest import TestLoader, TestSuite, TextTestRunner
from typing import Final

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import pygame as pg

# Surfaces need a display
pg.init()
pg.Window("", (1, 1), hidden=True).get_surface()

_TEST_SUITE: Final[TestSuite] = TestLoader().discover("tests")
TextTestRunner(verbosity=2).run(_TEST_SUITE)
