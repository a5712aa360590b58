import argparse
import importlib
import os
import unittest
import unittest.mock

from startup import Startup

import closeleak
from closeleak import startups
from closeleak import trackers


class StartupsTest(unittest.TestCase):

    def setUp(self):
        self.enabled = trackers.is_enabled()
        self.max_depth = trackers.D['MAX_DEPTH']
        trackers.disable()

    def tearDown(self):
        trackers.D['MAX_DEPTH'] = self.max_depth
        if self.enabled:
            trackers.enable()
        else:
            trackers.disable()

    def call(self, *args):
        startup = Startup()
        startups.init(startup=startup)
        startup.set(startups.PARSER, argparse.ArgumentParser())
        startup.set(startups.ARGV, ['prog'] + list(args))
        return startup.call()

    def test_default(self):
        varz = self.call()
        self.assertFalse(varz[startups.ARGS].close_leak)
        self.assertFalse(trackers.is_enabled())
        self.assertEqual(self.max_depth, trackers.D['MAX_DEPTH'])

    def test_enable(self):
        varz = self.call('--close-leak', '--close-leak-max-depth', '8')
        self.assertTrue(varz[startups.ARGS].close_leak)
        self.assertTrue(trackers.is_enabled())
        self.assertEqual(8, trackers.D['MAX_DEPTH'])

    def test_configure(self):
        with self.assertRaises(ValueError):
            startups.configure(argparse.Namespace(
                close_leak=True,
                close_leak_max_depth=0,
            ))
        self.assertFalse(trackers.is_enabled())

    def test_environ(self):
        for value in ('', '0'):
            with unittest.mock.patch.dict(os.environ, {startups.ENV_VAR: value}):
                importlib.reload(startups)
            self.assertFalse(trackers.is_enabled(), repr(value))

        with unittest.mock.patch.dict(os.environ, {startups.ENV_VAR: '1'}):
            importlib.reload(startups)
        self.assertTrue(trackers.is_enabled())

    def test_environ_is_documented(self):
        for module in (closeleak, trackers, startups):
            self.assertIn(startups.ENV_VAR, module.__doc__, module.__name__)
        self.assertIn('closeleak.startups', closeleak.__doc__)
        self.assertIn('closeleak.startups', trackers.__doc__)


if __name__ == '__main__':
    unittest.main()
