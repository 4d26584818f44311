import os
import tempfile
import unittest
import argparse

from bsvalias.conf import Config, BaseConfig, String, Float, Toggle, NOT_SET
from bsvalias.error import ConfigFormatError, InvalidSettingError


class TestConfig(BaseConfig):
    test_str = String('str help', 'the default')
    test_float = Float('float help', 1.5)
    test_false_toggle = Toggle('toggle help', False)
    test_true_toggle = Toggle('toggle help', True)


class ConfigurationTests(unittest.TestCase):

    def test_defaults(self):
        c = Config()
        self.assertEqual(c.request_timeout, 30.0)
        self.assertTrue(c.user_agent.startswith('bsvalias/'))
        self.assertEqual(c.sender_key, '')
        self.assertTrue(c.config.endswith('settings.yml'))
        self.assertFalse(c.verbose)

    def test_search_order(self):
        c = TestConfig()
        c.runtime = {'test_str': 'runtime'}
        c.arguments = {'test_str': 'arguments'}
        c.environment = {'test_str': 'environment'}
        c.persisted = {'test_str': 'persisted'}
        self.assertEqual(c.test_str, 'runtime')
        c.runtime = {}
        self.assertEqual(c.test_str, 'arguments')
        c.arguments = {}
        self.assertEqual(c.test_str, 'environment')
        c.environment = {}
        self.assertEqual(c.test_str, 'persisted')
        c.persisted = {}
        self.assertEqual(c.test_str, 'the default')

    def test_arguments(self):
        parser = argparse.ArgumentParser()
        TestConfig.contribute_to_argparse(parser)

        c = TestConfig.create_from_arguments(parser.parse_args([]))
        self.assertEqual(c.test_str, 'the default')
        self.assertTrue(c.test_true_toggle)
        self.assertFalse(c.test_false_toggle)

        c = TestConfig.create_from_arguments(parser.parse_args(['--test-str', 'blah', '--test-float', '2.5']))
        self.assertEqual(c.test_str, 'blah')
        self.assertEqual(c.test_float, 2.5)

        c = TestConfig.create_from_arguments(parser.parse_args(['--no-test-true-toggle', '--test-false-toggle']))
        self.assertFalse(c.test_true_toggle)
        self.assertTrue(c.test_false_toggle)

    def test_environment(self):
        c = TestConfig()
        c.set_environment({'BSVALIAS_TEST_FLOAT': '4.0', 'BSVALIAS_TEST_TRUE_TOGGLE': 'false'})
        self.assertEqual(c.test_float, 4.0)
        self.assertFalse(c.test_true_toggle)

    def test_invalid_environment_value(self):
        c = TestConfig()
        with self.assertRaises(InvalidSettingError) as cm:
            c.set_environment({'BSVALIAS_TEST_FLOAT': 'abc'})
        self.assertEqual(cm.exception.name, 'test_float')
        self.assertEqual(cm.exception.value, 'abc')

    def test_verbose_toggle(self):
        parser = argparse.ArgumentParser()
        Config.contribute_to_argparse(parser)
        c = Config.create_from_arguments(parser.parse_args(['--verbose', '--config', '']))
        self.assertTrue(c.verbose)
        c = Config()
        c.set_environment({'BSVALIAS_VERBOSE': 'yes'})
        self.assertTrue(c.verbose)

    def test_runtime_validation(self):
        c = TestConfig()
        with self.assertRaises(AssertionError):
            c.test_float = 'fast'
        c.test_float = 9.0
        self.assertEqual(c.test_float, 9.0)
        c.test_float = NOT_SET
        self.assertEqual(c.test_float, 1.5)

    def test_persisted(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config = os.path.join(temp_dir, 'settings.yml')
            with open(config, 'w') as fd:
                fd.write('request_timeout: 5\nsender_handle: bob@example.org\nunknown: 1\n')
            c = Config(config=config)
            c.set_persisted()
            self.assertEqual(c.request_timeout, 5.0)
            self.assertEqual(c.sender_handle, 'bob@example.org')
            self.assertEqual(c.sender_name, '')
            self.assertNotIn('unknown', c.persisted)

    def test_malformed_persisted(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config = os.path.join(temp_dir, 'settings.yml')
            for content in ('- a list\n', 'request_timeout: [unclosed\n', 'request_timeout: soon\n'):
                with open(config, 'w') as fd:
                    fd.write(content)
                with self.assertRaises((ConfigFormatError, InvalidSettingError)):
                    Config(config=config).set_persisted()

    def test_unsupported_extension(self):
        c = TestConfig()
        with self.assertRaises(ConfigFormatError) as cm:
            c.set_persisted('settings.json')
        self.assertEqual(cm.exception.path, 'settings.json')
