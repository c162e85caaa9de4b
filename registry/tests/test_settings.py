import importlib
import os
from unittest import mock

from django.test import SimpleTestCase


class ProductionSettingsTestCase(SimpleTestCase):

    def load_production(self, allowed_hosts=None):
        env = {key: value for key, value in os.environ.items() if key != 'ALLOWED_HOSTS'}
        if allowed_hosts is not None:
            env['ALLOWED_HOSTS'] = allowed_hosts

        with mock.patch.dict(os.environ, env, clear=True):
            from config.settings import production
            return importlib.reload(production)

    def test_allowed_hosts_empty_when_unset(self):
        self.assertEqual(self.load_production().ALLOWED_HOSTS, [])

    def test_allowed_hosts_skips_blank_entries(self):
        production = self.load_production('events.example.com,,www.example.com')
        self.assertEqual(production.ALLOWED_HOSTS, ['events.example.com', 'www.example.com'])
