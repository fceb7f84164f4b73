"""
Tests for SlipEXConfig
"""

import logging
from pathlib import Path

import pytest
import yaml

from slipex.config.slipex_config import SlipEXConfig
from slipex.processors.tax.validator import DocumentValidator


class TestSlipEXConfig:
    """Tests for loading and accessing configuration"""

    def test_defaults(self):
        config = SlipEXConfig()
        assert config.get('classifier.min_score') == 2
        assert config.get('classifier.realistic_max_score') == 10
        assert config.get('validation.penalties.missing_required') == 50
        assert config.get('validation.reference_year') is None
        assert config.get('missing.key', 'fallback') == 'fallback'

    def test_singleton(self):
        assert SlipEXConfig() is SlipEXConfig()

    def test_set_and_reset(self):
        SlipEXConfig().set('validation.reference_year', 2025)
        assert SlipEXConfig().get('validation.reference_year') == 2025

        SlipEXConfig.reset()
        assert SlipEXConfig().get('validation.reference_year') is None

    def test_get_returns_a_copy(self):
        config = SlipEXConfig()
        ranges = config.get('validation.receipt_ranges')
        ranges['GAS_RECEIPT']['maximum'] = 1
        assert config.get('validation.receipt_ranges.GAS_RECEIPT.maximum') == 500

    def test_from_file_deep_merges(self, tmp_path):
        path = tmp_path / 'overrides.yaml'
        path.write_text(yaml.dump({'validation': {'penalties': {'minor': 7}}}))

        config = SlipEXConfig.from_file(str(path))
        assert config.get('validation.penalties.minor') == 7
        assert config.get('validation.penalties.missing_required') == 50

    def test_from_file_rejects_non_mapping(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text('- just\n- a list\n')

        with pytest.raises(ValueError):
            SlipEXConfig.from_file(str(path))

    def test_user_config_file(self):
        user_dir = Path.home() / '.slipex'
        user_dir.mkdir()
        (user_dir / 'config.yaml').write_text(yaml.dump({'validation': {'reference_year': 2025}}))

        assert SlipEXConfig().get('validation.reference_year') == 2025
        assert DocumentValidator().settings.reference_year == 2025


class TestConfigureLogging:
    """Tests for logging setup"""

    def test_explicit_level(self):
        SlipEXConfig().configure_logging('DEBUG')
        assert logging.getLogger('slipex').level == logging.DEBUG

    def test_configured_level(self):
        config = SlipEXConfig()
        config.set('logging.level', 'ERROR')
        config.configure_logging()
        assert logging.getLogger('slipex').level == logging.ERROR

    def test_unknown_level_falls_back_to_warning(self):
        SlipEXConfig().configure_logging('NOPE')
        assert logging.getLogger('slipex').level == logging.WARNING
