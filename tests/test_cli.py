"""
Tests for the SlipEX CLI
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from slipex.cli import cli

from sample_documents import GAS_TEXT, RANDOM_TEXT, T4_TEXT, UBER_ANNUAL_TEXT


@pytest.fixture
def runner():
    return CliRunner()


class TestTypesCommand:
    """Tests for `slipex types`"""

    def test_lists_types(self, runner):
        result = runner.invoke(cli, ['types'])
        assert result.exit_code == 0
        lines = result.stdout.split()
        assert 'T4' in lines
        assert 'RL-1' in lines
        assert 'UNKNOWN' in lines


class TestClassifyCommand:
    """Tests for `slipex classify`"""

    def test_stdin_json(self, runner):
        result = runner.invoke(cli, ['--format', 'json', 'classify', '-'], input=T4_TEXT)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data['document_type'] == 'T4'
        assert data['confidence'] == 70

    def test_file_name_is_a_hint(self, runner, tmp_path):
        path = tmp_path / 't4_2024.txt'
        path.write_text(T4_TEXT, encoding='utf-8')

        result = runner.invoke(cli, ['classify', str(path)])
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)['confidence'] == 80

    def test_config_option(self, runner, tmp_path):
        config_path = tmp_path / 'config.yaml'
        config_path.write_text(yaml.dump({'classifier': {'min_score': 100}}))

        result = runner.invoke(cli, ['--config', str(config_path), 'classify', '-'], input=T4_TEXT)
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)['method'] == 'fallback'


class TestExtractCommand:
    """Tests for `slipex extract`"""

    def test_explicit_type(self, runner):
        result = runner.invoke(cli, ['extract', '-', '--type', 'GAS_RECEIPT'], input=GAS_TEXT)
        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data['document_type'] == 'GAS_RECEIPT'
        assert data['fields']['total'] == 65.98
        assert data['fields']['date'] == '03/15/2024'

    def test_classified_type(self, runner):
        result = runner.invoke(cli, ['--format', 'json', 'extract', '-'], input=UBER_ANNUAL_TEXT)
        data = json.loads(result.stdout)
        assert data['document_type'] == 'UBER_SUMMARY'
        assert data['fields']['gross_fares'] == 2000.0
        assert data['fields']['period'] == '2024'


class TestValidateCommand:
    """Tests for `slipex validate`"""

    def test_invalid_fields_exit_nonzero(self, runner, tmp_path):
        path = tmp_path / 'fields.yaml'
        path.write_text(yaml.dump({'gross_fares': 1000.0, 'net_earnings': 1500.0, 'period': '2024'}))

        result = runner.invoke(cli, ['validate', str(path), '--type', 'UBER_SUMMARY'])
        assert result.exit_code == 1
        data = yaml.safe_load(result.stdout)
        assert data['is_valid'] is False
        assert any('cannot exceed gross earnings' in e for e in data['errors'])

    def test_accepts_extract_output(self, runner):
        extracted = runner.invoke(cli, ['--format', 'json', 'extract', '-', '--type', 'T4'], input=T4_TEXT)

        result = runner.invoke(cli, ['validate', '-', '--type', 'T4'], input=extracted.stdout)
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)['is_valid'] is True

    def test_unquoted_yaml_date(self, runner, tmp_path):
        """An ISO date that YAML loads as a date object is still a valid receipt date"""
        config_path = tmp_path / 'config.yaml'
        config_path.write_text(yaml.dump({'validation': {'reference_year': 2025}}))
        path = tmp_path / 'fields.yaml'
        path.write_text("total: 40.0\nvendor: Esso\ndate: 2024-03-15\n")

        result = runner.invoke(cli, ['--config', str(config_path), 'validate', str(path), '--type', 'GAS_RECEIPT'])
        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data['is_valid'] is True
        assert not any('Receipt date' in w for w in data['warnings'])

    def test_rejects_non_mapping(self, runner):
        result = runner.invoke(cli, ['validate', '-', '--type', 'T4'], input='- 1\n- 2\n')
        assert result.exit_code != 0

    def test_type_is_required(self, runner):
        result = runner.invoke(cli, ['validate', '-'], input='{}')
        assert result.exit_code == 2


class TestProcessCommand:
    """Tests for `slipex process`"""

    def test_single_file(self, runner, tmp_path):
        path = tmp_path / 'receipt.txt'
        path.write_text(GAS_TEXT, encoding='utf-8')

        result = runner.invoke(cli, ['--format', 'json', 'process', str(path)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data['filename'] == 'receipt.txt'
        assert data['document_type'] == 'GAS_RECEIPT'

    def test_many_files(self, runner, tmp_path):
        paths = []
        for name, text in [('a.txt', T4_TEXT), ('b.txt', RANDOM_TEXT)]:
            path = tmp_path / name
            path.write_text(text, encoding='utf-8')
            paths.append(str(path))

        result = runner.invoke(cli, ['--format', 'json', 'process', '--workers', '2'] + paths)
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [d['document_type'] for d in data] == ['T4', 'UNKNOWN']
        assert data[1]['is_valid'] is False
        assert data[1]['error'] == 'Could not identify document type'
