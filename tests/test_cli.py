"""Tests for the command-line entry point."""

import json
from unittest.mock import Mock, patch

import pytest

from susbot.cli import is_error_result, main
from susbot.models.scan import ContractSource, ScanResult
from susbot.services.scan_service import ContractScanService

ADDRESS = '0xbb9bc244d798123fde783fcc1c72d3bb8c189413'


@pytest.fixture
def provider():
    return Mock()


@pytest.fixture
def service(provider):
    service = ContractScanService(source_provider=provider, narrative_generator=None)
    with patch('susbot.cli.ContractScanService.from_settings', return_value=service):
        yield service


class TestCli:
    def test_scan_file_as_json(self, service, tmp_path, capsys):
        contract = tmp_path / 'Old.sol'
        contract.write_text('pragma solidity ^0.6.0;\ncontract Old {}\n', encoding='utf-8')

        exit_code = main(['--file', str(contract), '--json'])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        result = payload[str(contract)]
        assert result['score'] == 95
        assert result['summary'].startswith("Analysis of 'Old' complete.")

    def test_scan_address(self, service, provider, capsys):
        provider.get_contract_source.return_value = ContractSource(
            source_code='contract Vault { function kill() public { selfdestruct(msg.sender); } }',
            contract_name='Vault')

        exit_code = main([ADDRESS])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert f'Scan of {ADDRESS}' in out
        assert 'Trust Score' in out
        assert '75/100' in out
        assert '1. [Critical] Self-Destruct: ' in out

    def test_invalid_address_is_reported(self, service, provider, capsys):
        exit_code = main(['0x1234'])

        assert exit_code == 1
        assert 'Error: 0x1234 - Invalid format.' in capsys.readouterr().out
        provider.get_contract_source.assert_not_called()

    def test_provider_failure_sets_exit_code(self, service, provider, capsys):
        from susbot.utils.error_handling import EtherscanError
        provider.get_contract_source.side_effect = EtherscanError('HTTP request to Etherscan failed.',
                                                                  ['Error: timed out'])

        assert main([ADDRESS]) == 1
        assert 'HTTP request to Etherscan failed.' in capsys.readouterr().out

    def test_requires_a_target(self, service):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_missing_file(self, service, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(['--file', str(tmp_path / 'missing.sol')])
        assert exc_info.value.code == 2

    def test_file_and_addresses_are_exclusive(self, service, provider, tmp_path):
        contract = tmp_path / 'A.sol'
        contract.write_text('contract A {}', encoding='utf-8')

        with pytest.raises(SystemExit) as exc_info:
            main([ADDRESS, '--file', str(contract)])

        assert exc_info.value.code == 2
        provider.get_contract_source.assert_not_called()


@pytest.mark.parametrize('result, expected', [
    (ScanResult.new_error('Error: Invalid Ethereum address format.', []), True),
    (ScanResult.new_error('HTTP request to Etherscan failed.', ['Error: timed out']), True),
    (ScanResult(score=0, summary='s', risks=['[Critical] Self-Destruct: d']), False),
    (ScanResult(score=50, summary='s', risks=['The contract source code is not verified on Etherscan.']), False),
])
def test_is_error_result(result, expected):
    assert is_error_result(result) is expected
