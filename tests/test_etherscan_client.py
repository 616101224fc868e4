"""Tests for the Etherscan source provider."""

from unittest.mock import Mock, patch

import pytest
import requests

from susbot.services.etherscan import (
    API_ERROR,
    HTTP_FAILED,
    PARSE_FAILED,
    EtherscanClient,
    is_valid_ethereum_address,
)
from susbot.utils.error_handling import EtherscanError

ADDRESS = '0xbb9bc244d798123fde783fcc1c72d3bb8c189413'


def _response(payload=None, status_code=200, content=b'{}', text='{}'):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.text = text
    response.json.return_value = payload
    return response


@pytest.fixture
def client():
    return EtherscanClient(api_key='test-key', base_url='https://example.test/api', chain_id=1,
                           timeout=5, max_retries=3, max_response_bytes=1000, base_delay=0.01)


class TestEtherscanClient:
    @patch('susbot.services.etherscan.requests.get')
    def test_verified_source(self, mock_get, client):
        mock_get.return_value = _response({
            'status': '1',
            'message': 'OK',
            'result': [{'SourceCode': 'contract DAO {}', 'ContractName': 'DAO'}],
        })

        source = client.get_contract_source(ADDRESS)

        assert source.source_code == 'contract DAO {}'
        assert source.contract_name == 'DAO'
        assert source.verified is True
        params = mock_get.call_args.kwargs['params']
        assert params['module'] == 'contract'
        assert params['action'] == 'getsourcecode'
        assert params['address'] == ADDRESS
        assert params['apikey'] == 'test-key'
        assert params['chainid'] == 1
        assert mock_get.call_args.kwargs['timeout'] == 5

    @patch('susbot.services.etherscan.requests.get')
    def test_unverified_source_is_empty(self, mock_get, client):
        mock_get.return_value = _response({
            'status': '1',
            'message': 'OK',
            'result': [{'SourceCode': '', 'ContractName': ''}],
        })

        source = client.get_contract_source(ADDRESS)

        assert source.source_code == ''
        assert source.verified is False

    @patch('susbot.services.etherscan.requests.get')
    def test_api_error_status(self, mock_get, client):
        mock_get.return_value = _response({
            'status': '0',
            'message': 'NOTOK',
            'result': 'Invalid API Key',
        })

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)

        assert exc_info.value.summary == API_ERROR
        assert exc_info.value.reasons == ['NOTOK', 'Invalid API Key']

    @patch('susbot.services.etherscan.requests.get')
    def test_empty_result_is_an_api_error(self, mock_get, client):
        mock_get.return_value = _response({'status': '1', 'message': 'OK', 'result': []})

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)
        assert exc_info.value.summary == API_ERROR

    @patch('susbot.services.etherscan.requests.get')
    def test_non_success_http_status(self, mock_get, client):
        mock_get.return_value = _response(status_code=500, text='Internal Server Error')

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)

        assert exc_info.value.summary == HTTP_FAILED
        assert exc_info.value.reasons == ['HTTP Status: 500. Body: Internal Server Error']

    @patch('susbot.services.etherscan.requests.get')
    def test_malformed_json(self, mock_get, client):
        response = _response()
        response.json.side_effect = ValueError('Expecting value')
        mock_get.return_value = response

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)

        assert exc_info.value.summary == PARSE_FAILED
        assert exc_info.value.reasons == ['Expecting value']

    @patch('susbot.services.etherscan.requests.get')
    def test_unexpected_result_shape(self, mock_get, client):
        mock_get.return_value = _response({'status': '1', 'message': 'OK', 'result': ['not a dict']})

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)
        assert exc_info.value.summary == PARSE_FAILED

    @patch('susbot.services.etherscan.requests.get')
    def test_oversized_body_is_rejected(self, mock_get, client):
        mock_get.return_value = _response({'status': '1'}, content=b'x' * 1001)

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)

        assert exc_info.value.summary == PARSE_FAILED
        mock_get.return_value.json.assert_not_called()

    @patch('susbot.services.etherscan.time.sleep')
    @patch('susbot.services.etherscan.requests.get')
    def test_connection_errors_are_retried(self, mock_get, mock_sleep, client):
        mock_get.side_effect = [
            requests.exceptions.ConnectionError('connection reset'),
            _response({'status': '1', 'message': 'OK',
                       'result': [{'SourceCode': 'contract A {}', 'ContractName': 'A'}]}),
        ]

        source = client.get_contract_source(ADDRESS)

        assert source.contract_name == 'A'
        assert mock_get.call_count == 2
        mock_sleep.assert_called_once_with(0.01)

    @patch('susbot.services.etherscan.time.sleep')
    @patch('susbot.services.etherscan.requests.get')
    def test_retries_are_bounded(self, mock_get, mock_sleep, client):
        mock_get.side_effect = requests.exceptions.Timeout('timed out')

        with pytest.raises(EtherscanError) as exc_info:
            client.get_contract_source(ADDRESS)

        assert exc_info.value.summary == HTTP_FAILED
        assert exc_info.value.reasons == ['Error: timed out']
        assert mock_get.call_count == 3
        assert [call.args[0] for call in mock_sleep.call_args_list] == [0.01, 0.02]

    @patch('susbot.services.etherscan.time.sleep')
    @patch('susbot.services.etherscan.requests.get')
    def test_other_request_errors_are_not_retried(self, mock_get, mock_sleep, client):
        mock_get.side_effect = requests.exceptions.InvalidURL('bad url')

        with pytest.raises(EtherscanError):
            client.get_contract_source(ADDRESS)

        assert mock_get.call_count == 1
        mock_sleep.assert_not_called()

    @patch('susbot.services.etherscan.requests.get')
    def test_api_key_is_optional(self, mock_get):
        client = EtherscanClient(api_key='', base_url='https://example.test/api')
        mock_get.return_value = _response({'status': '1', 'message': 'OK',
                                           'result': [{'SourceCode': '', 'ContractName': ''}]})

        client.get_contract_source(ADDRESS)

        assert 'apikey' not in mock_get.call_args.kwargs['params']


@pytest.mark.parametrize('address, expected', [
    (ADDRESS, True),
    ('0x' + 'A' * 40, True),
    ('bb9bc244d798123fde783fcc1c72d3bb8c189413', False),
    ('0x1234', False),
    ('', False),
])
def test_is_valid_ethereum_address(address, expected):
    assert is_valid_ethereum_address(address) is expected
