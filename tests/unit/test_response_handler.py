"""Tests for response decoding."""
import json

import pytest
from Crypto.Random import get_random_bytes

from zcapy.core.api.request.response_handler import ResponseHandler, HttpResponse, parse
from zcapy.core.crypto.utils import Base64Encoder
from zcapy.core.exceptions import ZcaError, ErrorCategory, ErrorCodes
from zcapy.core.result import ApiResult


@pytest.fixture
def handler(cipher):
    return ResponseHandler(cipher)


class TestHttpResponse:
    """Test suite for HttpResponse."""

    @pytest.mark.parametrize('status,expected', [(200, True), (204, True), (302, False), (500, False)])
    def test_is_success(self, status, expected):
        assert HttpResponse(status=status).is_success is expected

    def test_text(self):
        assert HttpResponse(200, 'Xin chào'.encode('utf-8')).text() == 'Xin chào'
        assert HttpResponse(200, 'plain').text() == 'plain'

    def test_headers_from_mapping(self):
        response = HttpResponse(200, headers={'Content-Type': 'text/plain'})

        assert response.headers == (('Content-Type', 'text/plain'),)
        assert response.header('CONTENT-TYPE') == 'text/plain'
        assert response.header('X-Missing', 'none') == 'none'

    def test_repeated_headers(self):
        """Test repeated headers keep every value in order."""
        response = HttpResponse(200, headers=[('Set-Cookie', 'a=1'), ('set-cookie', 'b=2')])

        assert response.get_all('Set-Cookie') == ['a=1', 'b=2']
        assert response.set_cookies == ['a=1', 'b=2']


class TestResponseHandler:
    """Test suite for ResponseHandler.parse."""

    def test_success(self, handler, make_response, secret_key):
        """Test encrypted data is decrypted and unwrapped."""
        response = make_response({'data': {'groupId': '42'}, 'error_code': 0})

        result = handler.parse(response, secret_key)

        assert result.ok
        assert result.value == {'groupId': '42'}

    def test_payload_without_inner_data(self, handler, make_response, secret_key):
        """Test decrypted payloads without a data field are returned whole."""
        response = make_response({'status': 'done'})

        assert handler.parse(response, secret_key).value == {'status': 'done'}

    def test_outer_error(self, handler, make_response, secret_key):
        """Test a non-zero envelope error_code becomes an API error."""
        response = make_response(error_code=114, error_message='Conversation not found')

        result = handler.parse(response, secret_key)

        assert result.error == ZcaError.api(114, 'Conversation not found')
        assert result.error.category is ErrorCategory.API

    def test_outer_error_wins_over_data(self, handler, make_response, secret_key):
        """Test data is not decrypted when the envelope failed."""
        response = make_response('not-really-encrypted', error_code=-1,
                                 error_message='Bad', encrypt=False)

        assert handler.parse(response, secret_key).error.code == -1

    def test_inner_error(self, handler, make_response, secret_key):
        """Test an error inside the decrypted payload."""
        response = make_response({'error_code': 216, 'error_message': 'Blocked'})

        result = handler.parse(response, secret_key)

        assert result.error.code == 216
        assert result.error.message == 'Blocked'

    def test_camel_case_error(self, handler, secret_key):
        """Test errorCode/errorMessage spelling."""
        body = json.dumps({'errorCode': '7', 'errorMessage': 'Nope'})

        result = handler.parse(HttpResponse(200, body), secret_key)

        assert result.error.code == 7
        assert result.error.message == 'Nope'

    def test_missing_message(self, handler, make_response, secret_key):
        """Test a default message when the server sends none."""
        result = handler.parse(make_response(error_code=500), secret_key)

        assert result.error.message == 'Unknown error'

    @pytest.mark.parametrize('code', [0, '0', None, False, ''])
    def test_success_indicators(self, handler, code, secret_key):
        """Test values that mean no error."""
        body = json.dumps({'error_code': code, 'data': {'x': 1}})

        assert handler.parse(HttpResponse(200, body), secret_key).value == {'x': 1}

    def test_clear_text_data(self, handler, secret_key):
        """Test non-string data is passed through undecrypted."""
        body = json.dumps({'error_code': 0, 'data': {'plain': True}})

        assert handler.parse(HttpResponse(200, body), secret_key).value == {'plain': True}

    def test_envelope_without_data(self, handler, secret_key):
        """Test envelopes without data return the envelope."""
        body = json.dumps({'error_code': 0, 'ok': 1})

        assert handler.parse(HttpResponse(200, body), secret_key).value == {'error_code': 0, 'ok': 1}

    def test_invalid_json(self, handler, secret_key):
        """Test undecodable bodies."""
        result = handler.parse(HttpResponse(200, b'<html>oops</html>'), secret_key)

        assert result.error.category is ErrorCategory.API
        assert result.error.code == ErrorCodes.INVALID_RESPONSE
        assert result.error.message == 'Failed to decode JSON response'

    def test_http_error_status(self, handler, secret_key):
        """Test non-2xx responses without an error envelope."""
        result = handler.parse(HttpResponse(502, b'Bad Gateway'), secret_key)

        assert result.error.category is ErrorCategory.NETWORK
        assert result.error.code == ErrorCodes.HTTP_ERROR
        assert result.error.details == {'status': 502}
        assert '502' in result.error.message

    def test_http_error_with_envelope(self, handler, make_response, secret_key):
        """Test the server's error envelope wins over the status code."""
        response = make_response(error_code=-1, error_message='Session expired', status=401)

        result = handler.parse(response, secret_key)

        assert result.error == ZcaError.api(-1, 'Session expired')

    def test_wrong_key(self, handler, make_response, secret_key):
        """Test data encrypted with another key."""
        other = Base64Encoder.encode(get_random_bytes(32))
        response = make_response({'a': 1}, key=other)

        result = handler.parse(response, secret_key)

        assert result.error.category is ErrorCategory.SECURITY
        assert result.error.code == ErrorCodes.DECRYPTION_FAILED

    def test_corrupted_data(self, handler, make_response, secret_key):
        """Test undecryptable data strings."""
        response = make_response('%%%not base64%%%', encrypt=False)

        assert handler.parse(response, secret_key).error.code == ErrorCodes.DECRYPTION_FAILED

    def test_transport_failure_passthrough(self, handler, secret_key):
        """Test transport errors are returned untouched."""
        failure = ApiResult.failure(ZcaError.network(ErrorCodes.REQUEST_FAILED, 'Request failed: timeout'))

        assert handler.parse(failure, secret_key) is failure

    def test_transport_success_unwrapped(self, handler, make_response, secret_key):
        """Test a transport result wrapping a response."""
        wrapped = ApiResult.success(make_response({'a': 1}))

        assert handler.parse(wrapped, secret_key).value == {'a': 1}

    def test_module_parse(self, make_response, secret_key, cipher):
        """Test the one-off parse helper."""
        assert parse(make_response({'a': 1}), secret_key, cipher).value == {'a': 1}


class TestParseUnencrypted:
    """Test suite for clear-text responses."""

    def test_success(self, handler):
        body = json.dumps({'error_code': 0, 'data': {'qr': 'abc'}})

        assert handler.parse_unencrypted(HttpResponse(200, body)).value == {'qr': 'abc'}

    def test_error(self, handler):
        body = json.dumps({'error_code': 1, 'error_message': 'Invalid'})

        assert handler.parse_unencrypted(HttpResponse(200, body)).error.code == 1

    def test_string_data_kept(self, handler):
        """Test string data is not decrypted."""
        body = json.dumps({'error_code': 0, 'data': 'token'})

        assert handler.parse_unencrypted(HttpResponse(200, body)).value == 'token'


class TestCheckError:
    """Test suite for error detection."""

    def test_non_mapping(self):
        assert ResponseHandler.check_error([1, 2]) is None

    def test_no_code(self):
        assert ResponseHandler.check_error({'data': 1}) is None

    def test_true_indicator(self):
        assert ResponseHandler.check_error({'error_code': True}).code == ErrorCodes.REMOTE_ERROR

    def test_string_code(self):
        assert ResponseHandler.check_error({'error_code': 'E_LIMIT'}).code == 'E_LIMIT'

    @pytest.mark.parametrize('body', [
        b'{"error_code": NaN}',
        b'{"error_code": Infinity, "error_message": "Overflow"}',
        b'{"error_code": -Infinity}',
        b'{"error_code": 0.5}',
    ])
    def test_non_integral_float_codes(self, handler, secret_key, body):
        """Test odd numeric codes are reported as remote errors."""
        result = handler.parse(HttpResponse(200, body), secret_key)

        assert result.error.category is ErrorCategory.API
        assert result.error.code == ErrorCodes.REMOTE_ERROR

    def test_integral_float_code(self):
        assert ResponseHandler.check_error({'error_code': 114.0}).code == 114

    def test_zero_float_is_success(self):
        assert ResponseHandler.check_error({'error_code': 0.0}) is None
