"""
Error Response Factory Unit Tests
"""

from unittest.mock import patch

from src.core.errors import ErrorCode, ValidationError
from src.services.error_response_factory import ErrorResponseFactory, with_error_handling


class TestErrorResponseFactory:

    def setup_method(self):
        self.factory = ErrorResponseFactory()

    def test_success_response(self):
        assert self.factory.create_success_response({'a': 1}) == {'success': True, 'data': {'a': 1}}

    def test_error_response(self):
        response = self.factory.create_error_response(ErrorCode.ROOM_FULL, "Full", {'max_players': 8})

        assert response == {
            'success': False,
            'error': {'code': 'ROOM_FULL', 'message': "Full", 'details': {'max_players': 8}}
        }

    def test_error_response_default_details(self):
        response = self.factory.create_error_response(ErrorCode.NOT_IN_ROOM, "No")
        assert response['error']['details'] == {}

    def test_handle_validation_error(self):
        error = ValidationError(ErrorCode.INVALID_CARD, "Bad card")
        assert self.factory.handle_exception(error) == (ErrorCode.INVALID_CARD, "Bad card")

    def test_handle_unexpected_exception(self):
        code, message = self.factory.handle_exception(RuntimeError("boom"), "test")

        assert code == ErrorCode.INTERNAL_ERROR
        assert "boom" not in message


class TestWithErrorHandling:

    @patch('src.services.error_response_factory.emit')
    def test_validation_error_emitted(self, mock_emit):
        @with_error_handling
        def handler():
            raise ValidationError(ErrorCode.NOT_IN_ROOM, "Not in a room")

        handler()

        mock_emit.assert_called_once_with('error', {
            'success': False,
            'error': {'code': 'NOT_IN_ROOM', 'message': "Not in a room", 'details': {}}
        })

    @patch('src.services.error_response_factory.emit')
    def test_unexpected_error_becomes_internal_error(self, mock_emit):
        @with_error_handling
        def handler():
            raise KeyError("oops")

        handler()

        event, payload = mock_emit.call_args[0]
        assert event == 'error'
        assert payload['error']['code'] == 'INTERNAL_ERROR'

    @patch('src.services.error_response_factory.emit')
    def test_return_value_passes_through(self, mock_emit):
        @with_error_handling
        def handler(value):
            return value * 2

        assert handler(2) == 4
        assert handler.__name__ == 'handler'
        mock_emit.assert_not_called()
