"""Tests for Error and Exceptional."""

import pytest
from fp_common import Error, Exceptional, OperationFailedError
from hypothesis import given

from tests.strategies import errors


class TestErrorCreation:
    """Tests for the Error factories."""

    def test_from_messages_collapses_duplicates(self):
        error = Error.from_messages('a', 'a', 'b')
        assert error.messages == frozenset({'a', 'b'})

    def test_from_messages_without_arguments_is_empty(self):
        assert Error.from_messages().messages == frozenset()

    def test_from_exception_uses_exception_text(self):
        exc = ValueError('bad input')
        error = Error.from_exception(exc)
        assert isinstance(error, Exceptional)
        assert error.messages == frozenset({'bad input'})
        assert error.exception is exc

    def test_of_message(self):
        assert Error.of('boom') == Error.from_messages('boom')

    def test_of_exception(self):
        exc = KeyError('k')
        assert Error.of(exc).to_exception() is exc

    def test_of_error_is_passthrough(self):
        error = Error.from_messages('x')
        assert Error.of(error) is error

    def test_of_rejects_other_types(self):
        with pytest.raises(TypeError, match='Cannot build an Error'):
            Error.of(42)  # type: ignore[arg-type]

    def test_error_is_frozen(self):
        error = Error.from_messages('a')
        with pytest.raises(AttributeError):
            error.messages = frozenset()  # type: ignore[misc]


class TestErrorEquality:
    """Tests for equality between plain and exceptional errors."""

    def test_message_order_is_irrelevant(self):
        assert Error.from_messages('a', 'b') == Error.from_messages('b', 'a')

    def test_equal_errors_hash_equal(self):
        assert hash(Error.from_messages('a', 'b')) == hash(Error.from_messages('b', 'a'))

    def test_exceptional_equal_when_wrapping_same_exception(self):
        exc = RuntimeError('x')
        assert Error.from_exception(exc) == Error.from_exception(exc)

    def test_exceptional_differs_for_distinct_exceptions(self):
        assert Error.from_exception(RuntimeError('x')) != Error.from_exception(RuntimeError('x'))

    def test_plain_never_equals_exceptional(self):
        assert Error.from_messages('x') != Error.from_exception(RuntimeError('x'))


class TestErrorCombination:
    """Tests for the + operator."""

    def test_union_of_messages(self):
        combined = Error.from_messages('A') + Error.from_messages('B')
        assert combined.messages == frozenset({'A', 'B'})

    def test_shared_messages_collapse(self):
        combined = Error.from_messages('A', 'B') + Error.from_messages('B', 'C')
        assert combined.messages == frozenset({'A', 'B', 'C'})

    def test_adding_non_error_is_unsupported(self):
        with pytest.raises(TypeError):
            Error.from_messages('A') + 'B'  # type: ignore[operator]

    def test_exceptional_plus_empty_keeps_exception(self):
        exc = ValueError('v')
        exceptional = Error.from_exception(exc)
        assert exceptional + Error.from_messages() is exceptional
        assert Error.from_messages() + exceptional is exceptional

    def test_exceptional_plus_non_empty_drops_exception(self):
        combined = Error.from_exception(ValueError('v')) + Error.from_messages('w')
        assert type(combined) is Error
        assert combined.messages == frozenset({'v', 'w'})

    @given(errors)
    def test_empty_is_left_identity(self, error: Error):
        assert Error.from_messages() + error == error

    @given(errors)
    def test_empty_is_right_identity(self, error: Error):
        assert error + Error.from_messages() == error

    @given(errors, errors)
    def test_commutative(self, a: Error, b: Error):
        assert a + b == b + a

    @given(errors, errors, errors)
    def test_associative(self, a: Error, b: Error, c: Error):
        assert (a + b) + c == a + (b + c)

    @given(errors)
    def test_idempotent(self, error: Error):
        assert error + error == error


class TestErrorRendering:
    """Tests for str() and to_exception()."""

    def test_str_joins_sorted_messages(self):
        assert str(Error.from_messages('B', 'A')) == 'A; B'

    def test_str_single_message(self):
        assert str(Error.from_messages('boom')) == 'boom'

    def test_single_message_becomes_operation_failed(self):
        exc = Error.from_messages('boom').to_exception()
        assert isinstance(exc, OperationFailedError)
        assert exc.message == 'boom'

    def test_several_messages_become_exception_group(self):
        exc = Error.from_messages('b', 'a').to_exception()
        assert isinstance(exc, ExceptionGroup)
        assert [e.message for e in exc.exceptions] == ['a', 'b']
        assert all(isinstance(e, OperationFailedError) for e in exc.exceptions)

    def test_empty_error_has_generic_exception(self):
        exc = Error.from_messages().to_exception()
        assert isinstance(exc, OperationFailedError)
        assert str(exc) == 'Operation failed'

    def test_exceptional_returns_original_exception(self):
        exc = ZeroDivisionError('division by zero')
        assert Error.from_exception(exc).to_exception() is exc
