"""Tests for Option type (Some and Nothing)."""

import pytest
from fp_common import Error, Failure, Nothing, NothingType, Option, Some, Success, from_optional
from hypothesis import given
from hypothesis import strategies as st

from tests.strategies import options


class TestSomeCreation:
    """Tests for Some instantiation and basic properties."""

    def test_some_creation(self):
        """Some wraps a value."""
        assert Some(42).value == 42

    def test_some_with_none(self):
        """Some can wrap None (Some(None) is not Nothing)."""
        some = Some(None)
        assert some.value is None
        assert some != Nothing

    def test_some_is_frozen(self):
        """Some instances are immutable."""
        some = Some(42)
        with pytest.raises(AttributeError):
            some.value = 100  # type: ignore[misc]


class TestNothing:
    """Tests for the Nothing singleton."""

    def test_nothing_is_singleton_instance(self):
        assert isinstance(Nothing, NothingType)
        assert Nothing == NothingType()

    def test_nothing_renders_as_none(self):
        assert str(Nothing) == 'None'

    def test_nothing_hashable(self):
        assert {Nothing: 'value'}[NothingType()] == 'value'


class TestOptionEquality:
    def test_some_equality(self):
        assert Some(42) == Some(42)
        assert Some(42) != Some(43)

    def test_some_not_equal_to_nothing(self):
        assert Some(42) != Nothing

    def test_some_hashable(self):
        assert hash(Some('a')) == hash(Some('a'))


class TestOptionQuerying:
    def test_some_flags(self):
        assert Some(1).is_some() is True
        assert Some(1).is_none() is False

    def test_nothing_flags(self):
        assert Nothing.is_some() is False
        assert Nothing.is_none() is True


class TestOptionMatch:
    def test_some_calls_some_branch(self):
        assert Some(2).match(lambda x: x * 10, lambda: -1) == 20

    def test_nothing_calls_none_branch(self):
        assert Nothing.match(lambda x: x * 10, lambda: -1) == -1

    def test_only_one_branch_runs(self):
        calls: list[str] = []
        Some(1).match(lambda _: calls.append('some'), lambda: calls.append('none'))
        Nothing.match(lambda _: calls.append('some'), lambda: calls.append('none'))
        assert calls == ['some', 'none']


class TestOptionTransform:
    """Tests for map, bind and where."""

    def test_map_some(self):
        assert Some(21).map(lambda x: x * 2) == Some(42)

    def test_map_nothing_skips_function(self):
        calls: list[int] = []
        assert Nothing.map(calls.append) is Nothing
        assert calls == []

    def test_bind_some(self):
        assert Some(3).bind(lambda x: Some(x + 1)) == Some(4)
        assert Some(3).bind(lambda _: Nothing) is Nothing

    def test_bind_nothing_skips_function(self):
        assert Nothing.bind(lambda x: Some(x)) is Nothing

    def test_where_keeps_matching_value(self):
        assert Some(6).where(lambda x: x > 5) == Some(6)

    def test_where_drops_failing_value(self):
        assert Some(3).where(lambda x: x > 5) is Nothing

    def test_where_on_nothing(self):
        assert Nothing.where(lambda _: True) is Nothing


class TestOptionFallbacks:
    """Tests for if_none, if_none_option and if_none_raise."""

    def test_if_none_on_some_never_calls_fallback(self):
        calls: list[str] = []

        def fallback() -> int:
            calls.append('called')
            return 0

        assert Some(42).if_none(fallback) == 42
        assert calls == []

    def test_if_none_on_nothing(self):
        assert Nothing.if_none(lambda: 7) == 7

    def test_if_none_option(self):
        assert Some(1).if_none_option(lambda: Some(2)) == Some(1)
        assert Nothing.if_none_option(lambda: Some(2)) == Some(2)
        assert Nothing.if_none_option(lambda: Nothing) is Nothing

    def test_if_none_raise_on_some_returns_value(self):
        assert Some('x').if_none_raise(KeyError('missing')) == 'x'

    def test_if_none_raise_with_instance(self):
        with pytest.raises(KeyError, match='missing'):
            Nothing.if_none_raise(KeyError('missing'))

    def test_if_none_raise_with_factory(self):
        with pytest.raises(LookupError, match='built lazily'):
            Nothing.if_none_raise(lambda: LookupError('built lazily'))

    def test_if_none_raise_factory_not_called_for_some(self):
        calls: list[str] = []

        def factory() -> Exception:
            calls.append('built')
            return RuntimeError()

        Some(1).if_none_raise(factory)
        assert calls == []


class TestOptionSideEffects:
    def test_iter_some(self):
        seen: list[int] = []
        Some(5).iter(seen.append)
        assert seen == [5]

    def test_iter_nothing(self):
        seen: list[int] = []
        Nothing.iter(seen.append)
        assert seen == []

    async def test_iter_task_some(self):
        seen: list[int] = []

        async def record(value: int) -> None:
            seen.append(value)

        await Some(5).iter_task(record)
        await Nothing.iter_task(record)
        assert seen == [5]


class TestOptionConversion:
    def test_to_optional(self):
        assert Some(3).to_optional() == 3
        assert Nothing.to_optional() is None

    def test_from_optional(self):
        assert from_optional(0) == Some(0)
        assert from_optional('') == Some('')
        assert from_optional(None) is Nothing

    def test_to_result_some(self):
        assert Some(1).to_result(lambda: 'unused') == Success(1)

    def test_to_result_nothing_with_message(self):
        assert Nothing.to_result(lambda: 'missing') == Failure(Error.from_messages('missing'))

    def test_to_result_nothing_with_exception(self):
        exc = KeyError('k')
        result = Nothing.to_result(lambda: exc)
        assert isinstance(result, Failure)
        assert result.error.to_exception() is exc

    def test_to_result_error_factory_is_lazy(self):
        calls: list[str] = []

        def error() -> str:
            calls.append('called')
            return 'missing'

        Some(1).to_result(error)
        assert calls == []

    def test_pattern_matching(self):
        def describe(option: Option[int]) -> str:
            match option:
                case Some(value):
                    return f'some {value}'
                case _:
                    return 'nothing'

        assert describe(Some(1)) == 'some 1'
        assert describe(Nothing) == 'nothing'


class TestOptionMonadLaws:
    """Property-based tests for monad laws."""

    @given(st.integers())
    def test_left_identity(self, value: int):
        """Left identity: Some(a).bind(f) == f(a)."""

        def f(x: int) -> Some[int] | NothingType:
            return Some(x * 2) if x % 3 else Nothing

        assert Some(value).bind(f) == f(value)

    @given(options)
    def test_right_identity(self, m: Option[int]):
        """Right identity: m.bind(Some) == m."""
        assert m.bind(Some) == m

    @given(options)
    def test_associativity(self, m: Option[int]):
        """Associativity: m.bind(f).bind(g) == m.bind(x => f(x).bind(g))."""

        def f(x: int) -> Some[int] | NothingType:
            return Some(x + 1) if x % 2 else Nothing

        def g(x: int) -> Some[str] | NothingType:
            return Some(str(x))

        assert m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))


class TestOptionFunctorLaws:
    """Property-based tests for functor laws."""

    @given(options)
    def test_identity(self, m: Option[int]):
        """Identity: m.map(id) == m."""
        assert m.map(lambda x: x) == m

    @given(options)
    def test_composition(self, m: Option[int]):
        """Composition: m.map(f).map(g) == m.map(g . f)."""

        def f(x: int) -> int:
            return x + 1

        def g(x: int) -> str:
            return str(x)

        assert m.map(f).map(g) == m.map(lambda x: g(f(x)))
