"""Hypothesis strategies for property-based testing of fp-common types."""

from fp_common import Error, Failure, Left, Nothing, Right, Some, Success
from hypothesis import strategies as st

# -----------------------------------------------------------------------------
# Basic value strategies
# -----------------------------------------------------------------------------

integers = st.integers()
texts = st.text(min_size=0, max_size=100)

# Short messages drawn from a small alphabet so that overlaps (and therefore
# duplicate collapsing) actually happen.
messages = st.text(alphabet='abcde', min_size=1, max_size=3)

# Exception strategies
exceptions = st.sampled_from([
    ValueError('test'),
    TypeError('test'),
    RuntimeError('test'),
])

# -----------------------------------------------------------------------------
# Container strategies
# -----------------------------------------------------------------------------

errors = st.lists(messages, max_size=5).map(lambda ms: Error.from_messages(*ms))

options = st.one_of(st.just(Nothing), integers.map(Some))

results = st.one_of(
    integers.map(Success),
    errors.map(Failure),
)

eithers = st.one_of(texts.map(Left), integers.map(Right))
