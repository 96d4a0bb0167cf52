# Custom hypothesis strategies

from hypothesis import strategies as st

from pugmatch.players import Rank, Role
from pugmatch.rating import Rating
from tests.conftest import make_candidate


@st.composite
def st_rating(draw, min_mu=10., max_mu=40.):
    """Strategy for generating rating tuples"""
    return Rating(
        draw(st.floats(min_value=min_mu, max_value=max_mu)),
        draw(st.floats(min_value=0.5, max_value=8.5))
    )


@st.composite
def st_teams(draw, min_size=1, max_size=5, **kwargs):
    """Strategy for generating a pair of rating lists"""
    return (
        draw(st.lists(st_rating(**kwargs), min_size=min_size, max_size=max_size)),
        draw(st.lists(st_rating(**kwargs), min_size=min_size, max_size=max_size))
    )


@st.composite
def st_roles(draw):
    """Strategy for generating a non empty set of roles"""
    return draw(st.frozensets(st.sampled_from(Role), min_size=1))


@st.composite
def st_candidates(draw, roles=None):
    """Strategy for generating Candidate objects"""
    return make_candidate(
        roles=draw(st_roles()) if roles is None else roles,
        rank=draw(st.sampled_from(Rank)),
        mu=draw(st.floats(min_value=10., max_value=40.)),
        days_since_played=draw(
            st.none() | st.floats(min_value=0., max_value=365.)
        ),
    )


@st.composite
def st_pools(draw, min_extra=0, max_extra=4):
    """
    Strategy for generating a pool that can always fill a match: one single
    role player per slot plus some random extras, shuffled.
    """
    pool = (
        [draw(st_candidates(roles=[Role.TANK])) for _ in range(2)]
        + [draw(st_candidates(roles=[Role.DPS])) for _ in range(4)]
        + [draw(st_candidates(roles=[Role.SUPPORT])) for _ in range(4)]
        + draw(st.lists(st_candidates(), min_size=min_extra, max_size=max_extra))
    )
    return draw(st.permutations(pool))
