import pytest

from legitcheck.relevance import PostRelevanceFilter
from legitcheck.utils.analysis import RawPost


def post(**fields):
    base = {
        "id": "p1",
        "title": "LC on my shark hoodie",
        "link_flair_text": None,
        "num_comments": 5,
        "is_self": False,
        "locked": False,
        "removed_by_category": None,
    }
    base.update(fields)
    return RawPost.from_json(base)


@pytest.fixture
def relevance():
    return PostRelevanceFilter()


def test_relevant_post(relevance):
    assert relevance.is_relevant(post())


@pytest.mark.parametrize(
    "fields",
    [
        {"is_self": True},
        {"locked": True},
        {"removed_by_category": "moderator"},
        {"num_comments": 2},
        {"num_comments": 0},
        {"num_comments": None},
        {"title": "My new camo jacket"},
        {"title": None, "link_flair_text": "Legit Check"},
    ],
)
def test_screened_out(relevance, fields):
    assert not relevance.is_relevant(post(**fields))


def test_minimum_comment_count_is_inclusive(relevance):
    assert relevance.is_relevant(post(num_comments=3))


def test_flair_can_carry_the_indicator(relevance):
    assert relevance.is_relevant(post(title="Thoughts on this tee", link_flair_text="Legit Check"))


@pytest.mark.parametrize(
    "title",
    ["REAL? got these off a reseller", "QC pics", "is this fake?", "Quality check please", "bape flc"],
)
def test_indicators_match_as_substrings(relevance, title):
    # substring containment: "lc" also hits inside "flc"
    assert relevance.matches_category(title, None)


def test_non_string_flair_is_ignored(relevance):
    assert not relevance.matches_category("New drop", 42)


def test_custom_indicators():
    relevance = PostRelevanceFilter(indicators=["W2C"], min_comments=1)
    assert relevance.is_relevant(post(title="w2c this hoodie", num_comments=1))
    assert not relevance.is_relevant(post(title="LC please", num_comments=1))


def test_empty_indicator_list_matches_nothing():
    relevance = PostRelevanceFilter(indicators=[])
    assert relevance.indicators == ()
    assert not relevance.is_relevant(post(title="LC on my shark hoodie"))
