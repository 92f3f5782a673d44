"""Property tests for list envelopes and cursor pagination.

# Feature: list cursor, Property 9: Next page differs only in starting_after
"""

from __future__ import annotations

from datetime import datetime, timezone

from hypothesis import given, settings, strategies as st

from stripe_client.config import ApiContext
from stripe_client.models.filters import ListFilter
from stripe_client.models.plans import PLAN_LIST_CODEC, PlanListInput
from stripe_client.resources.plans import list_url

CONTEXT = ApiContext(api_key="sk_test_pagination", endpoint="https://api.stripe.test")

plan_ids = st.from_regex(r"plan_[a-zA-Z0-9]{4,12}", fullmatch=True)
timestamps = st.integers(min_value=0, max_value=2**32)
created_filters = st.none() | st.builds(
    ListFilter,
    gte=st.none() | timestamps.map(lambda t: datetime.fromtimestamp(t, tz=timezone.utc)),
    lt=st.none() | timestamps.map(lambda t: datetime.fromtimestamp(t, tz=timezone.utc)),
)


def _plan(plan_id: str) -> dict:
    return {
        "id": plan_id,
        "object": "plan",
        "amount": 100,
        "created": 1386247539,
        "currency": "usd",
        "interval": "month",
        "interval_count": 1,
        "livemode": False,
        "metadata": {},
        "name": plan_id,
    }


@settings(max_examples=100)
@given(
    first_id=plan_ids,
    last_id=plan_ids,
    created=created_filters,
    limit=st.none() | st.integers(min_value=1, max_value=100),
    include_total_count=st.booleans(),
)
def test_next_page_request_differs_only_in_cursor(
    first_id: str,
    last_id: str,
    created: ListFilter | None,
    limit: int | None,
    include_total_count: bool,
) -> None:
    """Property 9: the follow-up request only adds starting_after=<last id>."""
    list_input = PlanListInput(created=created, limit=limit)
    first_url = list_url(CONTEXT, list_input, include_total_count)

    page = PLAN_LIST_CODEC.decode(
        {
            "object": "list",
            "url": "/v1/plans",
            "has_more": True,
            "data": [_plan(first_id), _plan(last_id)],
        }
    )
    cursor = page.next_cursor()
    assert cursor == last_id

    next_input = list_input.model_copy(update={"starting_after": cursor})
    next_url = list_url(CONTEXT, next_input, include_total_count)

    first_params = list(first_url.params.multi_items())
    next_params = list(next_url.params.multi_items())
    assert (next_url.host, next_url.path) == (first_url.host, first_url.path)
    assert [p for p in next_params if p[0] != "starting_after"] == first_params
    assert dict(next_params)["starting_after"] == last_id


@settings(max_examples=50)
@given(ids=st.lists(plan_ids, max_size=5), total=st.none() | st.integers(0, 1000))
def test_last_page_has_no_next_cursor(ids: list[str], total: int | None) -> None:
    payload = {
        "object": "list",
        "url": "/v1/plans",
        "has_more": False,
        "data": [_plan(plan_id) for plan_id in ids],
        "total_count": total,
    }

    page = PLAN_LIST_CODEC.decode(payload)

    assert page.next_cursor() is None
    assert page.total_count == total
    assert [plan.id for plan in page.data] == ids
