"""Plan operations: create, get, update, delete, list.

Mutating calls go through ``handle_idempotent`` so every retry of one call
carries the same idempotency key. Reads go through ``handle``.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from stripe_client.config.context import ApiContext
from stripe_client.errors import StripeError
from stripe_client.executor import execute
from stripe_client.models.codec import metadata_to_form
from stripe_client.models.plans import (
    DELETE_RESPONSE_CODEC,
    PLAN_CODEC,
    PLAN_LIST_CODEC,
    DeleteResponse,
    Plan,
    PlanInput,
    PlanList,
    PlanListInput,
    PlanUpdate,
)
from stripe_client.query import list_filter_to_url, with_params
from stripe_client.resilience.retry import handle, handle_idempotent

logger = logging.getLogger(__name__)

PLANS_PATH = "/v1/plans"


def _plan_url(context: ApiContext, plan_id: str) -> str:
    return context.url(f"{PLANS_PATH}/{quote(plan_id, safe='')}")


def create_params(plan_input: PlanInput) -> dict[str, str]:
    return {**plan_input.to_form(), **metadata_to_form(plan_input.metadata)}


def update_params(update: PlanUpdate) -> dict[str, str]:
    return {**update.to_form(), **metadata_to_form(update.metadata)}


def list_url(
    context: ApiContext,
    list_input: PlanListInput,
    include_total_count: bool = False,
) -> httpx.URL:
    """URL for one page of plans, filters and cursors applied."""
    url = httpx.URL(context.url(PLANS_PATH))
    if include_total_count:
        url = url.copy_add_param("include[]", "total_count")
    if list_input.created is not None:
        url = list_filter_to_url(list_input.created, url, "created")
    return with_params(
        url,
        ending_before=list_input.ending_before,
        limit=list_input.limit,
        starting_after=list_input.starting_after,
    )


async def create(
    context: ApiContext,
    plan_input: PlanInput,
    idempotency_key: str | None = None,
) -> Plan | StripeError:
    params = create_params(plan_input)
    logger.debug("Generated POST form parameters for plan %s: %s", plan_input.id, sorted(params))
    url = context.url(PLANS_PATH)

    return await handle_idempotent(
        lambda key: execute(context, "POST", url, PLAN_CODEC.decode, params=params, idempotency_key=key),
        context.retry,
        idempotency_key=idempotency_key,
        operation="create plan",
    )


async def get(context: ApiContext, plan_id: str) -> Plan | StripeError:
    url = _plan_url(context, plan_id)
    return await handle(
        lambda: execute(context, "GET", url, PLAN_CODEC.decode),
        context.retry,
        operation="get plan",
    )


async def update(
    context: ApiContext,
    plan_id: str,
    plan_update: PlanUpdate,
    idempotency_key: str | None = None,
) -> Plan | StripeError:
    params = update_params(plan_update)
    url = _plan_url(context, plan_id)

    return await handle_idempotent(
        lambda key: execute(context, "POST", url, PLAN_CODEC.decode, params=params, idempotency_key=key),
        context.retry,
        idempotency_key=idempotency_key,
        operation="update plan",
    )


async def delete(
    context: ApiContext,
    plan_id: str,
    idempotency_key: str | None = None,
) -> DeleteResponse | StripeError:
    url = _plan_url(context, plan_id)
    return await handle_idempotent(
        lambda key: execute(
            context, "DELETE", url, DELETE_RESPONSE_CODEC.decode, idempotency_key=key
        ),
        context.retry,
        idempotency_key=idempotency_key,
        operation="delete plan",
    )


async def list_plans(
    context: ApiContext,
    list_input: PlanListInput,
    include_total_count: bool = False,
) -> PlanList | StripeError:
    url = list_url(context, list_input, include_total_count)
    return await handle(
        lambda: execute(context, "GET", url, PLAN_LIST_CODEC.decode),
        context.retry,
        operation="list plans",
    )
