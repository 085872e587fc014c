"""
Unit tests for the Mealie, Instacart and Anthropic clients.

HTTP is mocked at the requests.Session level; no network access.
"""

import json
from datetime import date
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import requests

from adapters import AnthropicPlanningOracle, InstacartClient, MealieClient
from app.exceptions import HouseholdResolutionError


def _response(payload=None, status=200):
    response = Mock()
    response.status_code = status
    response.content = json.dumps(payload).encode() if payload is not None else b""
    response.json.return_value = payload
    response.text = response.content.decode()
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Client Error")
    else:
        response.raise_for_status.return_value = None
    return response


def _session(*responses):
    session = Mock()
    session.headers = {}
    session.request.side_effect = list(responses)
    return session


def _mealie(*responses):
    session = _session(*responses)
    return MealieClient("http://mealie.local/", "secret-token", 10, session=session), session


# =============================================================================
# REQUEST HANDLING
# =============================================================================


def test_bearer_token_and_timeout():
    client, session = _mealie(_response({"items": []}))

    client.get_recipes(limit=25)

    assert session.headers["Authorization"] == "Bearer secret-token"
    session.request.assert_called_once_with(
        "GET",
        "http://mealie.local/api/recipes",
        params={"perPage": 25},
        json=None,
        timeout=10,
    )


def test_http_error_includes_response_body():
    client, _ = _mealie(_response({"detail": "recipe not found"}, status=404))

    with pytest.raises(requests.HTTPError) as exc_info:
        client.get_recipe("r-missing")

    assert "recipe not found" in str(exc_info.value)
    assert exc_info.value.response.status_code == 404


def test_empty_body_returns_none():
    client, _ = _mealie(_response(None))

    assert client.get_recipe("r-1") is None


# =============================================================================
# MEALIE IDENTITY
# =============================================================================


@pytest.mark.parametrize(
    "payload",
    [
        {"items": [{"id": "hh-1", "name": "Home"}], "total": 1},
        [{"id": "hh-1", "name": "Home"}],
        {"id": "hh-1", "name": "Home"},
    ],
)
def test_household_id_response_shapes(payload):
    client, _ = _mealie(_response(payload))

    assert client.get_household_id() == "hh-1"


def test_household_id_is_cached():
    client, session = _mealie(_response({"items": [{"id": "hh-1"}]}))

    client.get_household_id()
    client.get_household_id()

    assert session.request.call_count == 1


def test_household_id_missing():
    client, _ = _mealie(_response({"items": []}))

    with pytest.raises(HouseholdResolutionError):
        client.get_household_id()


def test_household_lookup_http_failure():
    client, _ = _mealie(_response({"detail": "unauthorized"}, status=401))

    with pytest.raises(HouseholdResolutionError) as exc_info:
        client.get_household_id()

    assert "unauthorized" in exc_info.value.details["error"]


def test_user_id_missing():
    client, _ = _mealie(_response({"username": "admin"}))

    with pytest.raises(HouseholdResolutionError):
        client.get_user_id()


# =============================================================================
# MEALIE RESOURCES
# =============================================================================


def test_meal_plan_entries_query_by_date_range():
    client, session = _mealie(_response({"items": [{"date": "2026-10-19", "entryType": "dinner"}]}))

    entries = client.get_meal_plan_entries(date(2026, 10, 19), date(2026, 10, 25))

    assert len(entries) == 1
    assert session.request.call_args.kwargs["params"] == {"startDate": "2026-10-19", "endDate": "2026-10-25"}


def test_add_recipe_to_shopping_list_payload():
    client, session = _mealie(_response({"id": "list-1"}))
    ingredients = [{"food": {"name": "cod"}, "quantity": 500}]

    client.add_recipe_to_shopping_list("list-1", "r-tacos", ingredients)

    args, kwargs = session.request.call_args
    assert args == ("POST", "http://mealie.local/api/households/shopping/lists/list-1/recipe")
    assert kwargs["json"] == [
        {"recipeId": "r-tacos", "recipeIncrementQuantity": 1, "recipeIngredients": ingredients}
    ]


# =============================================================================
# INSTACART
# =============================================================================


def _instacart(*responses):
    session = _session(*responses)
    client = InstacartClient("ic-token", "retailer-9", "store-3", base_url="https://ic.test/v2", session=session)
    return client, session


def test_search_returns_products():
    client, session = _instacart(_response({"products": [{"id": "p-1", "name": "Yellow Onion"}]}))

    products = client.search_products("onion")

    assert products == [{"id": "p-1", "name": "Yellow Onion"}]
    args, kwargs = session.request.call_args
    assert args[1] == "https://ic.test/v2/retailers/retailer-9/locations/store-3/products/search"
    assert kwargs["params"] == {"q": "onion", "limit": 10}


def test_search_failure_returns_empty_list():
    session = Mock()
    session.headers = {}
    session.request.side_effect = requests.ConnectionError("connection reset")
    client = InstacartClient("ic-token", "retailer-9", "store-3", session=session)

    assert client.search_products("onion") == []


@pytest.mark.parametrize("payload", [None, [{"id": "p-1"}], "no results"])
def test_search_with_unexpected_body_returns_empty_list(payload):
    client, _ = _instacart(_response(payload))

    assert client.search_products("onion") == []


def test_checkout_requests_pickup():
    client, session = _instacart(_response({"id": "order-1"}))

    client.checkout("cart-1", "2026-10-19T17:00:00")

    kwargs = session.request.call_args.kwargs
    assert kwargs["json"] == {
        "service_option": {"type": "pickup", "requested_start_at": "2026-10-19T17:00:00"}
    }


def test_checkout_error_propagates():
    client, _ = _instacart(_response({"error": "slot unavailable"}, status=422))

    with pytest.raises(requests.HTTPError):
        client.checkout("cart-1", "2026-10-19T17:00:00")


# =============================================================================
# ANTHROPIC
# =============================================================================


def test_oracle_joins_text_blocks():
    anthropic_client = Mock()
    anthropic_client.messages.create.return_value = SimpleNamespace(
        content=[
            SimpleNamespace(type="text", text='{"meal_plan": [], '),
            SimpleNamespace(type="text", text='"notes": null}'),
        ]
    )
    oracle = AnthropicPlanningOracle("key", "claude-sonnet-4-20250514", 2000, client=anthropic_client)

    assert oracle.complete("plan my week") == '{"meal_plan": [], "notes": null}'
    kwargs = anthropic_client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-sonnet-4-20250514"
    assert kwargs["max_tokens"] == 2000
    assert kwargs["messages"] == [{"role": "user", "content": "plan my week"}]


def test_oracle_without_api_key():
    oracle = AnthropicPlanningOracle("", "claude-sonnet-4-20250514")

    with pytest.raises(RuntimeError):
        oracle.complete("plan my week")
