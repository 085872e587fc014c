"""
Integration tests for the meal plan lifecycle.

Plan Lifecycle:
===============
1. generate()    -> new PENDING plan for next Monday's week
2. approve()     -> shopping list consolidated, APPROVED, mirrored into Mealie
3. place_order() -> Instacart cart checked out, ORDERED (terminal)

The "current" plan is the newest plan still PENDING or APPROVED.
"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
import requests
from sqlalchemy.exc import OperationalError

from app.exceptions import (
    ConfigurationError,
    HouseholdResolutionError,
    InvalidStateError,
    NotFoundError,
    PlanningOracleError,
)
from domain.enums import PlanStatus
from domain.schemas import Feedback, MealAssignment, PlanModifications, ShoppingListItem
from repositories import FeedbackRepository, MealPlanRepository, OrderRepository, PreferencesRepository
from services import MealPlanService

from test_fixtures import (
    FakeMealie,
    build_service,
    db_session,
    fixed_clock,
    make_instacart,
    make_oracle,
    make_plan,
    make_preferences,
    week_of_meals,
)

SATURDAY = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)
PICKUP = "2026-10-19T17:00:00"


@pytest.fixture
def configured_db(db_session):
    PreferencesRepository(db_session).put(make_preferences())
    return db_session


def _approved_plan(db_session, shopping_list):
    plan = make_plan(plan_id="plan-approved", status=PlanStatus.APPROVED, shopping_list=shopping_list)
    return MealPlanRepository(db_session).put(plan)


# =============================================================================
# WEEK START
# =============================================================================


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2026, 10, 17), date(2026, 10, 19)),  # Saturday
        (date(2026, 10, 18), date(2026, 10, 19)),  # Sunday
        (date(2026, 10, 19), date(2026, 10, 26)),  # Monday -> following week
        (date(2026, 10, 21), date(2026, 10, 26)),  # Wednesday
    ],
)
def test_next_monday(today, expected):
    assert MealPlanService.next_monday(today) == expected


# =============================================================================
# GENERATE
# =============================================================================


def test_generate_creates_pending_plan(configured_db):
    """
    Preferences saved, oracle returns seven dinners.

    Verifies:
    - plan is pending with seven meals
    - week starts on the next Monday
    - shopping list is empty until approval
    - the plan becomes current
    """
    service = build_service(configured_db, clock=fixed_clock(SATURDAY))

    plan = service.generate()

    assert plan.status == PlanStatus.PENDING
    assert len(plan.meals) == 7
    assert plan.week_start == date(2026, 10, 19)
    assert plan.shopping_list == []
    assert plan.notes == "Balanced week"
    assert service.get_current_plan().id == plan.id


def test_generate_without_preferences_fails(db_session):
    oracle = make_oracle()
    service = build_service(db_session, oracle=oracle)

    with pytest.raises(ConfigurationError):
        service.generate()

    oracle.complete.assert_not_called()
    assert service.list_plans() == []


def test_generate_with_malformed_reply_stores_nothing(configured_db):
    service = build_service(configured_db, oracle=make_oracle("I'd suggest tacos every night!"))

    with pytest.raises(PlanningOracleError):
        service.generate()

    assert service.list_plans() == []


def test_generate_uses_most_recent_feedback(configured_db):
    feedback_repo = FeedbackRepository(configured_db)
    start = datetime(2026, 9, 1, tzinfo=timezone.utc)
    for i in range(7):
        feedback_repo.add(
            Feedback(id=f"fb-{i}", suggestions=f"suggestion number {i}", created_at=start + timedelta(days=i))
        )
    oracle = make_oracle()
    service = build_service(configured_db, oracle=oracle)

    service.generate()

    prompt = oracle.complete.call_args[0][0]
    assert "suggestion number 0" not in prompt
    assert "suggestion number 1" not in prompt
    for i in range(2, 7):
        assert f"suggestion number {i}" in prompt


def test_generate_twice_keeps_both_and_newest_is_current(configured_db):
    service = build_service(configured_db, clock=fixed_clock(SATURDAY))

    first = service.generate()
    second = service.generate()

    assert service.get_plan(first.id).status == PlanStatus.PENDING
    assert service.get_current_plan().id == second.id
    assert [p.id for p in service.list_plans()] == [second.id, first.id]


# =============================================================================
# CURRENT PLAN
# =============================================================================


def test_current_plan_ignores_ordered_plans(db_session):
    repo = MealPlanRepository(db_session)
    base = datetime(2026, 10, 1, tzinfo=timezone.utc)
    repo.put(make_plan(plan_id="old-pending", status=PlanStatus.PENDING, created_at=base))
    repo.put(make_plan(plan_id="mid-approved", status=PlanStatus.APPROVED, created_at=base + timedelta(days=1)))
    repo.put(make_plan(plan_id="new-ordered", status=PlanStatus.ORDERED, created_at=base + timedelta(days=2)))
    service = build_service(db_session)

    assert service.get_current_plan().id == "mid-approved"


def test_no_current_plan(db_session):
    MealPlanRepository(db_session).put(make_plan(status=PlanStatus.ORDERED))

    assert build_service(db_session).get_current_plan() is None


# =============================================================================
# APPROVE
# =============================================================================


def test_approve_consolidates_and_syncs(configured_db):
    mealie = FakeMealie()
    service = build_service(configured_db, mealie=mealie, clock=fixed_clock(SATURDAY))
    plan = service.generate()

    approved = service.approve(plan.id)

    assert approved.status == PlanStatus.APPROVED
    assert approved.approved_at is not None
    onion = next(i for i in approved.shopping_list if i.name.lower() == "onion")
    # stir fry x2 + curry x2 (1 cup each) + lentil soup (2 whole)
    assert onion.quantity == 6
    assert approved.unresolved_meals == []
    assert len(mealie.dinner_dates()) == 7
    assert len(mealie.shopping_lists) == 1
    assert service.get_plan(plan.id).status == PlanStatus.APPROVED


def test_approve_with_modified_meals(configured_db):
    """
    The household swaps the week for two dinners at approval.

    Verifies:
    - stored meals are replaced by the edited list
    - the shopping list reflects the edited meals only
    """
    service = build_service(configured_db, clock=fixed_clock(SATURDAY))
    plan = service.generate()
    edited = [
        MealAssignment(day="Monday", recipe_name="Fish Tacos", reason="Leo's pick"),
        MealAssignment(day="Tuesday", recipe_name="Pasta Carbonara", reason="Sarah's pick"),
    ]

    approved = service.approve(plan.id, PlanModifications(meals=edited))

    stored = service.get_plan(plan.id)
    assert [m.recipe_name for m in stored.meals] == ["Fish Tacos", "Pasta Carbonara"]
    assert {i.name for i in approved.shopping_list} == {"cod", "tortillas", "pasta", "eggs", "bacon"}


def test_reapprove_with_modified_meals_overrides_drafted_meals(configured_db):
    service = build_service(configured_db, clock=fixed_clock(SATURDAY))
    plan = service.generate()
    service.approve(plan.id)

    reapproved = service.approve(
        plan.id,
        PlanModifications(meals=[MealAssignment(day="Friday", recipe_name="Lentil Soup", reason="Cold week")]),
    )

    stored = service.get_plan(plan.id)
    assert stored.status == PlanStatus.APPROVED
    assert [m.recipe_name for m in stored.meals] == ["Lentil Soup"]
    assert {i.name for i in reapproved.shopping_list} == {"lentils", "onion"}


def test_approve_records_unresolved_meals(configured_db):
    service = build_service(configured_db, clock=fixed_clock(SATURDAY))
    plan = service.generate()

    approved = service.approve(
        plan.id,
        PlanModifications(meals=week_of_meals(["Fish Tacos", "Grandma's Meatloaf"])),
    )

    assert approved.unresolved_meals == ["Grandma's Meatloaf"]


def test_approve_unknown_plan(db_session):
    with pytest.raises(NotFoundError):
        build_service(db_session).approve("does-not-exist")


def test_approve_ordered_plan_is_rejected(db_session):
    MealPlanRepository(db_session).put(make_plan(plan_id="done", status=PlanStatus.ORDERED))

    with pytest.raises(InvalidStateError):
        build_service(db_session).approve("done")


def test_reapprove_does_not_duplicate_remote_state(configured_db):
    mealie = FakeMealie()
    service = build_service(configured_db, mealie=mealie, clock=fixed_clock(SATURDAY))
    plan = service.generate()

    service.approve(plan.id)
    again = service.approve(plan.id)

    assert again.status == PlanStatus.APPROVED
    assert len(mealie.entries) == 7
    assert len(mealie.shopping_lists) == 1
    assert mealie.calls["add_recipe_to_shopping_list"] == 5


def test_sync_failure_after_local_commit(configured_db):
    """
    Verifies the approval is persisted even though the Mealie sync
    aborts on an unresolvable household.
    """
    mealie = FakeMealie(household_id=None)
    service = build_service(configured_db, mealie=mealie, clock=fixed_clock(SATURDAY))
    plan = service.generate()

    with pytest.raises(HouseholdResolutionError):
        service.approve(plan.id)

    stored = service.get_plan(plan.id)
    assert stored.status == PlanStatus.APPROVED
    assert stored.shopping_list
    assert mealie.entries == []


# =============================================================================
# PLACE ORDER
# =============================================================================


def test_place_order(db_session):
    """
    Approved plan with two items, one unmatched.

    Verifies:
    - one line item reaches the cart
    - order is stored with the checkout id
    - plan becomes ordered and stops being current
    """
    _approved_plan(
        db_session,
        [ShoppingListItem(name="chicken breast", quantity=2), ShoppingListItem(name="saffron threads", quantity=1)],
    )
    instacart = make_instacart({"chicken breast": [{"id": "p-100"}]})
    service = build_service(db_session, instacart=instacart, clock=fixed_clock(SATURDAY))

    order = service.place_order("plan-approved", PICKUP)

    assert [(li.product_id, li.quantity) for li in order.line_items] == [("p-100", 2)]
    assert order.unmatched_items == ["saffron threads"]
    assert order.external_order_id == "order-77"
    assert order.pickup_time == PICKUP
    assert service.get_plan("plan-approved").status == PlanStatus.ORDERED
    assert service.get_current_plan() is None
    assert [o.id for o in service.list_orders()] == [order.id]
    assert OrderRepository(db_session).list_by_plan("plan-approved")[0].cart_id == "cart-1"


def test_place_order_on_pending_plan_is_rejected(db_session):
    MealPlanRepository(db_session).put(make_plan(plan_id="draft"))
    instacart = make_instacart()

    with pytest.raises(InvalidStateError):
        build_service(db_session, instacart=instacart).place_order("draft", PICKUP)

    instacart.create_cart.assert_not_called()


def test_place_order_twice_is_rejected(db_session):
    _approved_plan(db_session, [ShoppingListItem(name="onion", quantity=1)])
    service = build_service(db_session, clock=fixed_clock(SATURDAY))

    service.place_order("plan-approved", PICKUP)
    with pytest.raises(InvalidStateError):
        service.place_order("plan-approved", PICKUP)


def test_place_order_unknown_plan(db_session):
    with pytest.raises(NotFoundError):
        build_service(db_session).place_order("missing", PICKUP)


def test_checkout_failure_keeps_plan_approved(db_session):
    _approved_plan(db_session, [ShoppingListItem(name="onion", quantity=1)])
    instacart = make_instacart({"onion": [{"id": "p-1"}]})
    instacart.checkout.side_effect = requests.HTTPError("502 Bad Gateway")
    service = build_service(db_session, instacart=instacart, clock=fixed_clock(SATURDAY))

    with pytest.raises(requests.HTTPError):
        service.place_order("plan-approved", PICKUP)

    assert service.get_plan("plan-approved").status == PlanStatus.APPROVED
    assert service.list_orders() == []

    instacart.checkout.side_effect = None
    service.place_order("plan-approved", PICKUP)

    # every attempt starts a fresh cart
    assert instacart.create_cart.call_count == 2


def test_store_availability_passthrough(db_session):
    assert build_service(db_session).get_store_availability() == {"available": True}


def test_failed_order_write_leaves_no_order_and_plan_approved(db_session):
    _approved_plan(db_session, [ShoppingListItem(name="onion", quantity=1)])
    service = build_service(db_session, clock=fixed_clock(SATURDAY))

    with patch.object(db_session, "commit", side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))):
        with pytest.raises(OperationalError):
            service.place_order("plan-approved", PICKUP)

    assert service.list_orders() == []
    assert service.get_plan("plan-approved").status == PlanStatus.APPROVED
