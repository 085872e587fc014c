"""
DinnerPlan entry point.
Wires the meal plan lifecycle together and runs one operation from the command line.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from sqlalchemy.orm import Session

from adapters import AnthropicPlanningOracle, InstacartClient, MealieClient
from app.config import settings
from app.exceptions import PlannerError
from domain.models import SessionLocal, init_database
from domain.schemas import FeedbackCreate, PlanModifications, Preferences
from repositories import (
    FeedbackRepository,
    MealPlanRepository,
    OrderRepository,
    PreferencesRepository,
)
from services import (
    HouseholdService,
    HouseholdSyncService,
    IngredientConsolidator,
    MealPlanService,
    OrderService,
    PlanDraftingService,
    RecipeCatalog,
)

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("dinnerplan.main")


def create_meal_plan_service(
        db: Session,
        mealie: Optional[MealieClient] = None,
        instacart: Optional[InstacartClient] = None,
        oracle: Optional[AnthropicPlanningOracle] = None,
) -> MealPlanService:
    """Build the orchestrator with clients from settings unless given."""
    mealie = mealie or MealieClient(
        settings.mealie_url, settings.mealie_token, settings.request_timeout_sec
    )
    instacart = instacart or InstacartClient(
        settings.instacart_access_token,
        settings.instacart_retailer_id,
        settings.instacart_store_id,
        base_url=settings.instacart_base_url,
        request_timeout_seconds=settings.request_timeout_sec,
    )
    oracle = oracle or AnthropicPlanningOracle(
        settings.anthropic_api_key, settings.anthropic_model, settings.planner_max_tokens
    )

    catalog = RecipeCatalog(mealie, fetch_limit=settings.catalog_fetch_limit)
    return MealPlanService(
        plans=MealPlanRepository(db),
        orders=OrderRepository(db),
        preferences=PreferencesRepository(db),
        feedback=FeedbackRepository(db),
        catalog=catalog,
        drafting=PlanDraftingService(oracle, prompt_recipe_limit=settings.prompt_recipe_limit),
        consolidator=IngredientConsolidator(catalog),
        household_sync=HouseholdSyncService(mealie, catalog),
        order_service=OrderService(instacart),
        feedback_window=settings.feedback_window,
    )


def create_household_service(db: Session) -> HouseholdService:
    return HouseholdService(PreferencesRepository(db), FeedbackRepository(db))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dinnerplan", description=f"{settings.app_name} {settings.app_version}: weekly dinner planning"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the local database schema")
    sub.add_parser("generate", help="Draft next week's plan")
    sub.add_parser("current", help="Show the current pending/approved plan")

    approve = sub.add_parser("approve", help="Approve a plan and sync it to Mealie")
    approve.add_argument("plan_id")
    approve.add_argument("--meals", help="JSON file with a replacement list of {day, recipe_name, reason}")

    order = sub.add_parser("order", help="Place the pickup order for an approved plan")
    order.add_argument("plan_id")
    order.add_argument("pickup_time", help="ISO-8601 requested pickup start")

    prefs = sub.add_parser("set-preferences", help="Replace household preferences from a JSON file")
    prefs.add_argument("path")

    feedback = sub.add_parser("feedback", help="Record feedback on past meals")
    feedback.add_argument("--liked", nargs="*", default=[])
    feedback.add_argument("--disliked", nargs="*", default=[])
    feedback.add_argument("--suggestions", default="")
    feedback.add_argument("--plan-id", dest="plan_id")

    return parser


def _read_json(path: str):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _run(args, db: Session):
    if args.command == "set-preferences":
        return create_household_service(db).save_preferences(
            Preferences.model_validate(_read_json(args.path))
        )
    if args.command == "feedback":
        return create_household_service(db).submit_feedback(
            FeedbackCreate(
                liked_meals=args.liked,
                disliked_meals=args.disliked,
                suggestions=args.suggestions,
                plan_id=args.plan_id,
            )
        )

    service = create_meal_plan_service(db)
    if args.command == "generate":
        return service.generate()
    if args.command == "current":
        return service.get_current_plan()
    if args.command == "approve":
        modifications = None
        if args.meals:
            modifications = PlanModifications(meals=_read_json(args.meals))
        return service.approve(args.plan_id, modifications)
    return service.place_order(args.plan_id, args.pickup_time)


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    _logger.debug("%s %s (%s): %s", settings.app_name, settings.app_version, settings.environment.value, args.command)

    if args.command == "init-db":
        init_database()
        return 0

    db = SessionLocal()
    try:
        result = _run(args, db)
    except PlannerError as e:
        _logger.error("%s failed: %s", args.command, e)
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    finally:
        db.close()

    print(result.model_dump_json(indent=2) if result is not None else "null")
    return 0


if __name__ == "__main__":
    sys.exit(main())
