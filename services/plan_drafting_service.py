from __future__ import annotations

import json
import logging
import re
from typing import List, Protocol, Sequence

from pydantic import ValidationError

from app.exceptions import PlanningOracleError
from domain.schemas import Feedback, PlanDraft, Preferences, RecipeSummary


logger = logging.getLogger("dinnerplan.drafting")

FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")

PLANNING_RULES = """Please create a meal plan that:
1. Avoids ALL allergens completely
2. Minimizes disliked foods
3. Incorporates preferences when possible
4. Provides variety (no repeating meals)
5. Balances nutrition across the week
6. Stays within cooking time limits
7. Learns from past feedback"""

RESPONSE_FORMAT = """Respond with a JSON object in this exact format:
{
  "meal_plan": [
    {
      "day": "Monday",
      "recipe_name": "Recipe Name",
      "reason": "Why this meal works for the family (one sentence)"
    }
  ],
  "notes": "Any important notes about this week's plan"
}

CRITICAL: Your entire response must be ONLY a valid JSON object. DO NOT include any text before or after the JSON."""


class CompletionOracle(Protocol):
    def complete(self, prompt: str) -> str: ...


def _listed(values: Sequence[str]) -> str:
    return ", ".join(values) or "none"


class PlanDraftingService:
    """
    Drafts a week of dinners with the planning model:
    - summarises preferences, the first recipes of the catalog and recent feedback
    - asks for a strict JSON plan
    - parses the reply, tolerating a ```json fenced``` wrapper

    Malformed replies raise PlanningOracleError; nothing is retried. The
    number of days returned is not enforced here.
    """

    def __init__(self, oracle: CompletionOracle, prompt_recipe_limit: int = 50):
        self.oracle = oracle
        self.prompt_recipe_limit = prompt_recipe_limit

    # ---------- prompt ----------

    def build_prompt(
            self,
            preferences: Preferences,
            recipes: Sequence[RecipeSummary],
            feedback: Sequence[Feedback],
    ) -> str:
        recipes_text = "\n".join(
            f"- {r.name}: {r.description or 'No description'}"
            for r in list(recipes)[: self.prompt_recipe_limit]
        )
        feedback_text = "\n".join(
            f"Previous feedback: Liked: {', '.join(f.liked_meals)}, "
            f"Disliked: {', '.join(f.disliked_meals)}. Notes: {f.suggestions}"
            for f in feedback
        )
        family_info = "\n".join(
            f"- {m.name}: Allergies: {_listed(m.allergies)}, "
            f"Dislikes: {_listed(m.dislikes)}, Preferences: {_listed(m.preferences)}"
            for m in preferences.family_members
        )
        budget = (
            f"${preferences.budget_per_week:g}"
            if preferences.budget_per_week
            else "No limit"
        )

        sections: List[str] = [
            "You are a meal planning assistant. Create a 7-day meal plan (dinner only) for this family.",
            f"FAMILY INFORMATION:\n{family_info}",
            "\n".join(
                [
                    f"DIETARY RESTRICTIONS: {_listed(preferences.dietary_restrictions)}",
                    f"MAX COOKING TIME: {preferences.cooking_time_max} minutes",
                    f"BUDGET: {budget}",
                    f"ADDITIONAL NOTES: {preferences.notes or 'none'}",
                ]
            ),
            f"AVAILABLE RECIPES:\n{recipes_text}",
            f"PAST FEEDBACK:\n{feedback_text or 'No previous feedback'}",
            PLANNING_RULES,
            RESPONSE_FORMAT,
        ]
        return "\n\n".join(sections)

    # ---------- response ----------

    @staticmethod
    def parse_response(raw: str) -> PlanDraft:
        text = (raw or "").strip()
        if "```" in text:
            match = FENCED_JSON_RE.search(text)
            if match:
                text = match.group(1)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Planning response is not valid JSON: %s", e)
            raise PlanningOracleError(
                "Planning response is not valid JSON",
                details={"error": str(e), "response": text[:500]},
                code="invalid_json",
            ) from e

        try:
            return PlanDraft.model_validate(data)
        except ValidationError as e:
            logger.error("Planning response has the wrong shape: %s", e)
            raise PlanningOracleError(
                "Planning response does not match {meal_plan: [{day, recipe_name, reason}], notes}",
                details={"errors": e.errors(include_url=False)},
                code="invalid_shape",
            ) from e

    # ---------- main ----------

    def draft(
            self,
            preferences: Preferences,
            recipes: Sequence[RecipeSummary],
            feedback: Sequence[Feedback],
    ) -> PlanDraft:
        prompt = self.build_prompt(preferences, recipes, feedback)
        draft = self.parse_response(self.oracle.complete(prompt))
        logger.info("Drafted plan with %d meals", len(draft.meal_plan))
        return draft
