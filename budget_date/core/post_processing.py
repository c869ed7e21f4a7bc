"""Turn raw model text into a validated :class:`ItineraryPlan`.

The steps are kept as small pure functions so each one can be exercised with
crafted strings:

1. :func:`extract_json` - direct parse, then brace extraction
2. :func:`validate_plan` - strict schema check, never coerces
3. :func:`clamp_total_cost` - enforce the budget ceiling
4. :func:`decorate_title` - make sure the title carries an emoji
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from budget_date.core.errors import ModelOutputError
from budget_date.core.schemas import ItineraryPlan

logger = logging.getLogger(__name__)

TITLE_EMOJI = "💘"

_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
# Code points carrying the Unicode Emoji property. The symbol blocks are
# listed point by point since they also hold plain text glyphs such as ★ ♪ ✓.
_EMOJI_PATTERN = re.compile(
    r"["
    r"\U0001F004\U0001F0CF\U0001F170\U0001F171\U0001F17E\U0001F17F\U0001F18E"
    r"\U0001F191-\U0001F19A\U0001F1E6-\U0001F1FF\U0001F201\U0001F202\U0001F21A"
    r"\U0001F22F\U0001F232-\U0001F23A\U0001F250\U0001F251"
    r"\U0001F300-\U0001F64F\U0001F680-\U0001F6FF\U0001F7E0-\U0001F7F0"
    r"\U0001F90C-\U0001F9FF\U0001FA70-\U0001FAFF"
    r"⌚⌛⌨⏏⏩-⏳⏸-⏺"
    r"☀-☄☎☑☔☕☘☝☠☢☣"
    r"☦☪☮☯☸-☺♀♂♈-♓"
    r"♟♠♣♥♦♨♻♾♿⚒-⚗"
    r"⚙⚛⚜⚠⚡⚧⚪⚫⚰⚱⚽"
    r"⚾⛄⛅⛈⛎⛏⛑⛓⛔⛩⛪"
    r"⛰-⛵⛷-⛺⛽"
    r"✂✅✈-✍✏✒✔✖✝✡✨"
    r"✳✴❄❇❌❎❓-❕❗❣❤"
    r"➕-➗➡➰➿"
    r"⬅-⬇⬛⬜⭐⭕"
    r"‼⁉™ℹ↔-↙↩↪"
    r"〰〽㊗㊙©®"
    r"]"
)


def extract_json(text: str) -> Any:
    """Parse model text into a JSON value.

    Tries the whole text first. If the model wrapped the object in prose or a
    code fence, falls back to the widest ``{...}`` span and then to the first
    balanced object in the text.

    Raises:
        ModelOutputError: when no JSON object can be recovered.
    """

    stripped = (text or "").strip()
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass

    match = _OBJECT_PATTERN.search(stripped)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            pass

    decoder = json.JSONDecoder()
    start = stripped.find("{")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(stripped, start)
        except json.JSONDecodeError:
            start = stripped.find("{", start + 1)
            continue
        return value

    logger.warning("Model returned text without a JSON object: %.200s", stripped)
    raise ModelOutputError("Gemini returned non-JSON text")


def _flatten_errors(exc: ValidationError) -> List[Dict[str, str]]:
    return [
        {
            "loc": ".".join(str(part) for part in error["loc"]) or "(root)",
            "msg": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def validate_plan(data: Any) -> ItineraryPlan:
    """Validate parsed model output against the itinerary schema.

    Raises:
        ModelOutputError: with ``details`` listing every failing field.
    """

    try:
        return ItineraryPlan.model_validate(data)
    except ValidationError as exc:
        details = _flatten_errors(exc)
        logger.warning("Model output failed schema validation: %s", details)
        raise ModelOutputError(
            "Model output failed schema validation", details=details
        ) from exc


def clamp_total_cost(plan: ItineraryPlan, budget: float) -> ItineraryPlan:
    """Cap ``total_cost`` at ``budget``; other fields are not reconciled."""

    if plan.total_cost > budget:
        logger.info("Clamping total_cost %s to budget %s", plan.total_cost, budget)
        plan.total_cost = budget
    return plan


def has_emoji(value: str) -> bool:
    return bool(_EMOJI_PATTERN.search(value))


def decorate_title(plan: ItineraryPlan) -> ItineraryPlan:
    if not has_emoji(plan.title):
        plan.title = f"{TITLE_EMOJI} {plan.title}"
    return plan


def build_plan(text: str, budget: float) -> ItineraryPlan:
    """Run the full post-processing chain on raw model text."""

    plan = validate_plan(extract_json(text))
    return decorate_title(clamp_total_cost(plan, budget))
