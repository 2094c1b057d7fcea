"""Reconcile a locally edited ingredient list with a recipe on the server.

The recipe editor keeps a temporary list of (ingredient, quantity) pairs.
On save the list is diffed against what the server holds and turned into
individual add/delete calls. The backend has no update for recipe
ingredients, so a quantity change is a delete followed by an add.

The sequence is not atomic: a failure leaves earlier steps applied. Every
step is attempted and the failures are collected into one SyncReport.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, NamedTuple, Tuple

from mealdesk.domain.Ingredient import Ingredient, RecipeIngredient
from mealdesk.infra.Api_Client import ApiError

logger = logging.getLogger(__name__)


class TempIngredient(NamedTuple):
    ingredient_id: int
    quantity: float
    ingredient_name: str = ""
    unit: str = ""


class IngredientChanges(NamedTuple):
    to_add: List[TempIngredient]
    to_remove: List[RecipeIngredient]
    to_update: List[TempIngredient]

    @property
    def is_empty(self) -> bool:
        return not (self.to_add or self.to_remove or self.to_update)


class SyncReport(NamedTuple):
    applied: List[str]
    failed: List[Tuple[str, str]]

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        if self.ok:
            return f"{len(self.applied)} ingredient change(s) saved"
        details = "; ".join(f"{step}: {msg}" for step, msg in self.failed)
        return f"{len(self.failed)} ingredient change(s) failed ({details})"


def diff_ingredients(existing: Iterable[RecipeIngredient], temp: Iterable[TempIngredient]) -> IngredientChanges:
    """Compare the server list with the edited one.

    The edited list is keyed by ingredient id; if an id appears twice the
    later entry wins. Output lists keep the order of their source list.
    """
    wanted = {}
    for item in temp:
        wanted[item.ingredient_id] = item
    current = {ri.ingredient_id: ri for ri in existing}

    to_remove = [ri for iid, ri in current.items() if iid not in wanted]
    to_add = [t for iid, t in wanted.items() if iid not in current]
    to_update = [
        t for iid, t in wanted.items()
        if iid in current and not math.isclose(float(current[iid].quantity), float(t.quantity))
    ]
    return IngredientChanges(to_add, to_remove, to_update)


def sync_recipe_ingredients(repo, recipe_id: int, temp: Iterable[TempIngredient]) -> SyncReport:
    """Apply the edited list to the recipe: removals, then updates, then additions."""
    existing = repo.get_ingredients(recipe_id)
    changes = diff_ingredients(existing, list(temp))
    applied: List[str] = []
    failed: List[Tuple[str, str]] = []

    for ri in changes.to_remove:
        step = f"remove {ri.ingredient_name or ri.ingredient_id}"
        try:
            repo.delete_ingredient(recipe_id, ri.ingredient_id)
            applied.append(step)
        except ApiError as e:
            failed.append((step, e.message))

    for t in changes.to_update:
        step = f"update {t.ingredient_name or t.ingredient_id}"
        try:
            repo.delete_ingredient(recipe_id, t.ingredient_id)
        except ApiError as e:
            failed.append((step, e.message))
            continue
        try:
            repo.add_ingredient(recipe_id, t.ingredient_id, t.quantity)
            applied.append(step)
        except ApiError as e:
            # Old row is already gone; report, do not try to restore it
            failed.append((step, e.message))

    for t in changes.to_add:
        step = f"add {t.ingredient_name or t.ingredient_id}"
        try:
            repo.add_ingredient(recipe_id, t.ingredient_id, t.quantity)
            applied.append(step)
        except ApiError as e:
            failed.append((step, e.message))

    report = SyncReport(applied, failed)
    if report.ok:
        logger.info("Recipe #%s: %s", recipe_id, report.summary())
    else:
        logger.warning("Recipe #%s: %s", recipe_id, report.summary())
    return report


def available_ingredients(all_ingredients: Iterable[Ingredient],
                          recipe_ingredients: Iterable[RecipeIngredient]) -> List[Ingredient]:
    """Catalogue ingredients not yet attached to the recipe."""
    taken = {ri.ingredient_id for ri in recipe_ingredients}
    return [ing for ing in all_ingredients if ing.id not in taken]
