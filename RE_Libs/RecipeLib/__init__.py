"""
RecipeLib - Edit recipes

This module maps operation names to editor calls and stores ordered
lists of those operations as JSON recipes.
"""

from RE_Libs.RecipeLib.operation_registry import (
    OperationRegistry,
    get_default_registry,
    register_default_operations,
)
from RE_Libs.RecipeLib.recipe_store import (
    create_recipe,
    validate_recipe,
    load_recipe,
    save_recipe,
    run_recipe,
)

__all__ = [
    "OperationRegistry",
    "get_default_registry",
    "register_default_operations",
    "create_recipe",
    "validate_recipe",
    "load_recipe",
    "save_recipe",
    "run_recipe",
]
