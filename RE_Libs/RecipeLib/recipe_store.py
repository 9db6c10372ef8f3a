"""
Edit recipe storage and execution for Raster Edit.

A recipe is a JSON document listing editor operations in order:

    {
        "schema_version": 1,
        "name": "poster",
        "created_at": "2024-05-01T12:00:00",
        "steps": [
            {"op": "crop", "x": 0, "y": 0, "width": 50, "height": 50},
            {"op": "overlay", "image_path": "logo.png", "x": 4, "y": 4},
            {"op": "save", "path": "out.png"}
        ]
    }

Functions:
    create_recipe: Build a new recipe dictionary
    validate_recipe: Check schema version and step operation names
    load_recipe: Load and validate a recipe file
    save_recipe: Write a recipe to disk
    run_recipe: Apply a recipe's steps to an ImageEditor
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from RE_Libs.constants import (
    SCHEMA_VERSION,
    FIELD_SCHEMA_VERSION,
    FIELD_NAME,
    FIELD_CREATED_AT,
    FIELD_STEPS,
    FIELD_OP,
    PATH_FIELDS,
)
from RE_Libs.ImageEditingLib.errors import LoadError, OperationError
from RE_Libs.ImageEditingLib.image_editor import ImageEditor
from RE_Libs.RecipeLib.operation_registry import OperationRegistry, get_default_registry

logger = logging.getLogger(__name__)


def create_recipe(name: str, steps: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Build a new recipe dictionary with the current timestamp."""
    return {
        FIELD_SCHEMA_VERSION: SCHEMA_VERSION,
        FIELD_NAME: str(name),
        FIELD_CREATED_AT: datetime.now().isoformat(timespec="seconds"),
        FIELD_STEPS: [dict(step) for step in (steps or [])],
    }


def validate_recipe(
    data: Any,
    registry: Optional[OperationRegistry] = None,
) -> Dict[str, Any]:
    """
    Validate recipe structure.

    Args:
        data: Decoded recipe document
        registry: Registry used to check operation names (default registry if None)

    Returns:
        The recipe dictionary

    Raises:
        OperationError: If the document is not a usable recipe
    """
    if registry is None:
        registry = get_default_registry()

    if not isinstance(data, dict):
        raise OperationError(f"Recipe must be a JSON object, got {type(data).__name__}")

    version = data.get(FIELD_SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise OperationError(
            f"Unsupported recipe schema version: {version!r} (expected {SCHEMA_VERSION})"
        )

    steps = data.get(FIELD_STEPS)
    if not isinstance(steps, list):
        raise OperationError(f"Recipe '{FIELD_STEPS}' must be a list")

    for index, step in enumerate(steps):
        if not isinstance(step, dict) or FIELD_OP not in step:
            raise OperationError(f"Recipe step {index} must be an object with an '{FIELD_OP}' field")
        if not registry.has_operation(step[FIELD_OP]):
            raise OperationError(
                f"Recipe step {index} uses unknown operation '{step[FIELD_OP]}'. "
                f"Available operations: {', '.join(registry.list_operations())}"
            )

    return data


def _resolve_step_paths(step: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    """Make relative file paths in a step relative to the recipe's directory."""
    resolved = dict(step)
    for key in PATH_FIELDS:
        value = resolved.get(key)
        if isinstance(value, str) and not Path(value).is_absolute():
            resolved[key] = str(base_dir / value)
    return resolved


def load_recipe(
    recipe_path: Union[str, Path],
    registry: Optional[OperationRegistry] = None,
) -> Dict[str, Any]:
    """
    Load a recipe file.

    Relative ``image_path`` / ``path`` step values are resolved against the
    directory that holds the recipe file.

    Raises:
        LoadError: If the file cannot be read or is not valid JSON
        OperationError: If the document is not a valid recipe
    """
    recipe_path = Path(recipe_path)

    try:
        with recipe_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(f"Failed to load recipe {recipe_path}: {e}") from e

    validate_recipe(data, registry)

    base_dir = recipe_path.parent
    data[FIELD_STEPS] = [_resolve_step_paths(step, base_dir) for step in data[FIELD_STEPS]]
    return data


def save_recipe(recipe_path: Union[str, Path], recipe: Dict[str, Any]) -> Path:
    """
    Write a recipe to disk as indented JSON.

    Raises:
        OperationError: If the recipe is invalid or the file cannot be written
    """
    validate_recipe(recipe)
    recipe_path = Path(recipe_path)

    try:
        with recipe_path.open("w", encoding="utf-8") as handle:
            json.dump(recipe, handle, indent=2)
    except (OSError, TypeError) as e:
        raise OperationError(f"Failed to save recipe {recipe_path}: {e}") from e

    return recipe_path


def run_recipe(
    editor: ImageEditor,
    recipe: Dict[str, Any],
    registry: Optional[OperationRegistry] = None,
) -> ImageEditor:
    """
    Apply every step of a recipe to ``editor`` in order.

    Execution stops at the first failing step and its error propagates;
    steps that already ran stay applied.

    Returns:
        The editor, after all steps
    """
    if registry is None:
        registry = get_default_registry()

    validate_recipe(recipe, registry)
    name = recipe.get(FIELD_NAME, "<unnamed>")

    for index, step in enumerate(recipe[FIELD_STEPS]):
        logger.debug(f"Recipe '{name}' step {index}: {step[FIELD_OP]}")
        registry.apply(editor, step)

    logger.info(f"Recipe '{name}' applied {len(recipe[FIELD_STEPS])} step(s)")
    return editor
