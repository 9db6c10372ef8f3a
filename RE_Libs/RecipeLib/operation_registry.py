"""
Operation Registry for edit recipes.

This module maps recipe step names (``"crop"``, ``"blur"``, ...) to executor
functions that apply the step to an ImageEditor.

Classes:
    OperationRegistry: Registry for step executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_operations: Register the built-in editor operations
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import logging

from RE_Libs.constants import (
    FIELD_OP,
    OP_CROP,
    OP_ROTATE,
    OP_BRIGHTNESS,
    OP_CONTRAST,
    OP_BLUR,
    OP_GRAYSCALE,
    OP_INVERT,
    OP_OVERLAY,
    OP_SAVE,
)
from RE_Libs.ImageEditingLib.errors import OperationError
from RE_Libs.ImageEditingLib.image_editor import ImageEditor
from RE_Libs.ImageEditingLib.image_io import SaveOptions

logger = logging.getLogger(__name__)

# Type alias for executor function
StepExecutor = Callable[[ImageEditor, Dict[str, Any]], ImageEditor]


class OperationRegistry:
    """
    Registry for recipe step executors.

    Example:
        >>> registry = OperationRegistry()
        >>> registry.register("flip", flip_executor, tags=["geometry"])
        >>> registry.apply(editor, {"op": "flip"})
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._executors: Dict[str, StepExecutor] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        name: str,
        executor: StepExecutor,
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a step executor.

        Args:
            name: Operation name used in recipe steps (e.g., "crop")
            executor: Callable accepting (editor, step_dict)
            description: Human-readable description of the operation
            tags: Optional list of tags for categorization

        Raises:
            ValueError: If name is empty or executor is not callable
            RuntimeError: If name is already registered
        """
        name = str(name).strip().lower()

        if not name:
            raise ValueError("operation name cannot be empty")

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if name in self._executors:
            raise RuntimeError(
                f"Operation '{name}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._executors[name] = executor
        self._metadata[name] = {
            "description": str(description),
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered executor for operation: {name}")

    def unregister(self, name: str) -> bool:
        """
        Unregister a step executor.

        Returns:
            True if unregistered, False if the name was not registered
        """
        name = str(name).strip().lower()

        if name in self._executors:
            del self._executors[name]
            del self._metadata[name]
            logger.debug(f"Unregistered executor for operation: {name}")
            return True

        return False

    def get_executor(self, name: str) -> StepExecutor:
        """
        Get the executor for an operation.

        Raises:
            KeyError: If the operation is not registered
        """
        name = str(name).strip().lower()

        if name not in self._executors:
            available = ", ".join(self.list_operations())
            raise KeyError(
                f"No executor registered for operation '{name}'. "
                f"Available operations: {available}"
            )

        return self._executors[name]

    def has_operation(self, name: str) -> bool:
        return str(name).strip().lower() in self._executors

    def apply(self, editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
        """
        Apply one recipe step to an editor.

        Args:
            editor: Editor to modify
            step: Step dictionary; its "op" key selects the executor

        Returns:
            The editor, after the step

        Raises:
            KeyError: If the step's operation is not registered
            OperationError: If the step has no "op" or bad parameters
        """
        if FIELD_OP not in step:
            raise OperationError(f"Recipe step has no '{FIELD_OP}' field: {step}")

        executor = self.get_executor(step[FIELD_OP])
        return executor(editor, step)

    def list_operations(self) -> List[str]:
        """Sorted list of registered operation names."""
        return sorted(self._executors.keys())

    def get_metadata(self, name: str) -> Dict[str, Any]:
        """
        Get metadata (description, tags) for an operation.

        Raises:
            KeyError: If the operation is not registered
        """
        name = str(name).strip().lower()

        if name not in self._metadata:
            raise KeyError(f"No metadata for operation: {name}")

        return dict(self._metadata[name])

    def filter_by_tag(self, tag: str) -> List[str]:
        """Sorted list of operation names carrying ``tag``."""
        tag = str(tag).strip().lower()
        return sorted([
            name
            for name, meta in self._metadata.items()
            if tag in [t.lower() for t in meta.get("tags", [])]
        ])

    def clear(self) -> None:
        """Clear all registered executors. Use with caution."""
        self._executors.clear()
        self._metadata.clear()
        logger.warning("Operation registry cleared")


# ----------------------------------------------------------------------------
# Built-in step executors
# ----------------------------------------------------------------------------

def _param(step: Dict[str, Any], key: str, convert: Callable[[Any], Any]) -> Any:
    """Fetch a required step parameter and convert it."""
    if key not in step:
        raise OperationError(f"'{step.get(FIELD_OP)}' step requires '{key}'")
    try:
        return convert(step[key])
    except (TypeError, ValueError) as e:
        raise OperationError(
            f"'{step.get(FIELD_OP)}' step has invalid '{key}': {step[key]!r}"
        ) from e


def execute_crop(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.crop(
        _param(step, "x", int),
        _param(step, "y", int),
        _param(step, "width", int),
        _param(step, "height", int),
    )


def execute_rotate(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.rotate(_param(step, "angle", float))


def execute_brightness(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.adjust_brightness(_param(step, "factor", float))


def execute_contrast(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.adjust_contrast(_param(step, "factor", float))


def execute_blur(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.blur(_param(step, "sigma", float))


def execute_grayscale(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.grayscale()


def execute_invert(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    return editor.invert()


def execute_overlay(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    """
    Overlay another image file.

    Step keys: image_path, x, y, and optionally "crop" ({x, y, width, height})
    applied to the overlay before compositing.

    Raises:
        LoadError: If the overlay image cannot be loaded
    """
    overlay = ImageEditor.load(_param(step, "image_path", Path))

    crop = step.get("crop")
    if crop is not None:
        if not isinstance(crop, dict):
            raise OperationError(f"'overlay' step 'crop' must be an object, got {crop!r}")
        execute_crop(overlay, {FIELD_OP: OP_CROP, **crop})

    return editor.overlay_image(overlay.get_image(), _param(step, "x", int), _param(step, "y", int))


def execute_save(editor: ImageEditor, step: Dict[str, Any]) -> ImageEditor:
    """Save the current image; extra step keys are read as SaveOptions."""
    path = _param(step, "path", Path)
    editor.save(path, SaveOptions.from_dict(step))
    return editor


# Global singleton registry
_default_registry: Optional[OperationRegistry] = None


def get_default_registry() -> OperationRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in operations.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = OperationRegistry()
        register_default_operations(_default_registry)

    return _default_registry


def register_default_operations(registry: OperationRegistry) -> None:
    """
    Register one executor per ImageEditor operation.

    Args:
        registry: The registry to register executors with
    """
    registry.register(
        OP_CROP, execute_crop,
        description="Keep the region x, y, width, height",
        tags=["geometry"],
    )
    registry.register(
        OP_ROTATE, execute_rotate,
        description="Rotate clockwise about the center by angle degrees",
        tags=["geometry"],
    )
    registry.register(
        OP_BRIGHTNESS, execute_brightness,
        description="Multiply RGB by factor",
        tags=["color", "adjustment"],
    )
    registry.register(
        OP_CONTRAST, execute_contrast,
        description="Scale RGB around mid-gray by factor",
        tags=["color", "adjustment"],
    )
    registry.register(
        OP_BLUR, execute_blur,
        description="Gaussian blur with standard deviation sigma",
        tags=["filter"],
    )
    registry.register(
        OP_GRAYSCALE, execute_grayscale,
        description="Convert RGB to perceptual luma, keeping alpha",
        tags=["color"],
    )
    registry.register(
        OP_INVERT, execute_invert,
        description="Invert RGB, keeping alpha",
        tags=["color"],
    )
    registry.register(
        OP_OVERLAY, execute_overlay,
        description="Composite another image file at x, y",
        tags=["composition"],
    )
    registry.register(
        OP_SAVE, execute_save,
        description="Save the current image to path",
        tags=["output"],
    )

    logger.info("Registered default recipe operations")
