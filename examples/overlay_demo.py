"""
Overlay Demo

Loads a base image and an overlay image, crops the overlay, composites it
onto the base and saves the result. When the input files are missing the
demo generates them first so it can run from a clean checkout.
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image
from RE_Libs.ImageEditingLib import ImageEditor, ImageEditError
from RE_Libs.RecipeLib import create_recipe, run_recipe

DEMO_DIR = Path(__file__).parent
BASE_IMAGE = DEMO_DIR / "base_image.png"
OVERLAY_IMAGE = DEMO_DIR / "overlay_image.png"
OUTPUT_IMAGE = DEMO_DIR / "output.png"


def ensure_inputs():
    """Write simple input images if they are not already present."""
    if not BASE_IMAGE.exists():
        Image.new("RGBA", (800, 800), (40, 90, 160, 255)).save(BASE_IMAGE)
        print(f"Generated {BASE_IMAGE}")

    if not OVERLAY_IMAGE.exists():
        overlay = Image.new("RGBA", (700, 700), (0, 0, 0, 0))
        overlay.paste((250, 200, 30, 160), (100, 100, 600, 600))
        overlay.save(OVERLAY_IMAGE)
        print(f"Generated {OVERLAY_IMAGE}")


def example_fluent_chain():
    """Example: the same edit written as chained editor calls."""
    print("=" * 60)
    print("Example 1: Fluent chain")
    print("=" * 60)

    processor = ImageEditor.load(BASE_IMAGE)
    overlay = ImageEditor.load(OVERLAY_IMAGE).crop(100, 100, 500, 500)

    processor.overlay_image(overlay.get_image(), 100, 100)
    saved = processor.save(OUTPUT_IMAGE)
    print(f"✓ Saved {processor} to {saved}")
    print()


def example_recipe():
    """Example: the same edit as a recipe, plus a contrast boost."""
    print("=" * 60)
    print("Example 2: Recipe")
    print("=" * 60)

    recipe = create_recipe("overlay-demo", [
        {"op": "contrast", "factor": 1.5},
        {"op": "overlay", "image_path": str(OVERLAY_IMAGE), "x": 100, "y": 100,
         "crop": {"x": 100, "y": 100, "width": 500, "height": 500}},
        {"op": "save", "path": str(DEMO_DIR / "output_recipe.png")},
    ])

    editor = run_recipe(ImageEditor.load(BASE_IMAGE), recipe)
    print(f"✓ Recipe applied: {editor}")
    print()


def example_error_handling():
    """Example: an out-of-bounds crop fails and leaves the image untouched."""
    print("=" * 60)
    print("Example 3: Error handling")
    print("=" * 60)

    editor = ImageEditor.load(BASE_IMAGE)
    try:
        editor.crop(700, 700, 500, 500)
        print("❌ FAILED: out-of-bounds crop was accepted!")
    except ImageEditError as e:
        print("✓ Crop rejected:")
        print(f"  Error: {e}")
        print(f"  Image still {editor.width}x{editor.height}")
    print()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    ensure_inputs()
    example_fluent_chain()
    example_recipe()
    example_error_handling()


if __name__ == "__main__":
    main()
