"""Scene file resolution and creation."""

from galscript.scenes.models import SceneCreationOptions, ScenePathCandidate
from galscript.scenes.resolver import ScenePathResolver, clean_scene_input
from galscript.scenes.template import generate_scene_template

__all__ = [
    "SceneCreationOptions",
    "ScenePathCandidate",
    "ScenePathResolver",
    "clean_scene_input",
    "generate_scene_template",
]
