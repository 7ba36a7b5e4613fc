"""Template for newly created scene files."""

from __future__ import annotations

from datetime import date
from pathlib import PurePath

from galscript.catalog.assets import SCENE_EXTENSION

SCENE_TEMPLATE = """\
; File: {file_name}
; Description: {scene_name} scene
; Created: {created}
; Note: Describe this scene here

label:start;

:Welcome to the {scene_name} scene!;

end;
"""


def scene_name_from_file(file_name: str) -> str:
    """File name without directories and without the scene extension."""
    name = PurePath(file_name).name
    if name.endswith(SCENE_EXTENSION):
        name = name[: -len(SCENE_EXTENSION)]
    return name


def generate_scene_template(file_name: str, created: date | None = None) -> str:
    """Render the starter content for a new scene file.

    Args:
        file_name: Scene file name, e.g. ``intro.txt``
        created: Creation date written to the header; defaults to today
    """
    created = created or date.today()
    return SCENE_TEMPLATE.format(
        file_name=file_name,
        scene_name=scene_name_from_file(file_name),
        created=created.isoformat(),
    )
