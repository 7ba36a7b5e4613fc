"""Command catalog for the visual-novel scripting language.

The catalog is static data. It is the single source of truth for which
leading tokens are command names and for the parameter specs used by the
diagnostics engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Literal

from galscript.catalog.assets import COMMAND_ASSET_TYPES, AssetType

ParameterType = Literal["string", "number", "boolean", "file"]

# Parameters whose value is the text after the command colon
PRIMARY_PARAMETER_NAMES = frozenset({"filename", "name", "expression"})


@dataclass(frozen=True)
class ParameterInfo:
    """A single parameter accepted by a command."""

    name: str
    description: str
    required: bool = False
    type: ParameterType = "string"
    allowed_values: tuple[str, ...] | None = None


@dataclass(frozen=True)
class CommandInfo:
    """Documentation entry for one command."""

    name: str
    description: str = ""
    usage: str = ""
    parameters: tuple[ParameterInfo, ...] = ()
    examples: tuple[str, ...] = ()


COMMAND_NAMES: tuple[str, ...] = (
    "say",
    "changeBg",
    "changeFigure",
    "bgm",
    "playVideo",
    "pixiPerform",
    "pixiInit",
    "intro",
    "miniAvatar",
    "changeScene",
    "choose",
    "end",
    "setComplexAnimation",
    "setFilter",
    "label",
    "jumpLabel",
    "chooseLabel",
    "setVar",
    "if",
    "callScene",
    "showVars",
    "unlockCg",
    "unlockBgm",
    "filmMode",
    "setTextbox",
    "setAnimation",
    "playEffect",
    "setTempAnimation",
    "setTransform",
    "setTransition",
    "getUserInput",
    "applyStyle",
    "wait",
)

_NEXT = ParameterInfo("next", "Continue with the next line immediately", type="boolean")

COMMAND_DOCS: dict[str, CommandInfo] = {
    "say": CommandInfo(
        name="say",
        description="Show a line of dialogue",
        usage="speaker:text -v=voice file",
        parameters=(
            ParameterInfo("speaker", "Name of the speaking character"),
            ParameterInfo("v", "Voice file", type="file"),
        ),
        examples=(
            "Alice:This is a line of dialogue",
            "Alice:This is a line of dialogue -v=voice.ogg",
            ":Narration without a speaker",
        ),
    ),
    "changeBg": CommandInfo(
        name="changeBg",
        description="Change the background image",
        usage="changeBg:image file -next",
        parameters=(
            ParameterInfo("filename", "Background image file", True, "file"),
            _NEXT,
        ),
        examples=("changeBg:bg1.jpg", "changeBg:bg1.jpg -next"),
    ),
    "changeFigure": CommandInfo(
        name="changeFigure",
        description="Change a character figure",
        usage="changeFigure:figure file -left -next",
        parameters=(
            ParameterInfo("filename", "Figure file (none clears it)", True, "file"),
            ParameterInfo("left", "Show on the left", type="boolean"),
            ParameterInfo("right", "Show on the right", type="boolean"),
            _NEXT,
        ),
        examples=(
            "changeFigure:character1.png",
            "changeFigure:character1.png -left -next",
            "changeFigure:none -left",
        ),
    ),
    "bgm": CommandInfo(
        name="bgm",
        description="Play background music",
        usage="bgm:music file",
        parameters=(ParameterInfo("filename", "Music file", True, "file"),),
        examples=("bgm:music.mp3", "bgm:none; stop playback"),
    ),
    "label": CommandInfo(
        name="label",
        description="Define a jump target",
        usage="label:label name",
        parameters=(ParameterInfo("name", "Label name", True),),
        examples=("label:start", "label:ending1"),
    ),
    "jumpLabel": CommandInfo(
        name="jumpLabel",
        description="Jump to a label in the current scene",
        usage="jumpLabel:label name",
        parameters=(ParameterInfo("name", "Target label name", True),),
        examples=("jumpLabel:start", "jumpLabel:ending1"),
    ),
    "choose": CommandInfo(
        name="choose",
        description="Show a branch choice",
        usage="choose:option 1 text:label 1|option 2 text:label 2",
        parameters=(ParameterInfo("options", "Options separated by |", True),),
        examples=(
            "choose:Option A:labelA|Option B:labelB",
            "choose:Yes:agree|No:refuse",
        ),
    ),
    "setVar": CommandInfo(
        name="setVar",
        description="Assign a variable",
        usage="setVar:name=value",
        parameters=(ParameterInfo("expression", "Assignment expression", True),),
        examples=("setVar:score=100", "setVar:name=Player", "setVar:count=count+1"),
    ),
    "callScene": CommandInfo(
        name="callScene",
        description="Call a sub-scene and return afterwards",
        usage="callScene:scene file -when=condition",
        parameters=(
            ParameterInfo("filename", "Scene file", True, "file"),
            ParameterInfo("when", "Condition expression"),
        ),
        examples=("callScene:subscene.txt", "callScene:event.txt -when=score>50"),
    ),
    "changeScene": CommandInfo(
        name="changeScene",
        description="Switch to another scene",
        usage="changeScene:scene file",
        parameters=(ParameterInfo("filename", "Scene file", True, "file"),),
        examples=("changeScene:chapter2.txt",),
    ),
    "if": CommandInfo(
        name="if",
        description="Run a command only when a condition holds",
        usage="command:args -when=condition",
        parameters=(ParameterInfo("when", "Condition expression", True),),
        examples=(
            "jumpLabel:goodEnd -when=score>80",
            "changeFigure:happy.png -when=affection>50",
        ),
    ),
    "playVideo": CommandInfo(
        name="playVideo",
        description="Play a video",
        usage="playVideo:video file",
        parameters=(ParameterInfo("filename", "Video file", True, "file"),),
        examples=("playVideo:opening.mp4",),
    ),
    "setAnimation": CommandInfo(
        name="setAnimation",
        description="Apply an animation",
        usage="setAnimation:animation name -target=target",
        parameters=(
            ParameterInfo("animation", "Animation name", True),
            ParameterInfo(
                "target",
                "Animation target",
                allowed_values=("fig-left", "fig-center", "fig-right"),
            ),
        ),
        examples=(
            "setAnimation:enter-from-left -target=fig-left",
            "setAnimation:shake -target=fig-center",
        ),
    ),
    "miniAvatar": CommandInfo(
        name="miniAvatar",
        description="Show a small avatar next to the text box",
        usage="miniAvatar:avatar file",
        parameters=(
            ParameterInfo("filename", "Avatar file (none clears it)", True, "file"),
        ),
        examples=("miniAvatar:avatar.png", "miniAvatar:none"),
    ),
    "unlockCg": CommandInfo(
        name="unlockCg",
        description="Unlock a CG in the gallery",
        usage="unlockCg:CG file -name=title",
        parameters=(
            ParameterInfo("filename", "CG file", True, "file"),
            ParameterInfo("name", "Display title"),
        ),
        examples=("unlockCg:cg1.jpg -name=First meeting",),
    ),
    "unlockBgm": CommandInfo(
        name="unlockBgm",
        description="Unlock a music track in the gallery",
        usage="unlockBgm:music file -name=title",
        parameters=(
            ParameterInfo("filename", "Music file", True, "file"),
            ParameterInfo("name", "Display title"),
        ),
        examples=("unlockBgm:music.mp3 -name=Main theme",),
    ),
}


@dataclass
class CommandCatalog:
    """Lookup table from command name to its documentation entry.

    Names without a documentation entry are still known commands; they get a
    bare entry with no parameters.
    """

    docs: dict[str, CommandInfo] = field(default_factory=dict)

    @classmethod
    def from_names(
        cls, names: Iterable[str], docs: dict[str, CommandInfo] | None = None
    ) -> CommandCatalog:
        """Build a catalog covering ``names`` plus every documented command."""
        docs = docs or {}
        entries = {name: docs.get(name, CommandInfo(name=name)) for name in names}
        for name, info in docs.items():
            entries.setdefault(name, info)
        return cls(docs=entries)

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self.docs)

    def __contains__(self, name: object) -> bool:
        return name in self.docs

    def __iter__(self) -> Iterator[CommandInfo]:
        return iter(self.docs.values())

    def __len__(self) -> int:
        return len(self.docs)

    def get(self, name: str) -> CommandInfo | None:
        return self.docs.get(name)

    def required_primary_parameters(self, name: str) -> list[str]:
        """Required parameters that are supplied through the command content."""
        info = self.docs.get(name)
        if info is None:
            return []
        return [
            param.name
            for param in info.parameters
            if param.required and param.name in PRIMARY_PARAMETER_NAMES
        ]

    def asset_type_for(self, name: str) -> AssetType | None:
        """Asset category a command's content refers to, if any."""
        return COMMAND_ASSET_TYPES.get(name)


_default_catalog: CommandCatalog | None = None


def default_catalog() -> CommandCatalog:
    """The built-in catalog of engine commands."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = CommandCatalog.from_names(COMMAND_NAMES, COMMAND_DOCS)
    return _default_catalog
