"""Asset categories, folders and file extensions."""

from __future__ import annotations

from enum import Enum


class AssetType(str, Enum):
    """Asset categories, each stored in its own folder under the game directory."""

    BACKGROUND = "background"
    FIGURE = "figure"
    BGM = "bgm"
    VOCAL = "vocal"
    VIDEO = "video"
    SCENE = "scene"
    TEX = "tex"
    ANIMATION = "animation"


IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".webp", ".gif")
AUDIO_EXTENSIONS: tuple[str, ...] = (".mp3", ".ogg", ".wav", ".m4a")
VIDEO_EXTENSIONS: tuple[str, ...] = (".mp4", ".webm")
SCENE_EXTENSION = ".txt"

ASSET_FOLDERS: dict[AssetType, str] = {
    asset_type: asset_type.value for asset_type in AssetType
}

ASSET_EXTENSIONS: dict[AssetType, tuple[str, ...]] = {
    AssetType.BACKGROUND: IMAGE_EXTENSIONS,
    AssetType.FIGURE: IMAGE_EXTENSIONS,
    AssetType.BGM: AUDIO_EXTENSIONS,
    AssetType.VOCAL: AUDIO_EXTENSIONS,
    AssetType.VIDEO: VIDEO_EXTENSIONS,
    AssetType.SCENE: (SCENE_EXTENSION,),
    AssetType.TEX: IMAGE_EXTENSIONS,
    AssetType.ANIMATION: IMAGE_EXTENSIONS + VIDEO_EXTENSIONS,
}

COMMAND_ASSET_TYPES: dict[str, AssetType] = {
    "changeBg": AssetType.BACKGROUND,
    "unlockCg": AssetType.BACKGROUND,
    "changeFigure": AssetType.FIGURE,
    "miniAvatar": AssetType.FIGURE,
    "bgm": AssetType.BGM,
    "unlockBgm": AssetType.BGM,
    "playVideo": AssetType.VIDEO,
    "changeScene": AssetType.SCENE,
    "callScene": AssetType.SCENE,
}
