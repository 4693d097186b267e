import json

import pytest

from vermada.atlas import Atlas, AtlasImage, MissingImageError, load_atlas

ATLAS_JSON = json.dumps(
    [
        {"filename": "gfx/tilesets/brick.png", "x": 0, "y": 0, "w": 64, "h": 64},
        {"filename": "gfx/particles/basic.png", "x": 64, "y": 0, "w": 16, "h": 16},
        {"filename": "gfx/tilesets/brick.png", "x": 128, "y": 128, "w": 8, "h": 8},
    ]
)


def test_load_atlas_reads_rectangles():
    atlas = load_atlas(ATLAS_JSON, texture="tex")
    image = atlas.get("gfx/particles/basic.png")
    assert image.rect == (64, 0, 16, 16)
    assert image.texture == "tex"
    assert (image.w, image.h) == (16, 16)


def test_first_entry_for_a_name_wins():
    atlas = load_atlas(ATLAS_JSON)
    assert atlas.get("gfx/tilesets/brick.png").rect == (0, 0, 64, 64)


def test_missing_image_returns_none_when_optional():
    atlas = load_atlas(ATLAS_JSON)
    assert atlas.get("gfx/none.png") is None


def test_missing_required_image_raises():
    atlas = load_atlas(ATLAS_JSON)
    with pytest.raises(MissingImageError):
        atlas.get("gfx/none.png", required=True)


def test_object_root_is_accepted():
    text = json.dumps({"a": {"filename": "x.png", "x": 1, "y": 2, "w": 3, "h": 4}})
    assert load_atlas(text).get("x.png", True).rect == (1, 2, 3, 4)


def test_atlas_from_images():
    image = AtlasImage("a.png", (1, 1, 2, 2))
    assert Atlas([image]).get("a.png") is image