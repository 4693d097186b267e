import pygame

from vermada.atlas import AtlasImage
from vermada.draw import Palette, Renderer
from vermada.text import Font

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


def make_renderer(size=(100, 50)):
    surface = pygame.Surface(size)
    surface.fill(BLACK)
    return Renderer(surface)


def test_palette_colours_from_source():
    palette = Palette()
    assert palette.orange == (255, 128, 0, 255)
    assert palette.dark_grey == (128, 128, 128, 255)


def test_prepare_scene_fills_sky_colour():
    renderer = make_renderer()
    renderer.prepare_scene()
    assert rgb(renderer.surface, (50, 25)) == (93, 148, 251)


def test_present_scene_copies_to_window():
    renderer = make_renderer()
    renderer.prepare_scene()
    renderer.window = pygame.Surface((200, 100))
    renderer.present_scene()
    assert rgb(renderer.window, (150, 80)) == (93, 148, 251)


def test_present_scene_draws_debug_text():
    renderer = make_renderer()
    font_surface = pygame.Surface((10, 10), pygame.SRCALPHA)
    font_surface.fill((255, 255, 255, 255))
    renderer.font = Font({"a": (0, 0, 10, 10)}, font_surface)
    renderer.present_scene("a")
    assert rgb(renderer.surface, (90, 25)) == WHITE
    assert rgb(renderer.surface, (50, 5)) == BLACK


def test_blit_centers_image():
    renderer = make_renderer()
    image = pygame.Surface((4, 2))
    image.fill(RED)
    renderer.blit(image, 10, 10, center=True)
    assert rgb(renderer.surface, (8, 9)) == RED
    assert rgb(renderer.surface, (7, 9)) == BLACK


def test_blit_flips_horizontally():
    renderer = make_renderer()
    image = pygame.Surface((2, 1))
    image.set_at((0, 0), RED)
    image.set_at((1, 0), GREEN)
    renderer.blit(image, 0, 0, flip=True)
    assert rgb(renderer.surface, (0, 0)) == GREEN
    assert rgb(renderer.surface, (1, 0)) == RED


def test_blit_atlas_image_uses_region():
    renderer = make_renderer()
    texture = pygame.Surface((20, 10))
    texture.fill(RED)
    texture.fill(GREEN, pygame.Rect(10, 0, 10, 10))
    renderer.blit_atlas_image(AtlasImage("x", (10, 0, 10, 10), texture), 0, 0)
    assert rgb(renderer.surface, (5, 5)) == GREEN
    assert rgb(renderer.surface, (15, 5)) == BLACK


def test_blit_atlas_image_tint():
    renderer = make_renderer()
    texture = pygame.Surface((10, 10))
    texture.fill(WHITE)
    renderer.blit_atlas_image(AtlasImage("x", (0, 0, 10, 10), texture), 0, 0, tint=(255, 0, 0))
    assert rgb(renderer.surface, (5, 5)) == RED
    assert rgb(texture, (5, 5)) == WHITE


def test_draw_rect_opaque():
    renderer = make_renderer()
    renderer.draw_rect(10, 10, 5, 5, 0, 255, 0, 255)
    assert rgb(renderer.surface, (12, 12)) == GREEN
    assert rgb(renderer.surface, (15, 15)) == BLACK


def test_draw_rect_blends_translucent():
    renderer = make_renderer()
    renderer.draw_rect(0, 0, 10, 10, 255, 255, 255, 128)
    red = rgb(renderer.surface, (5, 5))[0]
    assert 120 <= red <= 135


def test_draw_outline_rect_leaves_interior():
    renderer = make_renderer()
    renderer.draw_outline_rect(10, 10, 10, 10, 255, 0, 0, 255)
    assert rgb(renderer.surface, (10, 10)) == RED
    assert rgb(renderer.surface, (15, 15)) == BLACK