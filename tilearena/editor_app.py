"""The map editor window."""

from __future__ import annotations

import argparse
import functools
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pygame

from tilearena.assets import EDITOR_TILE_TEXTURES, WEAPON_TEXTURES, TextureSet, load_editor_textures
from tilearena.camera import Camera2D
from tilearena.editor import AMOUNT_OF_TILE_TEXTURES, Editor, Mode, pointer_over_ui, snap_to_grid
from tilearena.geometry import CELL_SIZE, COLUMN_COUNT, ROW_COUNT, Rect, Vec2
from tilearena.mapfile import MAX_TILES, MapFormatError, Tile, empty_tiles, load_map, save_map

DEFAULT_MAP = Path("../RefactorGame/assets/map1.map")
DEFAULT_ASSETS = Path("../RefactorGame/assets")
TARGET_FPS = 60

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (230, 41, 55)
BLUE = (0, 121, 241)
GREEN = (0, 228, 48)

_PALETTE_HEIGHT = 200
_WEAPON_NAMES = ("pistol", "ar")
_MODE_KEYS = {
    pygame.K_1: Mode.PAINT,
    pygame.K_2: Mode.SOLID,
    pygame.K_3: Mode.PLAYER_SPAWN,
    pygame.K_4: Mode.WEAPON_BUY,
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Read the editor's command-line options."""
    parser = argparse.ArgumentParser(prog="tilearena-editor", description="Edit a tile map.")
    parser.add_argument("--map", type=Path, default=DEFAULT_MAP, help="map file to edit")
    parser.add_argument("--assets", type=Path, default=DEFAULT_ASSETS, help="asset directory")
    parser.add_argument("--windowed", action="store_true", help="do not go full screen")
    parser.add_argument("--width", type=int, default=1280, help="window width")
    parser.add_argument("--height", type=int, default=720, help="window height")
    return parser.parse_args(argv)


def _import_map(path: Path) -> list[Tile]:
    try:
        tiles = load_map(path, MAX_TILES)
    except OSError:
        print("Failed to open map file", file=sys.stderr)
        return empty_tiles()
    except MapFormatError as error:
        print(f"Failed to read file: {error}", file=sys.stderr)
        return empty_tiles()
    print("Imported Map successfully")
    return tiles + empty_tiles(MAX_TILES - len(tiles))


def _image(textures: TextureSet, name: str) -> Any:
    try:
        return textures.get(name)
    except (OSError, pygame.error):
        print(f"Failed to load texture {name!r}", file=sys.stderr)
        return pygame.Surface((CELL_SIZE, CELL_SIZE), pygame.SRCALPHA)


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.Font(None, max(1, size))


def _text(screen: pygame.Surface, text: str, x: float, y: float, size: int, colour) -> None:
    screen.blit(_font(size).render(text, True, colour), (int(x), int(y)))


def _pg(rect: Rect) -> pygame.Rect:
    return pygame.Rect(int(rect.x), int(rect.y), int(rect.width), int(rect.height))


class _Scaler:
    """Keeps scaled copies of textures for the current zoom."""

    def __init__(self) -> None:
        self._cache: dict[tuple[int, int, int], pygame.Surface] = {}

    def __call__(self, image: pygame.Surface, size: int) -> pygame.Surface:
        key = (id(image), size, size)
        if key not in self._cache:
            if len(self._cache) > 256:
                self._cache.clear()
            self._cache[key] = pygame.transform.scale(image, (size, size))
        return self._cache[key]


def _cell_on_screen(camera: Camera2D, pos: Vec2) -> Rect:
    corner = camera.world_to_screen(pos)
    side = CELL_SIZE * camera.zoom
    return Rect(corner.x, corner.y, side, side)


def _draw_grid(screen: pygame.Surface, camera: Camera2D) -> None:
    extent = (ROW_COUNT - 1) * CELL_SIZE
    for row in range(ROW_COUNT):
        start = camera.world_to_screen(Vec2(0, row * CELL_SIZE))
        end = camera.world_to_screen(Vec2(extent, row * CELL_SIZE))
        pygame.draw.line(screen, BLACK, (start.x, start.y), (end.x, end.y))
    for column in range(COLUMN_COUNT):
        start = camera.world_to_screen(Vec2(column * CELL_SIZE, 0))
        end = camera.world_to_screen(Vec2(column * CELL_SIZE, extent))
        pygame.draw.line(screen, BLACK, (start.x, start.y), (end.x, end.y))


def _draw_tiles(
    screen: pygame.Surface,
    camera: Camera2D,
    editor: Editor,
    tile_images: Sequence[pygame.Surface],
    weapon_images: Sequence[pygame.Surface],
    scale: _Scaler,
) -> None:
    side = max(1, round(CELL_SIZE * camera.zoom))
    for tile in editor.tiles:
        if not tile.active:
            continue
        cell = _cell_on_screen(camera, tile.pos)
        corner = (int(cell.x), int(cell.y))
        if 0 <= tile.id < len(tile_images):
            screen.blit(scale(tile_images[tile.id], side), corner)
        if tile.solid:
            pygame.draw.rect(screen, RED, _pg(cell), width=1)
        if tile.player_spawn:
            screen.blit(scale(tile_images[-1], side), corner)
        if tile.weapon_buy and 0 <= tile.weapon_index < len(weapon_images):
            image = weapon_images[tile.weapon_index]
            frame = pygame.Rect(0, 0, CELL_SIZE, CELL_SIZE).clip(image.get_rect())
            screen.blit(scale(image.subsurface(frame), side), corner)
        _text(
            screen,
            str(tile.id),
            cell.x + cell.width / 2,
            cell.y + cell.height / 2,
            round(5 * camera.zoom),
            BLUE,
        )


def _draw_palette(
    screen: pygame.Surface,
    tile_images: Sequence[pygame.Surface],
    editor: Editor,
    clicked: bool,
    mouse: Vec2,
) -> None:
    width, height = screen.get_size()
    top = height - _PALETTE_HEIGHT
    pygame.draw.rect(screen, BLACK, pygame.Rect(0, top, width, height))
    click = Rect(snap_to_grid(mouse.x), snap_to_grid(mouse.y), CELL_SIZE, CELL_SIZE)
    for index, image in enumerate(tile_images[: AMOUNT_OF_TILE_TEXTURES - 1]):
        slot = Rect(index * CELL_SIZE, top, CELL_SIZE, CELL_SIZE)
        frame = pygame.Rect(0, 0, CELL_SIZE, CELL_SIZE).clip(image.get_rect())
        screen.blit(image, (int(slot.x), int(slot.y)), area=frame)
        if clicked and click.collides(slot):
            editor.select_texture(index)


def _draw_weapon_bar(screen: pygame.Surface, editor: Editor, clicked: bool, mouse: Vec2) -> None:
    if editor.mode is not Mode.WEAPON_BUY:
        return
    width, height = screen.get_size()
    pygame.draw.rect(screen, BLUE, pygame.Rect(width - 250, height - 800, 250, 600))
    _text(screen, "Weapons", width - 200, height - 775, 30, BLACK)
    start_y = height - 700
    buttons = []
    for index, name in enumerate(_WEAPON_NAMES):
        y = start_y + index * 50
        button = Rect(width - 100, y - 5, 80, 30)
        buttons.append(button)
        _text(screen, name, width - 240, y, 20, BLACK)
        pygame.draw.rect(screen, GREEN if editor.texture_id == index else BLACK, _pg(button))
        _text(screen, "Select", width - 85, y, 20, WHITE)
    if clicked:
        click = Rect(mouse.x, mouse.y, 1, 1)
        for index, button in enumerate(buttons):
            if button.collides(click):
                editor.select_texture(index)


def _draw_mode(screen: pygame.Surface, editor: Editor) -> None:
    width = screen.get_width()
    x = width - 150 if editor.mode in (Mode.PAINT, Mode.SOLID) else width - 300
    _text(screen, editor.mode.label, x, 30, 40, BLUE)


def _export_clicked(screen: pygame.Surface, clicked: bool, mouse: Vec2) -> bool:
    button = Rect(10, 10, 80, 40)
    pygame.draw.rect(screen, BLACK, _pg(button))
    _text(screen, "Export", button.x + 5, button.y + 7, 20, BLUE)
    return clicked and button.collides(Rect(mouse.x, mouse.y, 30, 30))


def _run(
    screen: pygame.Surface,
    editor: Editor,
    tile_images: Sequence[pygame.Surface],
    weapon_images: Sequence[pygame.Surface],
    map_path: Path,
) -> None:
    clock = pygame.time.Clock()
    camera = Camera2D()
    scale = _Scaler()
    over_ui = False
    pygame.mouse.get_rel()
    while True:
        wheel = 0.0
        clicked = False
        mode_key: Mode | None = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return
                if mode_key is None and event.key in _MODE_KEYS:
                    mode_key = _MODE_KEYS[event.key]
            elif event.type == pygame.MOUSEWHEEL:
                wheel += event.y
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                clicked = True

        mouse = Vec2(*pygame.mouse.get_pos())
        rel = pygame.mouse.get_rel()
        left, _, right = pygame.mouse.get_pressed()
        shift = pygame.key.get_pressed()[pygame.K_LSHIFT]

        camera.zoom_at(mouse, wheel)
        if left and shift:
            camera.drag(Vec2(*rel))

        screen.fill(WHITE)
        _draw_grid(screen, camera)
        world = camera.screen_to_world(mouse)
        if left and not shift:
            if editor.mode is Mode.PLAYER_SPAWN and not over_ui:
                index = editor.tile_at(snap_to_grid(world.x), snap_to_grid(world.y))
                if index is not None and editor.tiles[index].solid:
                    cell = _cell_on_screen(camera, editor.tiles[index].pos)
                    pygame.draw.rect(screen, RED, _pg(cell))
            editor.place(world, over_ui)
        if right:
            editor.delete(world)
        _draw_tiles(screen, camera, editor, tile_images, weapon_images, scale)
        if mode_key is not None:
            editor.set_mode(mode_key)

        width, height = screen.get_size()
        _draw_palette(screen, tile_images, editor, clicked, mouse)
        _draw_weapon_bar(screen, editor, clicked, mouse)
        _draw_mode(screen, editor)
        over_ui = pointer_over_ui(mouse, width, height)
        if _export_clicked(screen, clicked, mouse):
            try:
                save_map(map_path, editor.tiles)
            except OSError:
                print("Failed to open map file", file=sys.stderr)
            else:
                return

        pygame.display.flip()
        clock.tick(TARGET_FPS)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the editor on a map file and run until it is closed or exported."""
    args = parse_args(argv)
    editor = Editor(_import_map(args.map))
    pygame.init()
    try:
        if args.windowed:
            screen = pygame.display.set_mode((args.width, args.height))
        else:
            screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        pygame.display.set_caption("Map Editor")
        textures = load_editor_textures(args.assets)
        tile_images = [_image(textures, name) for name in EDITOR_TILE_TEXTURES]
        weapon_images = [_image(textures, name) for name in WEAPON_TEXTURES]
        _run(screen, editor, tile_images, weapon_images, args.map)
    finally:
        _font.cache_clear()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())