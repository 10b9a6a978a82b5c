"""The game window: the main loop, the on-screen display and the debug panel."""

from __future__ import annotations

import argparse
import functools
import math
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pygame

from tilearena.assets import GAME_TILE_TEXTURES, TextureSet, load_game_textures
from tilearena.camera import Camera2D
from tilearena.geometry import CELL_SIZE, Rect, Vec2
from tilearena.mapfile import MAX_TILES, MapFormatError, Tile, count_active_tiles, parse_map
from tilearena.world import DebugFlags, FrameInput, World

DEFAULT_MAP = Path("assets/map1.map")
DEFAULT_ASSETS = Path("assets")
TARGET_FPS = 0
"""Frame-rate cap; zero runs as fast as possible."""

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (230, 41, 55)
BLUE = (0, 121, 241)
GREEN = (0, 228, 48)

_BUTTON_SIZE = 20
_BUTTON_SPACING = 20
_BUTTON_MARGIN = 5
_BUTTONS_TOP = 100
_PANEL_WIDTH = 200
_LABEL_OFFSET = 170
_HAND_FACTOR = 0.6

_DEBUG_OPTIONS = (
    ("player_hitbox", "Player Hitbox:"),
    ("enemy_hitbox", "Enemy Hitbox:"),
    ("solid_tile_hitbox", "Solid Tile Hitbox:"),
    ("weapon_buy_hitbox", "Weapon buy Hitbox:"),
)

_SLOT_KEYS = {pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2}


def debug_panel_buttons(screen_width: float) -> list[tuple[str, str, Rect]]:
    """Return the debug panel's toggle buttons as (flag name, label, rectangle)."""
    start_x = screen_width - _BUTTON_SIZE - _BUTTON_MARGIN
    step = _BUTTON_SIZE + _BUTTON_SPACING
    return [
        (flag, label, Rect(start_x, _BUTTONS_TOP + index * step, _BUTTON_SIZE, _BUTTON_SIZE))
        for index, (flag, label) in enumerate(_DEBUG_OPTIONS)
    ]


def toggle_debug_flag(flags: DebugFlags, mouse: Vec2, screen_width: float) -> str | None:
    """Flip the hit-box switch whose button was clicked.

    Clicks only count while debug mode is on. Returns the name of the flag
    that changed, or None if the click hit no button.
    """
    if not flags.debug_mode:
        return None
    click = Rect(mouse.x, mouse.y, 1, 1)
    for flag, _, rect in debug_panel_buttons(screen_width):
        if rect.collides(click):
            setattr(flags, flag, not getattr(flags, flag))
            return flag
    return None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Read the game's command-line options."""
    parser = argparse.ArgumentParser(prog="tilearena", description="Survive rounds of enemies.")
    parser.add_argument("--map", type=Path, default=DEFAULT_MAP, help="map file to play")
    parser.add_argument("--assets", type=Path, default=DEFAULT_ASSETS, help="asset directory")
    parser.add_argument("--windowed", action="store_true", help="do not go full screen")
    parser.add_argument("--width", type=int, default=1280, help="window width")
    parser.add_argument("--height", type=int, default=720, help="window height")
    parser.add_argument("--seed", type=int, default=None, help="seed for enemy spawns and spread")
    return parser.parse_args(argv)


def _load_tiles(path: Path) -> list[Tile]:
    """Read as many records as the map has active tiles."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.readline()
        if not text:
            raise MapFormatError(f"map file {str(path)!r} is empty")
        amount = count_active_tiles(text, MAX_TILES)
        tiles = parse_map(text, amount)
    except OSError:
        print("Failed to open map file", file=sys.stderr)
        return []
    except MapFormatError as error:
        print(f"Failed to read file: {error}", file=sys.stderr)
        return []
    print("Imported Map successfully")
    return tiles


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.Font(None, max(1, size))


def _text(screen: pygame.Surface, text: str, x: float, y: float, size: int, colour) -> None:
    screen.blit(_font(size).render(text, True, colour), (int(x), int(y)))


def _pg(rect: Rect) -> pygame.Rect:
    return pygame.Rect(int(rect.x), int(rect.y), int(rect.width), int(rect.height))


def _image(textures: TextureSet, name: str) -> Any:
    try:
        return textures.get(name)
    except (OSError, KeyError, pygame.error):
        print(f"Failed to load texture {name!r}", file=sys.stderr)
        return pygame.Surface((CELL_SIZE, CELL_SIZE), pygame.SRCALPHA)


def _region(image: pygame.Surface, frame: Rect) -> pygame.Surface | None:
    area = _pg(frame).clip(image.get_rect())
    if area.width == 0 or area.height == 0:
        return None
    return image.subsurface(area)


def _screen_rect(camera: Camera2D, rect: Rect) -> Rect:
    corner = camera.world_to_screen(Vec2(rect.x, rect.y))
    return Rect(corner.x, corner.y, rect.width * camera.zoom, rect.height * camera.zoom)


def _blit_at(
    screen: pygame.Surface, camera: Camera2D, image: pygame.Surface | None, pos: Vec2
) -> None:
    if image is None:
        return
    if camera.zoom != 1.0:
        size = (
            max(1, round(image.get_width() * camera.zoom)),
            max(1, round(image.get_height() * camera.zoom)),
        )
        image = pygame.transform.scale(image, size)
    corner = camera.world_to_screen(pos)
    screen.blit(image, (int(corner.x), int(corner.y)))


def _blit_rotated(
    screen: pygame.Surface,
    camera: Camera2D,
    image: pygame.Surface | None,
    centre: Vec2,
    size: tuple[float, float],
    rotation: float,
) -> None:
    if image is None:
        return
    scaled = pygame.transform.scale(
        image,
        (max(1, round(size[0] * camera.zoom)), max(1, round(size[1] * camera.zoom))),
    )
    turned = pygame.transform.rotate(scaled, -rotation)
    at = camera.world_to_screen(centre)
    screen.blit(turned, turned.get_rect(center=(int(at.x), int(at.y))))


def _line(screen: pygame.Surface, camera: Camera2D, start: Vec2, end: Vec2, colour, width: int):
    a, b = camera.world_to_screen(start), camera.world_to_screen(end)
    pygame.draw.line(screen, colour, (a.x, a.y), (b.x, b.y), max(1, width))


def _draw_world(
    screen: pygame.Surface,
    world: World,
    textures: TextureSet,
    tile_images: Sequence[pygame.Surface],
) -> None:
    camera = world.camera
    for tile in world.tiles:
        if tile.active and 0 <= tile.id < len(tile_images):
            _blit_at(screen, camera, tile_images[tile.id], tile.pos)

    for enemy in world.enemies.active():
        _blit_at(screen, camera, _region(_image(textures, "basic_enemy"), enemy.frame_rec), enemy.pos)

    player = world.player
    centre = Vec2(player.pos.x + player.width / 2, player.pos.y + player.height / 2)
    _blit_rotated(
        screen,
        camera,
        _region(_image(textures, "player"), player.frame_rec),
        centre,
        (player.frame_rec.width, player.frame_rec.height),
        player.rotation,
    )

    weapon = player.weapon
    if weapon.texture:
        angle = math.radians(player.rotation)
        hand = player.width * _HAND_FACTOR
        at = centre + Vec2(math.cos(angle), math.sin(angle)) * hand
        _blit_rotated(
            screen,
            camera,
            _region(_image(textures, weapon.texture), weapon.frame_rec),
            at,
            (weapon.frame_rec.width * weapon.scale, weapon.frame_rec.height * weapon.scale),
            weapon.rotation,
        )

    if world.aim is not None:
        origin, end, hit = world.aim
        if hit:
            spot = camera.world_to_screen(end)
            pygame.draw.circle(screen, RED, (int(spot.x), int(spot.y)), 3)
        _line(screen, camera, origin, end, RED, 1)

    for buy in world.weapon_buys:
        if buy.weapon.texture:
            _blit_at(screen, camera, _region(_image(textures, buy.weapon.texture), buy.frame_rec), buy.pos)
    text_size = round(20 * camera.zoom)
    for buy, offer in world.offers:
        colour = GREEN if offer.affordable else RED
        name_at = camera.world_to_screen(Vec2(buy.pos.x, buy.pos.y - 50))
        price_at = camera.world_to_screen(Vec2(buy.pos.x, buy.pos.y - 30))
        _text(screen, offer.name, name_at.x, name_at.y, text_size, BLACK)
        _text(screen, str(offer.price), price_at.x, price_at.y, text_size, colour)

    for projectile in world.projectiles.active():
        end = projectile.pos + projectile.dir * projectile.length
        _line(screen, camera, projectile.pos, end, BLUE, round(2 * camera.zoom))

    _draw_hitboxes(screen, world)


def _draw_hitboxes(screen: pygame.Surface, world: World) -> None:
    camera, flags = world.camera, world.debug
    boxes: list[Rect] = []
    if flags.player_hitbox:
        boxes.append(world.player.rect())
    if flags.enemy_hitbox:
        boxes.extend(enemy.rect() for enemy in world.enemies.active())
    if flags.solid_tile_hitbox:
        boxes.extend(
            Rect(tile.pos.x, tile.pos.y, CELL_SIZE, CELL_SIZE)
            for tile in world.tiles
            if tile.active and tile.solid
        )
    if flags.weapon_buy_hitbox:
        boxes.extend(buy.rect() for buy in world.weapon_buys)
    for box in boxes:
        pygame.draw.rect(screen, RED, _pg(_screen_rect(camera, box)), width=1)


def _draw_ui(screen: pygame.Surface, world: World, fps: float) -> None:
    width, height = screen.get_size()
    player, rounds = world.player, world.rounds
    _text(screen, str(int(fps)), width - 40, 30, 20, BLUE)
    _text(screen, str(player.health), 30, 30, 40, RED)
    _text(screen, f"{player.money}$", 30, 80, 30, BLACK)
    weapon = player.weapon
    _text(screen, f"{weapon.mag_capacity} / {weapon.reserve_capacity}", 30, height - 50, 30, BLACK)
    _text(screen, str(rounds.round_number), width - 50, 75, 40, RED)
    if rounds.in_break:
        _text(screen, str(int(rounds.break_timer)), width - 50, 125, 40, RED)
    _text(screen, f"Enemy count: {rounds.spawned}", 30, 130, 40, BLACK)
    _text(screen, f"Alive enemies: {rounds.alive}", 30, 180, 40, BLACK)
    _text(screen, str(int(rounds.in_break)), 30, 230, 40, BLACK)


def _draw_debug_panel(screen: pygame.Surface, flags: DebugFlags) -> None:
    if not flags.debug_mode:
        return
    width, height = screen.get_size()
    pygame.draw.rect(screen, BLUE, pygame.Rect(width - _PANEL_WIDTH, 0, width, height))
    _text(screen, "Debug Panel", width - 180, 30, 25, BLACK)
    for flag, label, rect in debug_panel_buttons(width):
        _text(screen, label, rect.x - _LABEL_OFFSET, rect.y, 20, BLACK)
        pygame.draw.rect(screen, GREEN if getattr(flags, flag) else WHITE, _pg(rect))


def _run(screen: pygame.Surface, world: World, textures: TextureSet) -> None:
    clock = pygame.time.Clock()
    tile_images = [_image(textures, name) for name in GAME_TILE_TEXTURES]
    dt = 0.0
    pygame.mouse.get_rel()
    while True:
        inputs = FrameInput()
        clicked = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return
                if event.key == pygame.K_r:
                    inputs.reload = True
                elif event.key == pygame.K_e:
                    inputs.buy = True
                elif event.key == pygame.K_i:
                    inputs.toggle_debug = True
                elif event.key in _SLOT_KEYS and inputs.slot is None:
                    inputs.slot = _SLOT_KEYS[event.key]
            elif event.type == pygame.MOUSEWHEEL:
                inputs.wheel += event.y
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                clicked = True

        keys = pygame.key.get_pressed()
        left_button, _, right_button = pygame.mouse.get_pressed()
        rel = pygame.mouse.get_rel()
        inputs.left = bool(keys[pygame.K_a])
        inputs.right = bool(keys[pygame.K_d])
        inputs.up = bool(keys[pygame.K_w])
        inputs.down = bool(keys[pygame.K_s])
        inputs.shoot = bool(left_button)
        inputs.aim = bool(right_button)
        inputs.mouse = Vec2(*pygame.mouse.get_pos())
        if left_button and keys[pygame.K_LSHIFT]:
            inputs.drag = Vec2(*rel)

        world.step(inputs, dt)

        screen.fill(WHITE)
        _draw_world(screen, world, textures, tile_images)
        _draw_ui(screen, world, clock.get_fps())
        _draw_debug_panel(screen, world.debug)
        if clicked:
            toggle_debug_flag(world.debug, inputs.mouse, screen.get_width())
        pygame.display.flip()
        dt = clock.tick(TARGET_FPS) / 1000.0


def main(argv: Sequence[str] | None = None) -> int:
    """Load a map and play until the window is closed."""
    import random

    args = parse_args(argv)
    tiles = _load_tiles(args.map)
    pygame.init()
    try:
        if args.windowed:
            screen = pygame.display.set_mode((args.width, args.height))
        else:
            screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        pygame.display.set_caption("Game")
        pygame.mouse.set_visible(False)
        world = World(tiles, random.Random(args.seed))
        width, height = screen.get_size()
        world.screen_width = width
        world.screen_height = height
        world.camera.offset = Vec2(width / 2, height / 2)
        _run(screen, world, load_game_textures(args.assets))
    finally:
        _font.cache_clear()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())