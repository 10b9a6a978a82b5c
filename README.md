# tilearena

A small top-down wave shooter played on a tile map, together with the grid
editor used to build that map. Both windows run on pygame; the game rules
and the map format are plain Python and can be used without a window.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## The game

```
tilearena-game [--map PATH] [--assets DIR] [--windowed] [--width W] [--height H] [--seed N]
```

`--map` defaults to `assets/map1.map` and `--assets` to `assets`, both
relative to the working directory. Without `--windowed` the game opens full
screen; `--width` and `--height` (default 1280 × 720) set the window size
when windowed. `--seed` makes enemy spawn positions and shot spread
repeatable. If the map cannot be read, the game starts on an empty map and
says so on standard error. Escape or closing the window quits.

Enemies come in rounds. The first round spawns six enemies and each later
round six more than the one before. Enemies appear one per frame at random
positions within the screen's size and chase the player. Once every enemy
in a round has spawned and died there is a two-second break, then the next
round begins. Each enemy does 25 damage at most every 1.5 seconds; the
player starts with 100 health. A hit earns 10 money and a kill 80.

Controls:

| Input               | Action                                                |
|---------------------|-------------------------------------------------------|
| W / A / S / D       | Move                                                  |
| Mouse               | Aim                                                   |
| Left mouse button   | Shoot                                                 |
| Right mouse button  | Aim down sights: no spread, slower movement, a laser  |
| R                   | Reload                                                |
| 1 / 2 / 3           | Switch holster slot (2 and 3 only when filled)        |
| E                   | Buy at the weapon station you are standing on         |
| I                   | Toggle debug mode                                     |

An empty magazine reloads by itself while there is reserve ammunition.
Switching weapons cancels a reload in progress.

In debug mode the camera stops following the player: the mouse wheel zooms
around the cursor and Shift plus left-drag pans. A panel on the right has
buttons that switch hitbox outlines on and off for the player, the enemies,
solid tiles and weapon stations.

### Weapons

| Weapon  | Damage | Magazine | Reserve | Spread | Price | Ammo price |
|---------|--------|----------|---------|--------|-------|------------|
| pistol  | 100    | 1000     | 42      | ±5°    | 50    | 10         |
| ar      | 60     | 35       | 175     | ±10°   | 100   | 10         |

Both fire at most once every 0.2 seconds. The player starts with the pistol.
Standing on a station shows the weapon's name and price, green when it is
affordable. For a weapon already carried the station offers a refill of its
reserve, which is only sold when the reserve is not full. A new weapon goes
into an empty holster slot, or replaces the weapon in hand when all three
slots are taken.

### Textures

Textures are read from the asset directory when first drawn:
`player/player.png`, `enemy/basic_enemy.png`, `weapons/pistol.png`,
`weapons/ar.png` and `tiles/tile1.png` to `tiles/tile4.png`. A texture that
cannot be loaded is replaced by a blank square and reported on standard
error.

## The map editor

```
tilearena-editor [--map PATH] [--assets DIR] [--windowed] [--width W] [--height H]
```

Run `tilearena-editor --help` to see the default paths. The editor reads
its textures from `tiles/tile1.png` to `tiles/tile4.png`,
`tiles/player.png`, `tiles/pistol.png` and `tiles/ar.png` under the asset
directory. If the map file cannot be read the editor starts with an empty
map.

The editor shows a 100 × 100 grid of 32-pixel cells. Pick a tile texture
from the bar at the bottom of the screen, then paint.

| Input                    | Action                                            |
|--------------------------|---------------------------------------------------|
| 1                        | Paint mode: tiles that can be walked over         |
| 2                        | Solid mode: tiles that block movement and shots   |
| 3                        | Player-spawn mode: mark a walkable tile as spawn  |
| 4                        | Weapon-buy mode: put a weapon station on a tile   |
| Left mouse button        | Place a tile, or mark one in modes 3 and 4        |
| Right mouse button       | Delete the tile under the cursor                  |
| Mouse wheel              | Zoom around the cursor                            |
| Shift + left-drag        | Pan                                               |
| Export button            | Write the map file and close the editor           |
| Escape                   | Close without saving                              |

A spawn point can only be marked on a non-solid tile, and trying to mark a
solid one flashes it red. A weapon station can only go on a tile that is
neither solid nor a spawn point; choose its weapon from the panel on the
right while in weapon-buy mode.

The same editing rules are available without a window through
`tilearena.editor.Editor`, with `place`, `delete`, `tile_at`, `set_mode`
and `select_texture`.

## The map format

A map is a single line of text holding one record per tile, separated by
`;`:

```
id{{x,y},{active},{solid},{playerSpawn},{weaponBuy}{weaponIndex}}
```

All fields are integers. `id` is the tile's texture index, `x` and `y` are
its world position in pixels, the four flags are `0` or `1`, and
`weaponIndex` is `0` for the pistol, `1` for the assault rifle and `-1` for
none. The editor writes all 10,000 tile slots, inactive ones included. The
game counts the active records and reads that many records from the start
of the line.

The `tilearena.mapfile` module reads and writes this format directly:

```python
from tilearena.mapfile import empty_tiles, format_map, parse_map

tiles = empty_tiles(4)
text = format_map(tiles)
assert parse_map(text, 4) == tiles
```

`load_map` and `save_map` do the same with a file on disk, and
`count_active_tiles` reports how many records in a map are active. Text
that does not follow the format raises `MapFormatError`.

## Running the game without a window

`tilearena.world.World` holds every game object and advances them one frame
at a time from a `FrameInput`:

```python
import random

from tilearena.mapfile import load_map
from tilearena.world import FrameInput, World

world = World(load_map("assets/map1.map"), random.Random(1))
world.step(FrameInput(right=True, shoot=True), 1 / 60)
print(world.player.pos, world.rounds.round_number)
```

## What it does not do

There is no game over: the player's health can drop below zero and play
goes on. There is no sound, no menu, no saving of progress and no more than
one map at a time.