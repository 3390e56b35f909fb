
"""road_weaver.py: pygame viewer for a procedurally generated road world.

Loads a saved world (or bare graph) JSON file, regenerates the scene on every
tick when the graph hash changed, and paints it with the mouse cursor as the
fake-3D viewpoint. [T] toggles trees, [Ctrl+S] saves, [Esc] quits.
"""
import argparse
import json
import logging

import pygame

from geometry import Point, bounding_box
from graph import Graph, GraphDataError
from primitives import Segment
from settings import BG_COLOR
from world import World

logger = logging.getLogger("road_weaver")

WIDTH, HEIGHT = 1280, 800
MARGIN = 60


def default_graph():
    p1 = Point(200, 200); p2 = Point(500, 200)
    return Graph([p1, p2], [Segment(p1, p2)])


def load_world(path, seed=None):
    if path is None:
        return World(default_graph(), seed=seed)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # a bare graph file has points/segments at the top level
    if "graph" not in data:
        data = {"graph": data}
    return World.load(data, seed=seed)


def save_world(world, path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(world.save(), f, indent=2)
    logger.info("saved world to %s", path)


def fit_camera(world, size):
    """(offset, zoom) that fits the generated scene into the window."""
    pts = [p for r in world.roads for p in r.base.points] + [p for b in world.buildings for p in b.base.points]
    box = bounding_box(pts)
    if box is None:
        return (0.0, 0.0), 1.0
    left, top, right, bottom = box
    w, h = size
    zoom = min((w - 2*MARGIN) / max(1.0, right - left), (h - 2*MARGIN) / max(1.0, bottom - top))
    return (left - MARGIN / zoom, top - MARGIN / zoom), zoom


def main(argv=None):
    ap = argparse.ArgumentParser(description="Render a road world saved as JSON.")
    ap.add_argument("path", nargs="?", help="world or graph JSON file (default: demo graph)")
    ap.add_argument("--seed", type=int, default=None, help="seed for tree placement")
    ap.add_argument("--out", default=None, help="save target for Ctrl+S (default: input path or world.json)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(name)s] %(levelname)s %(message)s")

    try:
        world = load_world(args.path, seed=args.seed)
    except (OSError, json.JSONDecodeError, GraphDataError) as e:
        logger.error("could not load %s: %s", args.path, e)
        return 1
    out_path = args.out or args.path or "world.json"

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(f"road weaver: {world.title}")
    font = pygame.font.Font(None, 22)
    cam_offset, cam_zoom = fit_camera(world, (WIDTH, HEIGHT))

    def world_to_screen(pt):
        return ((pt[0] - cam_offset[0]) * cam_zoom, (pt[1] - cam_offset[1]) * cam_zoom)

    def screen_to_world(pt):
        return Point(pt[0] / cam_zoom + cam_offset[0], pt[1] / cam_zoom + cam_offset[1])

    clock = pygame.time.Clock()
    running = True
    while running:
        clock.tick(60)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_s and (event.mod & pygame.KMOD_CTRL):
                    try:
                        save_world(world, out_path)
                    except OSError as e:
                        logger.error("save failed: %s", e)
                elif event.key == pygame.K_t:
                    if world.trees_enabled: world.disable_trees()
                    else: world.enable_trees()
                    logger.info("trees %s (%d)", "on" if world.trees_enabled else "off", len(world.trees))

        # cheap when the graph hash is unchanged
        if world.generate():
            logger.info("regenerated: %d roads, %d buildings, %d trees",
                        len(world.roads), len(world.buildings), len(world.trees))

        screen.fill(BG_COLOR)
        viewpoint = screen_to_world(pygame.mouse.get_pos())
        world.draw(screen, viewpoint, world_to_screen, cam_zoom)
        note = font.render("[T] Trees  [Ctrl+S] Save  [Esc] Quit", True, (30, 30, 30))
        screen.blit(note, (20, HEIGHT - 30))
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
