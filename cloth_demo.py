import logging
from multiprocessing import Manager, Process

import pygame

import gui_controller as gui_ctrl
from constants import (BLACK, CLOTH_COLS, CLOTH_ROWS, CLOTH_SPACING, DT, FPS, GREEN, GREY, HEIGHT,
                       PARTICLE_RADIUS, RED, SELECT_RADIUS, SELECTED_RADIUS, WHITE, WIDTH, YELLOW)
from miniphys.cloth import Cloth
from miniphys.config import ClothConfig
from miniphys.logging_config import setup_logging
from miniphys.Vec2 import Vec2

logger = logging.getLogger("miniphys.demo")


def create_cloth(config=None):
    # centre the grid horizontally, a little below the top edge
    cloth_width = (CLOTH_COLS - 1) * CLOTH_SPACING
    origin = Vec2((WIDTH - cloth_width) / 2.0, 60.0)
    return Cloth(CLOTH_COLS, CLOTH_ROWS, CLOTH_SPACING, config=config, origin=origin)


def apply_shared_settings(cloth, shared):
    """Copy the GUI's tuning values onto the cloth config; bad values are ignored."""
    try:
        config = ClothConfig.from_mapping(dict(shared), base=cloth.config)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring invalid settings from control panel: %s", exc)
        return
    if config != cloth.config:
        cloth.config = config
        logger.info("Cloth config updated: %s", config)


def draw(cloth, screen):
    particles = cloth.particles
    for c in cloth.constraints:
        i, j = c.particles()
        a = particles[i].pos
        b = particles[j].pos
        pygame.draw.line(screen, WHITE, (int(a.x), int(a.y)), (int(b.x), int(b.y)), 1)

    for p in particles:
        color = RED if p.pinned else YELLOW
        pygame.draw.circle(screen, color, (int(p.pos.x), int(p.pos.y)), PARTICLE_RADIUS)

    for i in cloth.selected_particles:
        pos = particles[i].pos
        pygame.draw.circle(screen, RED, (int(pos.x), int(pos.y)), SELECTED_RADIUS, 2)


def main():
    setup_logging()
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Cloth Simulation")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 24)

    cloth = create_cloth()
    logger.info("Created %r", cloth)

    # spawn DearPyGui controller process (protected inside main)
    _mgr = Manager()
    _shared = _mgr.dict()
    _shared['gravity_y'] = cloth.config.gravity.y
    _shared['damping'] = cloth.config.damping
    _shared['constraint_iterations'] = cloth.config.constraint_iterations
    _shared['tear_factor'] = cloth.config.tear_factor
    _shared['reset_cloth'] = False
    _shared['toggle_pause'] = False
    _shared['__exit__'] = False
    _gui_proc = Process(target=gui_ctrl.run_gui, args=(_shared,), daemon=True)
    _gui_proc.start()

    running = True
    paused = False
    dragging = False

    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        cloth.reset()
                        dragging = False
                    elif event.key in (pygame.K_q, pygame.K_ESCAPE):
                        running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    mouse_pos = Vec2(*event.pos)
                    if event.button == 3:
                        # start dragging particles
                        dragging = cloth.select(mouse_pos, SELECT_RADIUS) > 0
                    elif event.button == 1:
                        cloth.cut_at(mouse_pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 3:
                    if dragging:
                        dragging = False
                        cloth.clear_selection()
                elif event.type == pygame.MOUSEMOTION and dragging:
                    cloth.move_selected(Vec2(*event.pos))

            # --- control panel ---
            if _shared.get('__exit__', False):
                running = False
            if _shared.get('toggle_pause', False):
                paused = not paused
                _shared['toggle_pause'] = False
            if _shared.get('reset_cloth', False):
                cloth.reset()
                dragging = False
                _shared['reset_cloth'] = False
            apply_shared_settings(cloth, _shared)
            _shared['particle_count'] = len(cloth.particles)
            _shared['constraint_count'] = len(cloth.constraints)

            if not paused:
                cloth.simulate(DT)

            screen.fill(BLACK)
            draw(cloth, screen)
            fps_text = font.render(f"FPS: {clock.get_fps():.0f}" + ("  [paused]" if paused else ""), True, GREEN)
            screen.blit(fps_text, (20, 20))
            hint = font.render("right-drag: move   left-click: cut   r: reset   space: pause", True, GREY)
            screen.blit(hint, (20, HEIGHT - 30))
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        _shared['__exit__'] = True
        _gui_proc.join(timeout=1.0)
        pygame.quit()


if __name__ == "__main__":
    main()
