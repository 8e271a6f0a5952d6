"""
Interactive toroidal fluid demo.

Controls
- Left mouse drag: paint density and push the fluid along the drag
- C: clear   Space: pause   Esc or window close: quit
- 1/2: viscosity down/up   3/4: diffusion down/up
"""
import argparse
import logging
import sys

# Try to import pygame with a friendly error if missing.
try:
    import pygame
except ImportError:
    print("The demo requires the 'pygame' package.\n"
          "Install it with:\n\n    pip install pygame\n")
    sys.exit(1)

from .brush import Brush, window_to_normalized
from .fluid import Fluid
from .params import RELAXATION_MODES, AppParams, Params
from .render import density_to_rgb
from .timer import FpsCounter, Timer


logger = logging.getLogger(__name__)


# ---------------------------
# Pygame App
# ---------------------------

class App:
    def __init__(self, params: Params, app_params: AppParams):
        self.app_params = app_params.validate()
        self.fluid = Fluid.from_params(params)
        self.brush = Brush(radius=app_params.brush_radius, density=app_params.brush_density)

        pygame.init()
        pygame.display.set_caption("Toroidal Stable Fluids")
        window = app_params.window
        self.screen = pygame.display.set_mode((window, window))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)

        self.timer = Timer()
        self.fps = FpsCounter()

        # UI state
        self.running = True
        self.paused = False
        self.cursor = (0.0, 0.0)
        self.cursor_velocity = (0.0, 0.0)
        self.button_pressed = False

    def handle_input(self, dt):
        w, h = self.screen.get_size()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEMOTION:
                x, y = window_to_normalized(event.pos[0], event.pos[1], w, h)
                if dt > 0.0:
                    self.cursor_velocity = ((x - self.cursor[0]) / dt, (y - self.cursor[1]) / dt)
                self.cursor = (x, y)
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                if event.button == 1:
                    self.button_pressed = event.type == pygame.MOUSEBUTTONDOWN
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_c:
                    self.fluid.clear()
                elif event.key == pygame.K_1:
                    self.fluid.viscosity = max(0.0, self.fluid.viscosity * 0.5)
                elif event.key == pygame.K_2:
                    self.fluid.viscosity = min(1e-2, max(1e-6, self.fluid.viscosity * 1.5))
                elif event.key == pygame.K_3:
                    self.fluid.diffusion = max(0.0, self.fluid.diffusion * 0.5)
                elif event.key == pygame.K_4:
                    self.fluid.diffusion = min(1e-2, max(1e-7, self.fluid.diffusion * 1.5))

    # ---- Rendering ----
    def render(self):
        w, h = self.screen.get_size()
        surf = pygame.surfarray.make_surface(density_to_rgb(self.fluid.density))
        surf = pygame.transform.smoothscale(surf, (w, h))
        self.screen.blit(surf, (0, 0))
        self.draw_hud()
        pygame.display.flip()

    def draw_hud(self):
        p = self.fluid.params
        lines = [
            "[LMB] paint   [C] clear   [Space] pause   [1/2] visc   [3/4] diff",
            f"N={p.size}  visc={p.viscosity:.2e}  diff={p.diffusion:.2e}  "
            f"iters={p.iterations}  {p.relaxation}",
            f"FPS: {self.fps.fps()}   paused: {self.paused}",
        ]
        y = 6
        for s in lines:
            surf = self.font.render(s, True, (255, 255, 255))
            self.screen.blit(surf, (8, y))
            y += 18

    def run(self):
        while self.running:
            self.clock.tick(self.app_params.fps)
            elapsed = self.timer.delta().total_seconds()
            self.timer.tick()
            # Clamp elapsed time so a stall does not blow up the relaxation stages
            dt = min(elapsed, self.app_params.max_dt)

            self.handle_input(elapsed)
            if not self.paused:
                if self.button_pressed:
                    self.brush.apply(self.fluid, self.cursor, self.cursor_velocity, dt)
                self.fluid.step(dt)
            self.render()
            self.fps.add_frame()
        pygame.quit()


# ---------------------------
# Command line
# ---------------------------

def build_parser():
    parser = argparse.ArgumentParser(prog="fluidsim", description="Interactive toroidal fluid demo")
    parser.add_argument("--size", type=int, default=128, help="grid resolution (N x N)")
    parser.add_argument("--window", type=int, default=AppParams.window, help="window size in pixels")
    parser.add_argument("--diffusion", type=float, default=0.0)
    parser.add_argument("--viscosity", type=float, default=0.0)
    parser.add_argument("--iterations", type=int, default=20, help="relaxation sweeps per solve")
    parser.add_argument("--relaxation", choices=RELAXATION_MODES, default="jacobi")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def params_from_args(args):
    params = Params(
        diffusion=args.diffusion,
        viscosity=args.viscosity,
        size=args.size,
        iterations=args.iterations,
        relaxation=args.relaxation,
    ).validate()
    app_params = AppParams(window=args.window).validate()
    return params, app_params


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    params, app_params = params_from_args(args)
    logger.info("starting demo with %s and %s", params, app_params)
    App(params, app_params).run()


if __name__ == "__main__":
    main()
