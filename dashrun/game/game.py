# dashrun/game/game.py
import argparse
import logging
import random
import sys
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n
from .audio import NullAudio, ToneAudio
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .loop import FrameLoop, PygameScheduler
from .render import Renderer
from .run_state import RunState

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="dashrun")
    p.add_argument("--seed", type=int, default=None,
                   help="Terrain seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--fps", type=int, default=FPS, help="Frames (and simulation ticks) per second")
    p.add_argument("--mute", action="store_true", help="Disable sound")
    p.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    return p.parse_args(argv)


def resolve_seed(arg_seed):
    """None -> SEED_DEFAULT; -1 -> None (RunState randomizes); anything else as given."""
    if arg_seed is None:
        return SEED_DEFAULT
    if arg_seed == -1:
        return None
    return arg_seed


class RunnerApp:
    """Input port + frame loop + renderer around a single RunState."""

    def __init__(self, seed, fps: int = FPS, mute: bool = False):
        pygame.init()
        pygame.display.set_caption("dashrun")
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))

        audio = NullAudio()
        if not mute:
            tone = ToneAudio()
            if tone.enabled:
                audio = tone
        self.state = RunState(seed, audio=audio)
        self.renderer = Renderer(pygame.font.SysFont("jetbrainsmono", 18))

        self.scheduler = PygameScheduler(fps)
        self.loop = FrameLoop(scheduler=self.scheduler, update_fn=self._update, render_fn=self._render)
        self._quit = False

    # ---------- Frame callbacks ----------

    def _update(self):
        self.state.tick()
        if self.state.is_over():
            self.loop.stop()

    def _render(self):
        self.renderer.draw(self.screen, self.state.snapshot())
        pygame.display.flip()

    # ---------- Input port ----------

    def restart(self, seed=None):
        self.loop.stop()
        self.state.reset_run(seed)
        self.loop.start()

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self._quit = True
        elif event.type == pygame.KEYDOWN:
            if event.key == K_ESCAPE:
                self._quit = True
            elif event.key == K_SPACE:
                self.state.jump()
            elif event.key == K_r and self.state.is_over():
                # same seed -> same layout
                self.restart(self.state.seed)
            elif event.key == K_n and self.state.is_over():
                self.restart(random.randrange(0, 2**32 - 1))
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.state.is_over():
                if self.renderer.restart_rect.collidepoint(event.pos):
                    self.restart(self.state.seed)
            else:
                self.state.jump()

    def run(self):
        logger.info("starting run, seed=%s", self.state.seed)
        self.loop.start()
        try:
            while not self._quit:
                # intents land before the next tick
                for event in pygame.event.get():
                    self.handle_event(event)
                self.scheduler.run_pending()
        finally:
            self.loop.stop()
            pygame.quit()


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO),
                         format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = RunnerApp(resolve_seed(args.seed), fps=args.fps, mute=args.mute)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(run())
