"""Pygame GUI frontend, fully self-contained.

Includes the size menu, gameplay with click routing, hint highlighting,
timed auto-solve playback, and the verification verdict screen.
"""

from __future__ import annotations

import enum
import math
import random
import time

import pygame

from npuzzle.config import MAX_SIZE, MIN_SIZE, Difficulty, PuzzleConfig
from npuzzle.engine.gameplay import GamePlay
from npuzzle.engine.gamestate import GameEvent
from npuzzle.models.board import Direction
from npuzzle.models.verification import VerificationSession

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 500, 660
TILE_GAP = 4
MARGIN = 20
BOARD_TOP = 96
BOARD_MAX = WIN_W - 2 * MARGIN

PLAYBACK_DELAY = 0.2  # seconds between auto-solve moves
HINT_PULSE = 0.6  # seconds


class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    WIN = "win"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def tile_layout(size: int) -> tuple[int, int, int, int]:
    """Return (tile_px, origin_x, origin_y, total_px) for a board of *size*."""
    tile_px = (BOARD_MAX - (size + 1) * TILE_GAP) // size
    total = size * tile_px + (size + 1) * TILE_GAP
    return tile_px, _cx(total) + TILE_GAP, BOARD_TOP + TILE_GAP, total


def tile_at(size: int, pos: tuple[int, int]) -> int | None:
    """Map a pixel position to a board index, or ``None`` off the tiles."""
    tpx, ox, oy, _ = tile_layout(size)
    x, y = pos[0] - ox, pos[1] - oy
    if x < 0 or y < 0:
        return None
    c, cx = divmod(x, tpx + TILE_GAP)
    r, cy = divmod(y, tpx + TILE_GAP)
    if c >= size or r >= size or cx >= tpx or cy >= tpx:
        return None
    return r * size + c


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, size: int, config: PuzzleConfig, rng: random.Random) -> None:
        self._config = config
        self._rng = rng
        self._sel_size = size

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.MENU
        self._game: GamePlay | None = None
        self._session = VerificationSession()
        self._status_msg = ""
        self._hint_index: int | None = None
        self._hint_started = 0.0
        self._last_step = 0.0

        self._build_menu_btns()
        self._build_game_btns()
        self._build_win_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw, bh, gap = 100, 46, 8
        sizes = list(range(MIN_SIZE, MAX_SIZE + 1))
        total_w = len(sizes) * bw + (len(sizes) - 1) * gap
        sx = _cx(total_w)

        self._size_btns: dict[int, _Btn] = {}
        for i, s in enumerate(sizes):
            label = f"{Difficulty.for_size(s).value.capitalize()} {s}×{s}"
            self._size_btns[s] = _Btn(
                (sx + i * (bw + gap), 250, bw, bh), label, self._f_btn_sm
            )

        bw_lg = 220
        self._play_btn = _Btn(
            (_cx(bw_lg), 340, bw_lg, 50),
            "P L A Y",
            self._f_btn,
            bg=COL_BLUE,
            hover=COL_LAVENDER,
            fg=COL_BASE,
        )
        self._quit_btn = _Btn(
            (_cx(bw_lg), 406, bw_lg, 42),
            "Q U I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._menu_all = [*self._size_btns.values(), self._play_btn, self._quit_btn]

    def _build_game_btns(self) -> None:
        bw, gap = 110, 10
        sx = _cx(3 * bw + 2 * gap)
        self._new_btn = _Btn(
            (sx, 0, bw, 36), "NEW (R)", self._f_btn_sm,
            bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE,
        )
        self._hint_btn = _Btn(
            (sx + bw + gap, 0, bw, 36), "HINT (N)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._solve_btn = _Btn(
            (sx + 2 * (bw + gap), 0, bw, 36), "SOLVE (V)", self._f_btn_sm,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._game_action_btns = [self._new_btn, self._hint_btn, self._solve_btn]

    def _build_win_btns(self) -> None:
        bw = 220
        self._win_again = _Btn(
            (_cx(bw), 440, bw, 50),
            "PLAY AGAIN",
            self._f_btn,
            bg=COL_GREEN,
            hover=(190, 240, 190),
            fg=COL_BASE,
        )
        self._win_menu = _Btn((_cx(bw), 508, bw, 46), "M E N U", self._f_btn_sm)

    # ── helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def _fmt(seconds: float) -> str:
        m, s = divmod(int(seconds), 60)
        return f"{m:02d}:{s:02d}"

    def _on_game_event(self, event: GameEvent, **data) -> None:
        if event == GameEvent.MOVED:
            self._hint_index = None
        elif event == GameEvent.FALLBACK:
            self._status_msg = "Search gave up: playing a fresh shuffle back"
        elif event == GameEvent.PLAYBACK_FINISHED and data.get("cancelled"):
            self._status_msg = "Auto-solve stopped"
        elif event == GameEvent.SOLVED:
            self._screen = _Screen.WIN

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf, self._f_big.render("SLIDING  PUZZLE", True, COL_TEXT), 80
        )
        _blit_center(
            self._surf,
            self._f_body.render("Select difficulty", True, COL_SUBTEXT),
            210,
        )
        for s, btn in self._size_btns.items():
            btn.bg = COL_GREEN if s == self._sel_size else COL_SURFACE0
            btn.fg = COL_BASE if s == self._sel_size else COL_TEXT
            btn.draw(self._surf)
        self._play_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        board = game.board
        sz = game.size
        tpx, ox, oy, total = tile_layout(sz)
        f_tile = pygame.font.SysFont("Helvetica", max(14, tpx // 3), bold=True)

        _blit_center(
            self._surf,
            self._f_title.render(f"Sliding Puzzle  {sz}×{sz}", True, COL_TEXT),
            14,
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Moves: {game.state.moves}    "
                f"Time: {self._fmt(game.state.elapsed_time)}",
                True,
                COL_PINK,
            ),
            44,
        )
        sus_col = COL_RED if self._session.suspicion >= 0.5 else COL_GREEN
        _blit_center(
            self._surf, self._f_small.render(self._session.label, True, sus_col), 68
        )

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total), BOARD_TOP, total, total),
            border_radius=10,
        )

        for index, val in enumerate(board.tiles):
            if val == 0:
                continue
            r, c = divmod(index, sz)
            rect = pygame.Rect(
                ox + c * (tpx + TILE_GAP), oy + r * (tpx + TILE_GAP), tpx, tpx
            )
            if index == self._hint_index:
                # Pulse the hinted tile for a moment, then keep a border.
                elapsed = time.monotonic() - self._hint_started
                if elapsed < HINT_PULSE:
                    grow = int(tpx * 0.08 * math.sin(elapsed * math.pi * 3))
                    rect = rect.inflate(grow, grow)
            col = COL_GREEN if board.is_tile_correct(index) else COL_BLUE
            pygame.draw.rect(self._surf, col, rect, border_radius=6)
            if index == self._hint_index:
                pygame.draw.rect(self._surf, COL_YELLOW, rect, width=5, border_radius=6)
            lbl = f_tile.render(str(val), True, COL_BASE)
            self._surf.blit(
                lbl,
                (rect.centerx - lbl.get_width() // 2, rect.centery - lbl.get_height() // 2),
            )

        btn_y = BOARD_TOP + total + 10
        for btn in self._game_action_btns:
            btn.rect.y = btn_y
            btn.draw(self._surf)

        footer_y = btn_y + 44
        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_YELLOW),
                footer_y,
            )
            footer_y += 20

        hint_text = "Click / Arrows  move     X  stop solve     M  menu"
        _blit_center(
            self._surf, self._f_small.render(hint_text, True, COL_OVERLAY0), footer_y
        )

    def _draw_win(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        verdict = self._session.verdict

        _blit_center(
            self._surf,
            self._f_big.render("★  S O L V E D  ★", True, COL_GREEN),
            100,
        )
        info = [
            (f"Grid:   {game.size}×{game.size}", COL_SUBTEXT),
            (f"Moves:  {game.state.moves}", COL_YELLOW),
            (f"Time:   {self._fmt(game.state.elapsed_time)}", COL_YELLOW),
        ]
        if verdict is not None:
            info.append((verdict.title, COL_PINK))
            info.append((verdict.text, COL_SUBTEXT))
        y = 180
        for txt, col in info:
            _blit_center(self._surf, self._f_title.render(txt, True, col), y)
            y += 44

        self._win_again.draw(self._surf)
        self._win_menu.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for s, b in self._size_btns.items():
                if b.hit(ev.pos):
                    self._sel_size = s
                    return True
            if self._play_btn.hit(ev.pos):
                self._start_game()
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._start_game()
            elif ev.key == pygame.K_LEFT:
                self._sel_size = max(MIN_SIZE, self._sel_size - 1)
            elif ev.key == pygame.K_RIGHT:
                self._sel_size = min(MAX_SIZE, self._sel_size + 1)
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_action_btns:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._new_btn.hit(ev.pos):
                self._new_game()
            elif self._hint_btn.hit(ev.pos):
                self._do_hint()
            elif self._solve_btn.hit(ev.pos):
                self._do_solve()
            else:
                index = tile_at(game.size, ev.pos)
                if index is not None and game.move_tile(index):
                    self._status_msg = ""
        elif ev.type == pygame.KEYDOWN:
            _dirs = {
                pygame.K_UP: Direction.UP,
                pygame.K_w: Direction.UP,
                pygame.K_DOWN: Direction.DOWN,
                pygame.K_s: Direction.DOWN,
                pygame.K_LEFT: Direction.LEFT,
                pygame.K_a: Direction.LEFT,
                pygame.K_RIGHT: Direction.RIGHT,
                pygame.K_d: Direction.RIGHT,
            }
            if ev.key in _dirs:
                if game.move(_dirs[ev.key]):
                    self._status_msg = ""
            elif ev.key == pygame.K_n:
                self._do_hint()
            elif ev.key == pygame.K_v:
                self._do_solve()
            elif ev.key == pygame.K_x and game.playback is not None:
                game.playback.cancel()
            elif ev.key == pygame.K_r:
                self._new_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                if game.playback is not None:
                    game.playback.cancel()
                self._screen = _Screen.MENU
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._win_again.motion(ev.pos)
            self._win_menu.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._win_again.hit(ev.pos):
                self._new_game()
            elif self._win_menu.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._new_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    # ── solver actions ──────────────────────────────────────────────────────

    def _do_hint(self) -> None:
        game = self._game
        assert game is not None
        move = game.hint()
        if move is None:
            self._status_msg = (
                "Busy solving" if game.is_playing_back else "No hint available"
            )
            return
        self._hint_index = move.target
        self._hint_started = time.monotonic()
        self._status_msg = "Hint: slide the highlighted tile"

    def _do_solve(self) -> None:
        game = self._game
        assert game is not None
        if game.solve() is not None:
            self._last_step = time.monotonic()
            if not self._status_msg.startswith("Search gave up"):
                self._status_msg = "Solving…"

    def _step_playback(self) -> None:
        """Advance the running auto-solve by one move when its delay is up."""
        game = self._game
        if game is None or game.playback is None:
            return
        now = time.monotonic()
        if now - self._last_step < PLAYBACK_DELAY:
            return
        self._last_step = now
        playback = game.playback
        next(playback, None)
        if playback.done and not playback.cancelled:
            self._status_msg = f"Solved in {len(playback.moves)} moves!"

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        self._game = GamePlay(self._sel_size, config=self._config, rng=self._rng)
        self._game.bus.subscribe(self._session.on_event)
        self._game.bus.subscribe(self._on_game_event)
        self._session.reset()
        self._status_msg = ""
        self._hint_index = None
        self._screen = _Screen.PLAYING

    def _new_game(self) -> None:
        game = self._game
        assert game is not None
        game.new_game(self._sel_size)
        self._status_msg = ""
        self._hint_index = None
        self._screen = _Screen.PLAYING

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            if self._screen == _Screen.PLAYING:
                self._step_playback()

            _draw[self._screen]()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(size: int, config: PuzzleConfig, rng: random.Random) -> None:
    """Launch the Pygame GUI (opens directly to the menu)."""
    app = PygameApp(size, config, rng)
    app.run_loop()
