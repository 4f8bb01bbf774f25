"""
Play Reversi against the CPU in the terminal.
"""
import os
import argparse

from reversi.config import Config, get_default_config
from reversi.game import NotYourTurn, ReversiError, BLACK, WHITE
from reversi.game.moves import coord_to_str, parse_coord
from reversi.logger import setup_logging
from reversi.session import GameSession, run_after_delay

SYMBOLS = {0: '.', BLACK: '●', WHITE: '○'}
NAMES = {BLACK: '黒 (Black)', WHITE: '白 (White)'}


def print_board(session: GameSession, highlight: bool):
    """Print the board with coordinate labels, marking highlighted moves with '*'."""
    state = session.get_state()
    marks = set(session.highlight_moves()) if highlight else set()
    print("   " + " ".join(chr(ord('A') + c) for c in range(8)))
    for row in range(8):
        cells = []
        for col in range(8):
            cells.append('*' if (col, row) in marks else SYMBOLS[state.board.get(col, row)])
        print(f"{row + 1:>2} " + " ".join(cells))
    print(f"Black: {state.black_count} - White: {state.white_count}")


class PacedScheduler:
    """Scheduler that redraws the board before pausing for the CPU move."""

    def __init__(self, highlight: bool):
        self.highlight = highlight
        self.session = None

    def __call__(self, delay, callback):
        # Unset while GameSession.__init__ schedules a CPU opening move
        if self.session is not None:
            print_board(self.session, self.highlight)
        print("CPU is thinking...")
        run_after_delay(delay, callback)


def on_pass(player: int):
    print(f"{NAMES[player]} has no legal move and passes!")


def on_game_over(result):
    print(f"\nGame over\nBlack: {result.black_count} - White: {result.white_count}\n{result.outcome}!")


def main():
    parser = argparse.ArgumentParser(description='Play Reversi against the CPU')
    parser.add_argument('--config', type=str, default='config.json',
                        help='Path to config file')
    parser.add_argument('--level', type=int, choices=[1, 2, 3], default=None,
                        help='CPU level: 1=random, 2=greedy, 3=positional')
    parser.add_argument('--highlight', action='store_true',
                        help='Mark legal moves on the board')
    args = parser.parse_args()

    if os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        config = get_default_config()
    if args.level is not None:
        config.game.cpu_level = args.level
    highlight = args.highlight or config.game.highlight_moves

    setup_logging(config)

    scheduler = PacedScheduler(highlight)
    session = GameSession(config.game, scheduler=scheduler,
                          on_pass=on_pass, on_game_over=on_game_over)
    scheduler.session = session
    print("==== Reversi ====")
    print("Enter a coordinate (e.g. d3), 'level N' to change the CPU, 'reset' or 'q' to quit.")

    try:
        while True:
            print_board(session, highlight)
            state = session.get_state()
            if state.is_terminal:
                answer = input("Play again? [y/N] ").strip().lower()
                if answer != 'y':
                    return
                session.reset()
                continue

            text = input(f"{NAMES[session.human_player]} > ").strip().lower()
            if text in ('q', 'quit', 'exit'):
                return
            if text == 'reset':
                session.reset()
                continue
            if text.startswith('level'):
                try:
                    session.configure_difficulty(int(text.split()[1]))
                except (IndexError, ValueError):
                    print("Usage: level 1|2|3")
                continue

            coord = parse_coord(text)
            if coord is None:
                print("Invalid coordinate. Example: d3")
                continue
            try:
                session.propose_move(*coord)
            except NotYourTurn as e:
                print(e)
            except ReversiError:
                print(f"You cannot play {coord_to_str(coord)}.")
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted.")


if __name__ == "__main__":
    main()
