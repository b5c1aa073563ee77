"""
Terminal helpers: the loading animation and the exit-key loop.
"""

import os
import select
import sys
import threading

SPINNER_FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]
FRAME_INTERVAL = 0.15
WEEKS_IN_YEAR = 52
PLACEHOLDER = "⬜"
DAY_LABELS = ["   Mon", "      ", "   Wed", "      ", "   Fri", "      "]
LOADING_HEADER = (
    "       Sep          Oct          Nov          Dec          Jan          Feb"
    "          Mar          Apr          May          Jun          Jul          Aug"
)

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
EXIT_KEYS = {"q", "Q", "\x1b", "\x03"}  # q, Q, Esc, Ctrl+C


class LoadingAnimation:
    """
    Placeholder grid with a spinner, drawn from a background thread.

    The thread shares nothing with the caller except a cancellation event.
    stop() sets the event and joins the thread, so once it returns the
    caller owns the stream again.
    """

    def __init__(self, stream=None, interval: float = FRAME_INTERVAL):
        self.stream = stream if stream is not None else sys.stdout
        self.interval = interval
        self._cancelled = threading.Event()
        self._thread = None

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def _draw_placeholder(self) -> None:
        row = f"{PLACEHOLDER} " * WEEKS_IN_YEAR
        lines = ["", LOADING_HEADER, "       " + row]
        lines.extend(f"{label} {row}" for label in DAY_LABELS)
        lines.append("")
        self._write("\n".join(lines) + "\n")

    def _run(self) -> None:
        self._draw_placeholder()
        frame = 0
        while not self._cancelled.is_set():
            self._write(f"\rLoading {SPINNER_FRAMES[frame]} contributions...")
            frame = (frame + 1) % len(SPINNER_FRAMES)
            # Returns as soon as stop() is called
            self._cancelled.wait(self.interval)

    def start(self) -> "LoadingAnimation":
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        self._cancelled.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False


def clear_screen(stream=None) -> None:
    """Clear the screen and move the cursor to the top-left corner."""
    stream = stream if stream is not None else sys.stdout
    stream.write(CLEAR_SCREEN)
    stream.flush()


def read_key(fd: int) -> str:
    """
    Read one keypress from a raw-mode file descriptor.

    Escape sequences (arrow keys, function keys) are returned whole, so a
    bare Esc can be told apart from keys that merely start with ESC.
    """
    key = os.read(fd, 1).decode(errors="ignore")
    if key == "\x1b":
        while select.select([fd], [], [], 0)[0]:
            chunk = os.read(fd, 1)
            if not chunk:
                break
            key += chunk.decode(errors="ignore")
    return key


def wait_for_exit_key(stdin=None, poll_interval: float = 0.1) -> None:
    """
    Block until q, Esc or Ctrl+C is pressed.

    The terminal is switched to raw mode while waiting and restored
    afterwards. Returns immediately when stdin is not a terminal.
    """
    stdin = stdin if stdin is not None else sys.stdin
    if not stdin.isatty():
        return

    import termios
    import tty

    fd = stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        while True:
            readable, _, _ = select.select([stdin], [], [], poll_interval)
            if readable and read_key(fd) in EXIT_KEYS:
                break
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
