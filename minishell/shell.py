"""Interactive shell with history recall, built-in commands and pipelines."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import threading
from typing import IO, List, Optional, Sequence, TextIO, Union

from minishell.history import History
from minishell.parsing import NO_MARK, REPEAT_LAST, check_mark, parse_line, split_pipeline

BUILTINS = frozenset({"quit", "exit", "&", "cd", "history"})
PROMPT = "> "

Upstream = Union[None, bytes, IO[bytes]]


class ShellExit(Exception):
    """Raised when the user ends the session with ``quit`` or ``exit``."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


def _feed(pipe: IO[bytes], data: bytes) -> None:
    try:
        pipe.write(data)
    except BrokenPipeError:
        pass
    finally:
        try:
            pipe.close()
        except BrokenPipeError:
            pass


class Shell:
    """A small command interpreter that keeps a numbered history on disk."""

    def __init__(self, history_path: str = "history.txt", stdout: Optional[TextIO] = None) -> None:
        self._initial_cwd = os.getcwd()
        self.history_path = os.path.abspath(history_path)
        self.stdout = stdout if stdout is not None else sys.stdout
        self.history = History.load(self.history_path)
        self._background: List[subprocess.Popen] = []

    # -- output helpers -------------------------------------------------

    def _write(self, text: str) -> None:
        self.stdout.write(text)

    def _output_target(self) -> Optional[int]:
        """Descriptor of the shell's output, or None when it has no real one."""
        try:
            return self.stdout.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def _reap(self) -> None:
        self._background = [proc for proc in self._background if proc.poll() is None]

    def _remember(self, cmdline: str) -> None:
        entry = cmdline if cmdline.endswith("\n") else cmdline + "\n"
        if entry == "history\n" and len(self.history) and self.history.last() == "history\n":
            return
        self.history.add(entry)

    # -- evaluation -----------------------------------------------------

    def eval(self, cmdline: str, mark: Optional[int] = None) -> None:
        """Evaluate one command line; ``mark`` is its history reference, if known."""
        self._reap()
        if mark is None:
            mark = check_mark(cmdline)
        segments = split_pipeline(cmdline)
        if len(segments) > 1:
            stages = [parse_line(segment) for segment in segments]
            if any(stage.is_empty for stage in stages):
                return
            if mark == NO_MARK:
                self._remember(cmdline)
            self.run_pipeline([stage.argv for stage in stages], stages[-1].background)
            return

        parsed = parse_line(cmdline)
        if parsed.is_empty:
            return
        if mark == NO_MARK:
            self._remember(cmdline)
        if not self.run_builtin(parsed.argv, mark):
            self.run_command(parsed.argv, parsed.background, cmdline)

    def run_builtin(self, argv: Sequence[str], mark: int = NO_MARK) -> bool:
        """Run ``argv`` if it is a built-in or history reference; return whether it was."""
        name = argv[0]
        if name in ("quit", "exit"):
            self.quit()
        if name == "&":
            return True
        if name == "cd":
            self._change_directory(argv[1] if len(argv) > 1 else None)
            return True
        if name == "history":
            self._write(self.history.format())
            return True
        if mark == REPEAT_LAST:
            if not len(self.history):
                self._write(f"{name}: event not found\n")
                return True
            command = self.history.last()
            self._write(command)
            self.eval(command, NO_MARK)
            return True
        if mark > 0:
            try:
                command = self.history.get(mark)
            except IndexError:
                self._write(f"{name}: event not found\n")
                return True
            self._write(command)
            self.eval(command, NO_MARK)
            return True
        return False

    def _change_directory(self, target: Optional[str]) -> None:
        if target is None or target in ("~", "$HOME"):
            target = os.environ.get("HOME") or os.path.expanduser("~")
        try:
            os.chdir(target)
        except OSError as exc:
            self._write(f"cd: {target}: {exc.strerror}\n")

    def run_command(self, argv: Sequence[str], background: bool, cmdline: str) -> Optional[int]:
        """Start an external program; wait for it unless it runs in the background.

        Returns the exit status of a foreground program, otherwise None.
        """
        target = self._output_target()
        capture = target is None and not background
        self.stdout.flush()
        try:
            proc = subprocess.Popen(list(argv), stdout=subprocess.PIPE if capture else target)
        except OSError:
            self._write(f"{argv[0]}: Command not found.\n")
            return None
        if background:
            self._background.append(proc)
            self._write(f"{proc.pid} {cmdline}")
            return None
        out, _ = proc.communicate()
        if capture and out:
            self._write(out.decode(errors="replace"))
        return proc.returncode

    def run_pipeline(self, segments: Sequence[Sequence[str]], background: bool) -> List[int]:
        """Connect the stages of ``segments`` with pipes and run them together.

        Returns the exit statuses of the started programs when waited for,
        or an empty list for a background pipeline.
        """
        target = self._output_target()
        capture = target is None and not background
        self.stdout.flush()
        procs: List[subprocess.Popen] = []
        feeders: List[threading.Thread] = []
        captured: Optional[subprocess.Popen] = None
        upstream: Upstream = None
        last_index = len(segments) - 1

        for index, argv in enumerate(segments):
            last = index == last_index
            if argv[0] in BUILTINS:
                output = self.history.format() if argv[0] == "history" else ""
                if upstream is not None and not isinstance(upstream, bytes):
                    upstream.close()
                if last:
                    self._write(output)
                    upstream = None
                else:
                    upstream = output.encode()
                continue

            if index == 0:
                stdin = None
            elif upstream is None or isinstance(upstream, bytes):
                stdin = subprocess.PIPE
            else:
                stdin = upstream
            if last:
                stdout = subprocess.PIPE if capture else target
            else:
                stdout = subprocess.PIPE
            try:
                proc = subprocess.Popen(list(argv), stdin=stdin, stdout=stdout)
            except OSError:
                self._write(f"{argv[0]}: Command not found.\n")
                if upstream is not None and not isinstance(upstream, bytes):
                    upstream.close()
                upstream = b""
                continue

            if index > 0 and (upstream is None or isinstance(upstream, bytes)):
                feeder = threading.Thread(target=_feed, args=(proc.stdin, upstream or b""), daemon=True)
                feeder.start()
                feeders.append(feeder)
            elif upstream is not None and not isinstance(upstream, bytes):
                upstream.close()
            procs.append(proc)
            if last:
                upstream = None
                if capture:
                    captured = proc
            else:
                upstream = proc.stdout

        if background:
            self._background.extend(procs)
            return []
        if captured is not None and captured.stdout is not None:
            data = captured.stdout.read()
            captured.stdout.close()
            if data:
                self._write(data.decode(errors="replace"))
        statuses = [proc.wait() for proc in procs]
        for feeder in feeders:
            feeder.join()
        return statuses

    def quit(self) -> None:
        """Save the history in the starting directory and end the session."""
        os.chdir(self._initial_cwd)
        self.history.save(self.history_path)
        raise ShellExit(0)

    def repl(self, stdin: Optional[TextIO] = None) -> int:
        """Read and evaluate lines until end of input or ``quit``; return the exit status."""
        source = stdin if stdin is not None else sys.stdin
        while True:
            self._write(PROMPT)
            self.stdout.flush()
            line = source.readline()
            if not line:
                return 0
            try:
                self.eval(line, check_mark(line))
            except ShellExit as exc:
                return exc.code


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start an interactive session."""
    parser = argparse.ArgumentParser(prog="minishell", description="A small interactive shell.")
    parser.add_argument("--history-file", default="history.txt", help="where the history is kept")
    args = parser.parse_args(argv)
    return Shell(args.history_file).repl()


if __name__ == "__main__":
    sys.exit(main())