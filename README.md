# minishell

A small interactive Unix shell. It runs programs found on your `PATH`,
connects them with pipes, runs them in the background, and keeps a
numbered command history that is saved between sessions.

## Installing

```
pip install .
```

## Running

```
minishell
```

or, to keep the history somewhere other than `history.txt` in the current
directory:

```
minishell --history-file path/to/history.txt
```

The prompt is `> `. Type a command and press Enter. The session ends at end
of input (Ctrl-D) or with `quit` / `exit`.

### What a command line can hold

- **Programs**: any command on your `PATH`, with arguments separated by
  spaces. If the program cannot be started the shell prints
  `<name>: Command not found.`
- **Background jobs**: when the last word begins with `&`, that word is
  dropped and the program runs without being waited for. The shell prints
  the process id followed by the command line.
- **Pipelines**: join commands with `|`, for example
  `ls -l | grep py | wc -l`. A `|` inside single or double quotes is not a
  pipe; the quote characters that open and close such a span are removed.
  The built-in `history` may appear in a pipeline and feeds its listing to
  the next stage; other built-ins in a pipeline produce no output.
- **Built-in commands**
  - `cd [dir]`: change directory. With no argument, `~` or `$HOME` it goes
    to your home directory. A failure is reported and the shell carries on.
  - `history`: list the history as `N  command`, numbered from 1. Typing
    `history` twice in a row records it only once.
  - `!!`: print the most recent command and run it again.
  - `!N`: print command number `N` and run it again. An unknown number
    prints `event not found`.
  - `quit` or `exit`: save the history and leave.

### History file

On start the history is read from the history file, one command per line;
a missing file is created empty. On `quit` or `exit` the shell returns to
the directory it was started in and writes the history back, leaving out
the `quit`/`exit` line itself. Ending the session at end of input does not
save the history.

### What it does not do

Arguments are split on spaces only. There is no input or output
redirection (`<`, `>`), no variable or `~` expansion in arguments, no
globbing, no quoting of arguments outside pipeline splitting, and no job
control commands (`jobs`, `fg`, `bg`, `kill`); background programs are
simply reaped when they finish.

## Using it as a library

- `minishell.parsing`: `parse_line` returns a `ParsedLine` with `argv` and
  `background`; `split_pipeline` splits a line at unquoted `|`;
  `check_mark` classifies `!!` (returns `-1`), `!N` (returns `N`) and
  anything else (returns `0`).
- `minishell.history`: `History` holds numbered entries, with `add`,
  `last`, `get`, `format`, `load` and `save`.
- `minishell.shell`: `Shell` is the interpreter (`eval`, `run_builtin`,
  `run_command`, `run_pipeline`, `quit`, `repl`); `quit` raises
  `ShellExit`. `main` starts an interactive session.
- `minishell.rio`: `readn` and `writen` read and write a file descriptor
  without losing data to short reads or writes; `RioReader` is a buffered
  reader with `read`, `readnb`, `readline` and line iteration; `ltoa`
  formats an integer in any base from 2 to 36; `sio_puts` and `sio_putl`
  write straight to standard output's descriptor.
- `minishell.sockets`: `open_clientfd(hostname, port)` returns a connected
  TCP socket and `open_listenfd(port)` returns a listening one; both try
  every address the lookup gives and raise `OSError` when none works.

## Running the tests

```
pip install .[test]
pytest
```