import pytest

from minishell.parsing import (
    NO_MARK,
    REPEAT_LAST,
    ParsedLine,
    check_mark,
    parse_line,
    split_pipeline,
)


def test_parse_simple_command():
    parsed = parse_line("ls -al\n")
    assert parsed.argv == ("ls", "-al")
    assert parsed.background is False
    assert not parsed.is_empty


def test_parse_background_command():
    parsed = parse_line("sleep 1 &\n")
    assert parsed.argv == ("sleep", "1")
    assert parsed.background is True


def test_parse_collapses_spaces():
    parsed = parse_line("   echo    a   b   \n")
    assert parsed.argv == ("echo", "a", "b")
    assert parsed.background is False


def test_parse_blank_line_is_empty_background():
    parsed = parse_line("\n")
    assert parsed == ParsedLine(argv=(), background=True)
    assert parsed.is_empty


def test_parse_spaces_only_line():
    assert parse_line("     \n").is_empty


def test_parse_lone_ampersand_leaves_no_command():
    parsed = parse_line("&\n")
    assert parsed.argv == ()
    assert parsed.background is True


def test_parse_last_word_starting_with_ampersand():
    parsed = parse_line("ls &x\n")
    assert parsed.argv == ("ls",)
    assert parsed.background is True


def test_parse_without_newline_matches_with_newline():
    assert parse_line("cat file") == parse_line("cat file\n")


def test_parse_tabs_are_not_separators():
    assert parse_line("a\tb\n").argv == ("a\tb",)


@pytest.mark.parametrize(
    "line", ["ls | grep a\n", "a|b|c", "cat x | sort | uniq -c\n"]
)
def test_split_without_quotes_round_trips(line):
    segments = split_pipeline(line)
    assert "|".join(segments) == line.rstrip("\n")
    assert len(segments) == line.count("|") + 1


def test_split_no_pipe_gives_one_segment():
    assert split_pipeline("ls -l\n") == ["ls -l"]


def test_split_segments_parse_into_commands():
    segments = split_pipeline("ls -l | grep txt\n")
    assert [parse_line(s).argv for s in segments] == [("ls", "-l"), ("grep", "txt")]


def test_split_ignores_pipe_inside_double_quotes():
    segments = split_pipeline('echo "a|b" | wc\n')
    assert len(segments) == 2
    assert parse_line(segments[0]).argv == ("echo", "a|b")


def test_split_ignores_pipe_inside_single_quotes():
    segments = split_pipeline("echo 'x|y'\n")
    assert len(segments) == 1
    assert "|" in segments[0]
    assert "'" not in segments[0]


def test_split_keeps_other_quote_inside_span():
    segments = split_pipeline('echo "it\'s" | cat\n')
    assert parse_line(segments[0]).argv == ("echo", "it's")


def test_split_trailing_pipe_gives_empty_segment():
    segments = split_pipeline("ls |\n")
    assert len(segments) == 2
    assert parse_line(segments[1]).is_empty


@pytest.mark.parametrize(
    "line, expected",
    [
        ("!!\n", REPEAT_LAST),
        ("!!", REPEAT_LAST),
        ("!!ls\n", REPEAT_LAST),
        ("!!!\n", NO_MARK),
        ("!5\n", 5),
        ("!12\n", 12),
        ("!12", 12),
        ("!x\n", NO_MARK),
        ("!1a\n", NO_MARK),
        ("!\n", NO_MARK),
        ("ls\n", NO_MARK),
        ("", NO_MARK),
    ],
)
def test_check_mark(line, expected):
    assert check_mark(line) == expected


def test_mark_constants():
    assert REPEAT_LAST == -1
    assert check_mark("echo !!\n") == NO_MARK