import pytest

from letsyolo.keys.envfile import (
    format_export,
    is_valid_name,
    parse_env_text,
    quote_value,
    render_env_text,
)


def test_parse_supported_styles() -> None:
    text = "\n".join(
        [
            "# comment",
            "",
            'export ANTHROPIC_API_KEY="sk-ant-123"',
            "OPENAI_API_KEY='sk-openai-456'",
            "GITHUB_TOKEN=ghp_789 # personal token",
            "  export SRC_ACCESS_TOKEN=sgp_abc",
            "not an assignment",
        ]
    )

    assert parse_env_text(text) == {
        "ANTHROPIC_API_KEY": "sk-ant-123",
        "OPENAI_API_KEY": "sk-openai-456",
        "GITHUB_TOKEN": "ghp_789",
        "SRC_ACCESS_TOKEN": "sgp_abc",
    }


def test_parse_later_assignment_wins() -> None:
    assert parse_env_text("KEY=first\nKEY=second\n") == {"KEY": "second"}


def test_parse_handles_crlf_line_endings() -> None:
    assert parse_env_text('KEY="value"\r\nOTHER=x\r\n') == {"KEY": "value", "OTHER": "x"}


def test_parse_keeps_carriage_returns_inside_quoted_values() -> None:
    text = 'KEY="line one\r\nline two"\r\nOTHER=x\r\n'

    assert parse_env_text(text) == {"KEY": "line one\r\nline two", "OTHER": "x"}


def test_parse_single_quotes_are_literal() -> None:
    assert parse_env_text("KEY='a\\$b\"c'") == {"KEY": 'a\\$b"c'}


def test_parse_unterminated_quote_falls_back_to_bare() -> None:
    assert parse_env_text('KEY="legacy-value\n') == {"KEY": "legacy-value"}


def test_parse_double_quoted_multiline_value() -> None:
    assert parse_env_text('KEY="line one\nline two"\nOTHER=x') == {
        "KEY": "line one\nline two",
        "OTHER": "x",
    }


def test_parse_backslash_continuation() -> None:
    assert parse_env_text('KEY="abc\\\ndef"') == {"KEY": "abcdef"}


@pytest.mark.parametrize(
    "value",
    [
        'has "double" quotes',
        "has `backticks`",
        "costs $5 and ${HOME}",
        "multi\nline",
        "crlf\r\nline",
        "back\\slash\\",
        "a=b=c",
        "it's",
    ],
)
def test_special_characters_survive_a_rewrite(value: str) -> None:
    text = render_env_text([], {"SECRET_VALUE": value})

    assert parse_env_text(text) == {"SECRET_VALUE": value}


def test_quote_value_escapes_shell_metacharacters() -> None:
    assert quote_value('a"b$c`d\\e') == '"a\\"b\\$c\\`d\\\\e"'


def test_format_export() -> None:
    assert format_export("OPENAI_API_KEY", "sk-1") == 'export OPENAI_API_KEY="sk-1"'


def test_render_env_text_ends_with_newline() -> None:
    text = render_env_text(["# header", ""], {"A": "1", "B": "2"})

    assert text == '# header\n\nexport A="1"\nexport B="2"\n'


def test_is_valid_name() -> None:
    assert is_valid_name("_PRIVATE_1")
    assert not is_valid_name("1BAD")
    assert not is_valid_name("HAS-DASH")
    assert not is_valid_name("")
