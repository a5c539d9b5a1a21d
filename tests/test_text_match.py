import pytest

from core.text_match import (
    camel_cased,
    cleaned_words,
    hyphenated,
    join_extension,
    replace_text,
    sanitize_filename,
    snake_cased,
    split_extension,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("file.txt", ("file", "txt")),
        ("archive.tar.gz", ("archive.tar", "gz")),
        ("README", ("README", "")),
        (".bashrc", (".bashrc", "")),
        ("..foo", ("..foo", "")),
        (".hidden.txt", (".hidden", "txt")),
        ("trailing.", ("trailing.", "")),
        ("", ("", "")),
    ],
)
def test_split_extension(name, expected):
    assert split_extension(name) == expected
    assert join_extension(*split_extension(name)) == name


def test_cleaned_words_mixed_separators():
    assert cleaned_words("hello_world-test.file(name)") == ["hello", "world", "test", "file", "name"]


def test_cleaned_words_camel_case():
    assert cleaned_words("helloWorldTest") == ["hello", "World", "Test"]


def test_cleaned_words_drops_symbols_and_collapses_spaces():
    assert cleaned_words("  a!!  b#c  ") == ["a", "bc"]


def test_cleaned_words_is_ascii_only():
    assert cleaned_words("café menu") == ["caf", "menu"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello world test", "helloWorldTest"),
        ("hello-world-test", "helloWorldTest"),
        ("hello_world_test", "helloWorldTest"),
        ("helloWorldTest", "helloWorldTest"),
        ("HELLO WORLD", "helloWorld"),
        ("", ""),
        ("!!!", ""),
    ],
)
def test_camel_cased(text, expected):
    assert camel_cased(text) == expected


def test_hyphenated():
    assert hyphenated("Hello World Test") == "hello-world-test"
    assert hyphenated("helloWorldTest") == "hello-world-test"


def test_snake_cased():
    assert snake_cased("My Document (Final).v2") == "my_document_final_v2"


def test_replace_text_is_literal():
    assert replace_text("a.b.c", ".", "-") == "a-b-c"
    assert replace_text("Foo foo FOO", "foo", "bar") == "bar bar bar"
    assert replace_text("a+b", "+", r"\g<0>") == r"a\g<0>b"
    assert replace_text("same", "", "x") == "same"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a/b", "a_b"),
        ("a//b", "a__b"),
        ("a\\b:c", "a_b_c"),
        ("../etc/passwd", "_etc_passwd"),
        ("..hidden..", "hidden"),
        ("...", "file"),
        ("", "file"),
        ("normal name.txt", "normal name.txt"),
    ],
)
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


def test_sanitize_filename_custom_fallback():
    assert sanitize_filename("..", fallback="unnamed") == "unnamed"
