"""
🧪 test_text.py - unit tests for utils.text
"""

import pytest

from utils.text import escape_attr, escape_html, is_command, parse_command, strip_formatting


@pytest.mark.parametrize("text, expected", [
    ("/corridas", ("corridas", [])),
    ("/Corridas 5km,10km", ("corridas", ["5km,10km"])),
    ("  /config   distancias 5,10  ", ("config", ["distancias", "5,10"])),
    ("/start@DashBot", ("start", [])),
    ("ajuda", ("ajuda", [])),
    ("   ", ("", [])),
])
def test_parse_command(text, expected):
    assert parse_command(text) == expected


def test_is_command():
    assert is_command("/start")
    assert is_command("  /start")
    assert not is_command("start")


def test_strip_formatting_html():
    assert strip_formatting('<strong>Corrida</strong> <a href="https://x.y">link</a>') == "Corrida link"
    assert strip_formatting("5 &lt; 10 &amp; 21") == "5 < 10 & 21"


def test_strip_formatting_markdown():
    assert strip_formatting("*negrito* e _itálico_ e `code`") == "negrito e itálico e code"
    assert strip_formatting("[site](https://example.com)") == "site"
    assert strip_formatting("corridas\\_5km") == "corridas_5km"


def test_strip_formatting_keeps_snake_case():
    assert strip_formatting("/proxima_corrida e /buscar_corridas") == "/proxima_corrida e /buscar_corridas"


def test_strip_formatting_empty():
    assert strip_formatting("") == ""
    assert strip_formatting(None) == ""


def test_escape_html():
    assert escape_html("Run & <Fun>") == "Run &amp; &lt;Fun&gt;"
    assert escape_html(None) == ""


def test_escape_attr_quotes():
    assert escape_attr('a.com/?x=1&y="2"') == "a.com/?x=1&amp;y=&quot;2&quot;"
    assert escape_attr(None) == ""
