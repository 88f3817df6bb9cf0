# ============================================================================
# FILE: tests/unit/test_tokenizer.py
# ============================================================================
"""
Unit tests for the tokenizer
"""

import re

from vet_ingestion.core import tokenizer
from vet_ingestion.core.context import TokenKind
from vet_ingestion.core.tokenizer import Token, first_token, tokenize


SAMPLE = "Mario RSSMRA80A01H501U tel 3331234567 nato 12/04/2015 GT EUROPEO"


def test_tokenize_empty_text():
    """Test empty input yields no tokens"""
    assert tokenize("") == []
    assert tokenize(None) == []


def test_tokenize_sorted_by_position():
    """Test tokens come out in text order"""
    tokens = tokenize(SAMPLE)

    assert [token.kind for token in tokens] == [
        TokenKind.TAX_CODE,
        TokenKind.PHONE,
        TokenKind.DATE,
        TokenKind.SPECIES_CODE,
    ]
    starts = [token.start for token in tokens]
    assert starts == sorted(starts)


def test_token_offsets_match_text():
    """Test token text is the slice of the input it points at"""
    for token in tokenize(SAMPLE):
        assert SAMPLE[token.start:token.end] == token.text


def test_species_token_excludes_trailing_space():
    """Test species code tokens stop at the code"""
    token = first_token(tokenize(SAMPLE), TokenKind.SPECIES_CODE)
    assert token.text == "GT"


def test_tokenize_selected_kinds():
    """Test only requested recognizers run"""
    tokens = tokenize(SAMPLE, [TokenKind.DATE])
    assert tokens == [Token(TokenKind.DATE, 43, 53, "12/04/2015")]


def test_phone_needs_word_start():
    """Test digits glued to letters are not phones"""
    assert tokenize("codiceA3331234567", [TokenKind.PHONE]) == []
    assert tokenize("+393331234567", [TokenKind.PHONE])[0].text == "+393331234567"


def test_microchip_is_not_a_phone():
    """Test a 15-digit chip number is not split into a phone"""
    kinds = [token.kind for token in tokenize("chip 380260000123456")]
    assert kinds == [TokenKind.MICROCHIP]


def test_email_token():
    """Test email recognition"""
    tokens = tokenize("scrivere a mario.rossi@example.com, grazie", [TokenKind.EMAIL])
    assert [token.text for token in tokens] == ["mario.rossi@example.com"]


def test_first_token_from_offset():
    """Test first_token skips tokens before the offset"""
    tokens = tokenize("01/01/2020 e poi 02/02/2021", [TokenKind.DATE])

    assert first_token(tokens, TokenKind.DATE).text == "01/01/2020"
    assert first_token(tokens, TokenKind.DATE, start=5).text == "02/02/2021"
    assert first_token(tokens, TokenKind.PHONE) is None


def test_equal_offsets_follow_kind_order(monkeypatch):
    """Test tokens starting together are ordered by kind declaration order"""
    monkeypatch.setitem(tokenizer.RECOGNIZERS, TokenKind.COLOR, re.compile(r"Via"))

    tokens = tokenize("Via Roma 12", [TokenKind.COLOR, TokenKind.STREET])

    assert [token.kind for token in tokens] == [TokenKind.STREET, TokenKind.COLOR]
    assert tokens[0].start == tokens[1].start == 0
