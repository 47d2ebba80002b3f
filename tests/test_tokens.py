"""Tests for the ZPL tokenizer and emitter."""

import pytest

from zplkit.emit import emit, emit_bytes
from zplkit.parse import find_last_xz, tokenize
from zplkit.tokens import Command, FieldData, FieldStop, Raw, RawBytes


SAMPLE_LABEL = (
    "^XA\n"
    "^FO50,50^A0N,30,30^FDHello, World^FS\n"
    "^FO50,100^BCN,80,Y,N,N^FD1234567890^FS\n"
    "~DGR:LOGO.GRF,2,1,FF00\n"
    "^FO10,10^XGR:LOGO.GRF,1,1^FS\n"
    "^XZ"
)


class TestTokenize:
    """Test tokenizing ZPL text."""

    def test_simple_commands(self):
        """Test commands with and without params."""
        tokens = tokenize("^XA^FO10,20^XZ")
        assert tokens == [
            Command("^", "XA", ""),
            Command("^", "FO", "10,20"),
            Command("^", "XZ", ""),
        ]

    def test_field_data_block(self):
        """Test ^FD ... ^FS becomes FieldData + FieldStop."""
        tokens = tokenize("^FDHello^FS")
        assert tokens == [FieldData("Hello"), FieldStop()]

    def test_field_data_keeps_markers_verbatim(self):
        """Test field data may contain ~ and ^ sequences other than ^FS."""
        tokens = tokenize("^FDa^XAb~DGc^FS^XZ")
        assert tokens == [FieldData("a^XAb~DGc"), FieldStop(), Command("^", "XZ", "")]

    def test_multiline_field_data(self):
        """Test field data spanning lines."""
        tokens = tokenize("^FDline1\nline2^FS")
        assert tokens[0] == FieldData("line1\nline2")

    def test_leading_raw_text(self):
        """Test text before the first command becomes Raw."""
        tokens = tokenize("  junk ^XA")
        assert tokens == [Raw("  junk "), Command("^", "XA", "")]

    def test_raw_after_field_stop(self):
        """Test text between ^FS and the next command is Raw."""
        tokens = tokenize("^FDx^FS\n^XZ")
        assert tokens == [FieldData("x"), FieldStop(), Raw("\n"), Command("^", "XZ", "")]

    def test_params_include_trailing_whitespace(self):
        """Test params run up to the next command, newlines included."""
        tokens = tokenize("^XA\n^XZ")
        assert tokens == [Command("^", "XA", "\n"), Command("^", "XZ", "")]

    def test_tilde_commands(self):
        """Test ~ marked commands."""
        tokens = tokenize("~DGR:A.GRF,1,1,80")
        assert tokens == [Command("~", "DG", "R:A.GRF,1,1,80")]

    def test_single_letter_name(self):
        """Test a one-letter name followed by a digit."""
        tokens = tokenize("^A0N,30,30")
        assert tokens == [Command("^", "A", "0N,30,30")]

    def test_two_letter_name_is_greedy(self):
        """Test two letters are taken when available."""
        tokens = tokenize("^XGR:LOGO.GRF,1,1")
        assert tokens == [Command("^", "XG", "R:LOGO.GRF,1,1")]

    def test_unknown_commands_accepted(self):
        """Test no validation of command names."""
        tokens = tokenize("^QQ1,2~zz")
        assert tokens == [Command("^", "QQ", "1,2"), Command("~", "zz", "")]

    def test_mark_without_letter_is_not_a_command(self):
        """Test ^ followed by a digit stays in params."""
        tokens = tokenize("^FO1^2")
        assert tokens == [Command("^", "FO", "1^2")]

    def test_text_only(self):
        """Test input without commands."""
        assert tokenize("no commands here") == [Raw("no commands here")]

    def test_empty(self):
        """Test empty input."""
        assert tokenize("") == []

    def test_unterminated_field_data(self):
        """Test unterminated ^FD keeps the rest as data and stops."""
        tokens = tokenize("^XA^FDabc^XZ")
        assert tokens == [Command("^", "XA", ""), FieldData("abc^XZ")]
        assert not any(isinstance(t, FieldStop) for t in tokens)

    def test_bytes_input(self):
        """Test bytes are decoded as UTF-8."""
        tokens = tokenize("^FDGrüße^FS".encode("utf-8"))
        assert tokens == [FieldData("Grüße"), FieldStop()]

    def test_field_data_followed_by_field_stop(self):
        """Test every FieldData is followed by FieldStop in well-formed input."""
        tokens = tokenize(SAMPLE_LABEL)
        for i, tok in enumerate(tokens):
            if isinstance(tok, FieldData):
                assert tokens[i + 1] == FieldStop()


class TestEmit:
    """Test rendering tokens back to text."""

    @pytest.mark.parametrize(
        "text",
        [
            SAMPLE_LABEL,
            "",
            "plain text",
            "^XA\r\n^FO1,2^FD^FS\r\n^XZ\r\n",
            "  ^XA^FD~weird^chars^FS trailing ^XZ  ",
            "^FD^FS^FD^FS",
        ],
    )
    def test_round_trip(self, text):
        """Test emit(tokenize(s)) == s for well-formed streams."""
        assert emit(tokenize(text)) == text

    def test_emit_each_kind(self):
        """Test rendering of every token kind."""
        tokens = [
            Raw(" "),
            Command("~", "JA", ""),
            Command("^", "FO", "1,2"),
            FieldData("x"),
            FieldStop(),
            RawBytes(b"AB"),
        ]
        assert emit(tokens) == " ~JA^FO1,2^FDx^FSAB"

    def test_emit_bytes_token_is_lossy(self):
        """Test emit decodes RawBytes as text with replacement."""
        assert emit([RawBytes(b"\xff")]) == "\ufffd"

    def test_emit_bytes_keeps_binary(self):
        """Test emit_bytes writes RawBytes verbatim."""
        tokens = [Command("~", "DG", "R:X.GRF,1,1,"), RawBytes(b"\xff\x00")]
        assert emit_bytes(tokens) == b"~DGR:X.GRF,1,1,\xff\x00"

    def test_unknown_token_type_raises(self):
        """Test emitting a non-token raises TypeError."""
        with pytest.raises(TypeError, match="Unknown token type"):
            emit(["^XA"])

    def test_invalid_mark_rejected(self):
        """Test Command only accepts ^ or ~."""
        with pytest.raises(ValueError):
            Command("!", "XA")


class TestFindLastXZ:
    """Test locating the label end command."""

    def test_finds_last(self):
        """Test the last ^XZ wins."""
        tokens = tokenize("^XA^XZ^XA^FO1,1^XZ\n")
        assert find_last_xz(tokens) == 4

    def test_missing_returns_length(self):
        """Test len(tokens) when no ^XZ exists."""
        tokens = tokenize("^XA^FO1,1")
        assert find_last_xz(tokens) == len(tokens)

    def test_ignores_tilde_xz(self):
        """Test ~XZ is not the label end."""
        tokens = tokenize("^XA~XZ")
        assert find_last_xz(tokens) == 2

    def test_insert_before_end(self):
        """Test splicing content before the closing ^XZ."""
        tokens = tokenize("^XA^XZ")
        at = find_last_xz(tokens)
        tokens[at:at] = tokenize("^FDhi^FS")
        assert emit(tokens) == "^XA^FDhi^FS^XZ"
