"""
End-to-end conversion tests over whole documents.
"""

import pytest

from docconv.config import ConverterCfg
from docconv.engine import convert_lines, convert_text, run_convert, split_lines
from docconv.errors import DestinationWriteError, SourceReadError, UnterminatedBlockError

from .conftest import convert, src, write

ADD = src("""
    class Calc {
    {@@
      Summary: Adds two numbers.
      Parameters:
        a - first addend
        b - second addend
      Returns:
        The sum.
    }
      int Add(int a, int b);
    }
    """)

ADD_EXPECTED = src("""
    class Calc {
      /// <summary>
      /// Adds two numbers.
      /// </summary>
      /// <param name="a">
      ///  first addend
      /// </param>
      /// <param name="b">
      ///  second addend
      /// </param>
      /// <returns>
      ///     The sum.
      /// </returns>
      int Add(int a, int b);
    }
    """)


class TestConvertText:

    def test_end_to_end_example(self):
        assert convert(ADD) == ADD_EXPECTED

    def test_stats(self, cfg):
        _, stats = convert_text(ADD, cfg)
        assert stats.blocks == 1
        assert stats.fragments == {"summary": 1, "param": 2, "returns": 1}
        assert stats.lines_read == 11
        assert stats.lines_written == len(split_lines(ADD_EXPECTED))
        assert not stats.unterminated

    def test_text_without_blocks_is_unchanged(self):
        text = "int a;\n// {@@ not a block\n  }\nlast line without newline"
        assert convert(text) == text

    def test_pass_through_lines_keep_order_around_blocks(self):
        text = src("""
            one
            {@@
            Summary: S
            }
            two
            three
            {@@
            Summary: T
            }
            four
            """)
        out = convert(text).splitlines()
        passthrough = [ln for ln in out if not ln.lstrip().startswith("///")]
        assert passthrough == ["one", "two", "three", "four"]

    def test_summary_only_block(self):
        text = src("""
            {@@
              Summary:
            L1
            L2
            }
                void F();
            """)
        assert convert(text) == (
            "    /// <summary>\n"
            "    /// L1\n"
            "    /// L2\n"
            "    /// </summary>\n"
            "    void F();\n"
        )

    def test_summary_text_on_closing_line(self):
        out = convert("{@@\n  Summary:\n    Adds. }\n  void F();\n")
        assert out == "  /// <summary>\n  ///     Adds.\n  /// </summary>\n  void F();\n"

    def test_returns_none_emits_nothing(self):
        text = "{@@\nReturns:\n  None.\n}\nvoid Noop();\n"
        assert convert(text) == "void Noop();\n"

    def test_parameter_continuation_order(self):
        text = src("""
            {@@
              Parameters:
                x - the input value
                  which must be positive
                  and finite
            }
            void F(int x);
            """)
        assert convert(text) == (
            '/// <param name="x">\n'
            "///       and finite\n"
            "///       which must be positive\n"
            "///  the input value\n"
            "/// </param>\n"
            "void F(int x);\n"
        )


class TestIndentation:

    def test_indent_follows_next_line_not_block(self):
        block = "        {@@\n        Summary: S\n        }\n"
        assert convert(block + "   int x;\n").startswith("   /// <summary>\n")
        assert convert(block + "int x;\n").startswith("/// <summary>\n")

    def test_tabs_do_not_count(self):
        assert convert("{@@\nSummary: S\n}\n\tint x;\n").startswith("/// <summary>\n")

    def test_last_block_reuses_previous_width(self):
        text = "{@@\nSummary: A\n}\n    int a;\n{@@\nSummary: B\n}"
        out = convert(text)
        assert out.endswith("    /// <summary>\n    /// B\n    /// </summary>\n")

    def test_default_width_is_zero(self):
        assert convert("{@@\nSummary: A\n}") == "/// <summary>\n/// A\n/// </summary>\n"


class TestLineBreaks:

    def test_crlf_pass_through_and_emitted_separator(self):
        text = "a\r\n{@@\r\n  Summary: S\r\n}\r\n  b\r\n"
        out, _ = convert_text(text, ConverterCfg(newline="\r\n"))
        assert out == "a\r\n  /// <summary>\r\n  /// S\r\n  /// </summary>\r\n  b\r\n"

    def test_pass_through_endings_are_not_normalized(self):
        text = "a\r\nb\n{@@\nSummary: S\n}\nc\r"
        out = convert(text)
        assert out.startswith("a\r\nb\n")
        assert out.endswith("c\r")

    def test_split_lines_keeps_endings(self):
        assert split_lines("a\r\nb\rc\nd") == ["a\r\n", "b\r", "c\n", "d"]


class TestIdempotence:

    def test_converting_output_again_is_noop(self):
        once = convert(ADD)
        assert convert(once) == once


class TestUnterminatedBlock:
    TEXT = "int a;\n{@@\n  Summary: never closed\n  more\n"

    def test_error_by_default(self, cfg):
        with pytest.raises(UnterminatedBlockError) as ei:
            convert_text(self.TEXT, cfg)
        assert ei.value.opened_at == 2
        assert "line 2" in str(ei.value)

    def test_flush_copies_block_verbatim(self, caplog):
        cfg = ConverterCfg(newline="\n", on_unterminated="flush")
        with caplog.at_level("WARNING", logger="docconv"):
            out, stats = convert_text(self.TEXT, cfg)
        assert out == self.TEXT
        assert stats.unterminated
        assert "never closed" in caplog.text

    def test_drop_loses_block(self):
        cfg = ConverterCfg(newline="\n", on_unterminated="drop")
        out, stats = convert_text(self.TEXT, cfg)
        assert out == "int a;\n"
        assert stats.unterminated

    def test_closed_blocks_before_it_are_still_converted(self):
        cfg = ConverterCfg(newline="\n", on_unterminated="drop")
        out, _ = convert_lines(["{@@\n", "Summary: S\n", "}\n", "x\n", "{@@\n"], cfg)
        assert out == ["/// <summary>\n", "/// S\n", "/// </summary>\n", "x\n"]


class TestRunConvert:

    def test_converts_file(self, tmp_path):
        source = write(tmp_path / "calc.cs", ADD)
        dest = tmp_path / "out" / "calc.cs"
        dest.parent.mkdir()
        report = run_convert(source, dest, ConverterCfg(newline="\n", encoding="utf-8"))
        assert dest.read_text(encoding="utf-8") == ADD_EXPECTED
        assert report.blocks == 1
        assert report.fragments["param"] == 2
        assert report.source == str(source)

    def test_overwrites_destination(self, tmp_path):
        source = write(tmp_path / "a.txt", "plain\n")
        dest = write(tmp_path / "b.txt", "old content\n")
        run_convert(source, dest, ConverterCfg(encoding="utf-8"))
        assert dest.read_text(encoding="utf-8") == "plain\n"

    def test_missing_source(self, tmp_path):
        dest = tmp_path / "out.txt"
        with pytest.raises(SourceReadError) as ei:
            run_convert(tmp_path / "missing.txt", dest)
        assert "missing.txt" in str(ei.value)
        assert not dest.exists()

    def test_undecodable_source(self, tmp_path):
        source = tmp_path / "latin.txt"
        source.write_bytes(b"caf\xe9\n")
        dest = tmp_path / "out.txt"
        with pytest.raises(SourceReadError):
            run_convert(source, dest, ConverterCfg(encoding="utf-8"))
        assert not dest.exists()

    def test_missing_destination_directory(self, tmp_path):
        source = write(tmp_path / "a.txt", "plain\n")
        dest = tmp_path / "no" / "such" / "dir" / "b.txt"
        with pytest.raises(DestinationWriteError):
            run_convert(source, dest)
        assert not (tmp_path / "no").exists()

    def test_destination_is_a_directory(self, tmp_path):
        source = write(tmp_path / "a.txt", "plain\n")
        dest = tmp_path / "outdir"
        dest.mkdir()
        with pytest.raises(DestinationWriteError) as ei:
            run_convert(source, dest)
        assert str(dest) in str(ei.value)
        assert dest.is_dir()

    def test_unterminated_block_writes_nothing(self, tmp_path):
        source = write(tmp_path / "a.txt", "{@@\nSummary: S\n")
        dest = tmp_path / "b.txt"
        with pytest.raises(UnterminatedBlockError) as ei:
            run_convert(source, dest, ConverterCfg(encoding="utf-8"))
        assert str(source) in str(ei.value)
        assert not dest.exists()
