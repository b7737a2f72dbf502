from agentdesk.chunkers import LineChunker, OutlineChunker, chunk, get_chunker, is_outline_format
from agentdesk.config import Settings


class TestLineChunker:
    def test_packs_lines_up_to_threshold(self):
        text = "aaaaaaaaa\nbbbbbbbbb\nccccccccc\n"
        spans = LineChunker(chunk_size=20).chunk(text)

        assert [s.text for s in spans] == ["aaaaaaaaa\nbbbbbbbbb\n", "ccccccccc\n"]
        assert [(s.line_start, s.line_end) for s in spans] == [(1, 2), (3, 3)]

    def test_never_splits_a_line(self):
        long_line = "x" * 50
        spans = LineChunker(chunk_size=20).chunk(f"short\n{long_line}\nshort\n")

        assert any(s.text == long_line + "\n" for s in spans)
        for s in spans:
            assert all(line in ("short", long_line) for line in s.text.splitlines())

    def test_reassembles_to_original_lines(self):
        lines = [f"row {i},value {i * 3}" for i in range(200)]
        text = "\n".join(lines) + "\n"
        spans = LineChunker(chunk_size=100).chunk(text)

        assert "".join(s.text for s in spans) == text
        assert spans[0].line_start == 1
        assert spans[-1].line_end == 200

    def test_small_file_is_one_chunk(self):
        spans = LineChunker().chunk("a,b\n1,2\n")
        assert len(spans) == 1
        assert spans[0].context is None

    def test_context_is_tail_of_previous_chunk(self):
        text = "first line here\nsecond line here\n"
        spans = LineChunker(chunk_size=16, context_chars=5).chunk(text)

        assert len(spans) == 2
        assert spans[0].context is None
        assert spans[1].context == "here\n"

    def test_truncates_stored_text_only(self):
        first = "0123456789" * 3 + "\n"
        spans = LineChunker(chunk_size=10, max_content_length=8, context_chars=100).chunk(first + "next\n")

        assert spans[0].text == "01234567"
        assert spans[1].context == first

    def test_empty_and_blank_input(self):
        assert LineChunker().chunk("") == []
        assert LineChunker().chunk("  \n\n\t\n") == []


class TestOutlineChunker:
    def test_splits_on_headers(self):
        text = "# A\nhello\n# B\nworld here\n"
        spans = OutlineChunker().chunk(text)

        assert [s.text for s in spans] == ["# A\nhello\n", "# B\nworld here\n"]
        assert [(s.line_start, s.line_end) for s in spans] == [(1, 2), (3, 4)]

    def test_text_before_first_header_is_its_own_chunk(self):
        spans = OutlineChunker().chunk("intro text here\n# H\nbody body\n")

        assert spans[0].text == "intro text here\n"
        assert spans[1].text.startswith("# H")

    def test_every_chunk_after_first_starts_with_header(self):
        text = "# One\nalpha alpha\n## Two\nbeta beta beta\n### Three\ngamma gamma\n"
        spans = OutlineChunker().chunk(text)

        assert len(spans) == 3
        assert all(s.text.startswith("#") for s in spans)

    def test_drops_short_sections(self):
        spans = OutlineChunker().chunk("# A\nhi\n# B\nsomething long enough\n")

        assert len(spans) == 1
        assert spans[0].text == "# B\nsomething long enough\n"
        assert spans[0].line_start == 3

    def test_min_chunk_chars_is_configurable(self):
        spans = OutlineChunker(min_chunk_chars=0).chunk("# A\nhi\n# B\nok\n")
        assert len(spans) == 2

    def test_chunking_is_deterministic(self):
        text = "# Notes\nline one\nline two\n# More\nline three\n"
        chunker = OutlineChunker()
        assert chunker.chunk(text) == chunker.chunk(text)


class TestSelection:
    def test_outline_formats(self):
        assert is_outline_format("md")
        assert is_outline_format(".MD")
        assert not is_outline_format("csv")

    def test_get_chunker_uses_settings(self):
        settings = Settings(chunk_size=42, min_chunk_chars=3)

        line = get_chunker("txt", settings)
        outline = get_chunker("md", settings)

        assert isinstance(line, LineChunker) and line.chunk_size == 42
        assert isinstance(outline, OutlineChunker) and outline.min_chunk_chars == 3

    def test_chunk_helper(self):
        text = "# A\nhello\n# B\nworld here\n"
        assert len(chunk(text, is_outline=True)) == 2
        assert len(chunk(text, is_outline=False)) == 1


class TestLineNumbers:
    def test_form_feed_does_not_start_a_new_line(self):
        text = "# A\nintro\x0cpage two text\n# B\nsecond section here\n"
        spans = OutlineChunker().chunk(text)

        assert [(s.line_start, s.line_end) for s in spans] == [(1, 2), (3, 4)]
        assert spans[0].text == "# A\nintro\x0cpage two text\n"

    def test_only_line_feeds_split_flat_chunks(self):
        text = "one still one\ntwo\x85still two\rand more\nthree\n"
        spans = LineChunker(chunk_size=1000).chunk(text)

        assert len(spans) == 1
        assert spans[0].text == text
        assert (spans[0].line_start, spans[0].line_end) == (1, 3)

    def test_crlf_lines_keep_their_carriage_return(self):
        spans = LineChunker(chunk_size=6).chunk("ab\r\ncd\r\n")

        assert [s.text for s in spans] == ["ab\r\n", "cd\r\n"]
        assert [(s.line_start, s.line_end) for s in spans] == [(1, 1), (2, 2)]
