"""Tests for line rendering"""
import pytest

from line_protocol import LineFormatter, MetricContainer, UnsupportedValueError


class TestRenderValue:
    """Test scalar rendering in the default mode"""

    def setup_method(self):
        self.formatter = LineFormatter()

    @pytest.mark.parametrize("value, expected", [
        (1, "1"),
        (-42, "-42"),
        (64.2, "64.2"),
        (1.0, "1.0"),
        (True, "true"),
        (False, "false"),
        ("two", "two"),
        ("", ""),
    ])
    def test_render_value(self, value, expected):
        assert self.formatter.render_value(value) == expected

    def test_render_unsupported(self):
        with pytest.raises(UnsupportedValueError):
            self.formatter.render_value(None)


class TestFormatLine:
    """Test line assembly"""

    def test_full_line(self):
        line = LineFormatter().format_line(
            "cpu", {"host": "server01"}, {"usage": 64.2}, 1609459200000000000
        )

        assert line == "cpu,host=server01 usage=64.2 1609459200000000000"

    def test_sorted_keys(self):
        line = LineFormatter().format_line("m", {"b": "2", "a": "1"}, {"y": 2, "x": 1})

        assert line == "m,a=1,b=2 x=1,y=2"

    def test_insertion_order_when_unsorted(self):
        line = LineFormatter(sort_keys=False).format_line("m", {"b": "2", "a": "1"}, {"y": 2, "x": 1})

        assert line == "m,b=2,a=1 y=2,x=1"

    def test_empty_tags_keep_separator(self):
        assert LineFormatter().format_line("m", {}, {"x": 1}) == "m, x=1"

    def test_empty_tags_omit_separator(self):
        formatter = LineFormatter(omit_empty_tag_separator=True)

        assert formatter.format_line("m", {}, {"x": 1}) == "m x=1"
        assert formatter.format_line("m", {"a": "1"}, {"x": 1}) == "m,a=1 x=1"

    def test_special_characters_not_escaped_by_default(self):
        line = LineFormatter().format_line("my metric", {"a,b": "c=d"}, {"s": "hello world"})

        assert line == "my metric,a,b=c=d s=hello world"


class TestStrictMode:
    """Test full line protocol escaping"""

    def setup_method(self):
        self.formatter = LineFormatter(strict=True)

    def test_escapes_identifiers(self):
        line = self.formatter.format_line("my metric,x", {"a,b": "c=d e"}, {"k=1": 1.5})

        assert line == "my\\ metric\\,x,a\\,b=c\\=d\\ e k\\=1=1.5"

    def test_quotes_strings(self):
        assert self.formatter.render_value('say "hi" \\o/') == '"say \\"hi\\" \\\\o/"'

    def test_integer_suffix(self):
        assert self.formatter.render_value(7) == "7i"
        assert self.formatter.render_value(True) == "true"

    def test_container_with_strict_formatter(self):
        metric = MetricContainer("cpu", formatter=self.formatter)
        metric.add({"host": "server 01"}, {"state": "ok", "count": 3})
        metric.set_timestamp(5)

        assert metric.output_with_timestamp() == 'cpu,host=server\\ 01 count=3i,state="ok" 5'

    def test_empty_tags_never_keep_separator(self):
        assert self.formatter.format_line("m", {}, {"x": 1}) == "m x=1i"
        assert self.formatter.format_line("m", {}, {"x": 1}, 9) == "m x=1i 9"
