import re

import pytest

from workspace_docs.id_utils import (
    SequentialIdGenerator,
    TimestampIdGenerator,
    parse_id_prefix,
)


class TestTimestampIdGenerator:
    def test_format(self):
        new_id = TimestampIdGenerator().new_id("page")
        assert re.fullmatch(r"page-\d{13,}-[0-9a-z]{7}", new_id)

    def test_ids_differ(self):
        generator = TimestampIdGenerator()
        generated = {generator.new_id("block") for _ in range(50)}
        assert len(generated) == 50


class TestSequentialIdGenerator:
    def test_counts_per_prefix(self):
        generator = SequentialIdGenerator()
        assert generator.new_id("page") == "page-1"
        assert generator.new_id("block") == "block-1"
        assert generator.new_id("page") == "page-2"

    def test_custom_start(self):
        assert SequentialIdGenerator(start=10).new_id("user") == "user-10"

    def test_advance_past(self):
        generator = SequentialIdGenerator()
        generator.advance_past("block-9")
        assert generator.new_id("block") == "block-10"
        assert generator.new_id("page") == "page-1"

    def test_advance_past_never_moves_backwards(self):
        generator = SequentialIdGenerator()
        generator.advance_past("page-5")
        generator.advance_past("page-2")
        assert generator.new_id("page") == "page-6"

    def test_advance_past_ignores_non_sequential(self):
        generator = SequentialIdGenerator()
        generator.advance_past("page-1735689600000-k3j9x0a")
        assert generator.new_id("page") == "page-1"


class TestParseIdPrefix:
    def test_basic(self):
        assert parse_id_prefix("page-12") == "page"

    def test_timestamp_id(self):
        assert parse_id_prefix("block-1735689600000-k3j9x0a") == "block"

    @pytest.mark.parametrize("bad", ["page", "-12", "page-", ""])
    def test_malformed_raises(self, bad):
        with pytest.raises(ValueError):
            parse_id_prefix(bad)
