from __future__ import annotations

import os

import pytest
from rainbow_tags.reader import read_tag
from rainbow_tags.scanner import compute_color_ranges

atheris = pytest.importorskip("atheris")


def test_compute_color_ranges_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    scanned = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(128)
        palette_size = provider.ConsumeIntInRange(0, 8)
        buckets = compute_color_ranges(text, palette_size)
        for ranges in buckets.values():
            for start, end in ranges:
                assert 0 <= start < end <= len(text)
        scanned += 1

    assert scanned  # ensure we exercised the loop


def test_read_tag_with_fuzzed_markup():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)

    while provider.remaining_bytes() > 0:
        text = "<" + provider.ConsumeUnicodeNoSurrogates(32)
        tag = read_tag(text, 0)
        if tag is not None:
            assert tag.next_index <= len(text)
            assert not (tag.closing and tag.self_closing)
