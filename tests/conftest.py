"""
Shared narinfo documents for the test suite.

SAMPLE_LINES is a complete, valid record in the order a binary cache
serves it. Tests build broken variants from it by dropping, replacing or
repeating lines.
"""

import pytest

STORE_PATH = "/nix/store/xmxgxig6zxrixicc7905ssgb4yc3lysa-bash-interactive-4.4-p23"
URL = "nar/1hr0vy3gw8l4z0ra3ka2wmzhdai66xq3x3v0bpnx8gn9nqdla5ad.nar.xz"
FILE_HASH = "sha256:1hr0vy3gw8l4z0ra3ka2wmzhdai66xq3x3v0bpnx8gn9nqdla5ad"
NAR_HASH = "sha256:0xk5a0hb2hgbr5a9kq3a8jsq8hwsfwyyzfyrx3b5jmpdk4wcw0l5"
REFERENCES = [
    "9bmf8hcy3gz6w5ka0rjy8d9fv5ha1d3k-ncurses-6.2",
    "xmxgxig6zxrixicc7905ssgb4yc3lysa-bash-interactive-4.4-p23",
    "zscr4wr7hxpyl4kcgrzyv6zbvr3qgmiq-readline-8.0p4",
]
DERIVER = "a6xizp18g0sch9z7493p3irq632kzlym-bash-interactive-4.4-p23.drv"
SIG = "cache.nixos.org-1:7zLrFhvOzcyYeAnmeIcYMd8+MZqrcz2k8Kq0Mc8qf2NkHvjwC8bH1yHNR6ZQTSnTQj+KryCQnhW7wq7J6RUCBg=="

SAMPLE_LINES = [
    f"StorePath: {STORE_PATH}",
    f"URL: {URL}",
    "Compression: xz",
    f"FileHash: {FILE_HASH}",
    "FileSize: 1797672",
    f"NarHash: {NAR_HASH}",
    "NarSize: 7593680",
    f"References: {' '.join(REFERENCES)}",
    f"Deriver: {DERIVER}",
    f"Sig: {SIG}",
]


def document(lines):
    return "\n".join(lines) + "\n"


def without(key):
    return [line for line in SAMPLE_LINES if not line.startswith(f"{key}:")]


@pytest.fixture
def sample_document() -> str:
    return document(SAMPLE_LINES)
