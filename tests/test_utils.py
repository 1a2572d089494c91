from __future__ import annotations

from lente_local.utils import elide_end, elide_middle


def test_elide_end():
    assert elide_end("Mercado", 10) == "Mercado"
    assert elide_end("Mercado Municipal", 8) == "Mercado…"


def test_elide_middle_keeps_both_ends():
    uri = "https://maps.google.com/?cid=1234567890"
    short = elide_middle(uri, 21)
    assert short == "https://ma…1234567890"
    assert len(short) == 21
