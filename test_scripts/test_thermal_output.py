import io

import pytest
from PIL import Image

from conftest import FIXED_NOW
from receipt_printing.errors import RenderingError
from receipt_printing.layout import build_receipt_job
from receipt_printing.models import ReceiptItem, ReceiptPayload
from receipt_printing.thermal import (
    FS_KANJI_ON,
    render_escpos,
    resize_to_width,
    stage_logo,
    staged_logo,
)


def _png(width=400, height=100) -> bytes:
    out = io.BytesIO()
    Image.new("RGB", (width, height), "black").save(out, format="PNG")
    return out.getvalue()


def _job(settings, payload):
    return build_receipt_job(payload, FIXED_NOW, settings)


SAMPLE = ReceiptPayload(
    title="レシート",
    items=(ReceiptItem("コーヒー", 300), ReceiptItem("サンドイッチ", 450)),
    total=750,
)


def test_01_japanese_lines_use_shift_jis(settings):
    data = render_escpos(_job(settings, SAMPLE), settings)
    assert FS_KANJI_ON + "コーヒー".encode("shift_jis") in data
    assert "サンドイッチ".encode("shift_jis") in data
    assert "合計: ¥750".encode("shift_jis") in data
    assert b"=" * 32 in data


def test_02_same_payload_same_bytes(settings, isolated_tmp):
    payload = ReceiptPayload(title="Cafe", items=SAMPLE.items, total=750, image=_png())
    first = render_escpos(_job(settings, payload), settings, payload.image)
    second = render_escpos(_job(settings, payload), settings, payload.image)
    assert first == second


def test_03_empty_items_render(settings):
    data = render_escpos(_job(settings, ReceiptPayload()), settings)
    assert "合計: ¥0".encode("shift_jis") in data
    assert "ありがとうございました".encode("shift_jis") in data


def test_04_resize_keeps_aspect_ratio():
    img = Image.new("RGB", (400, 100))
    resized = resize_to_width(img, 200)
    assert resized.size == (200, 50)


def test_05_stage_logo_writes_png(settings, isolated_tmp):
    path = stage_logo(_png(), settings.thermal_image_width)
    with Image.open(path) as staged:
        assert staged.size == (200, 50)
    assert list(isolated_tmp.iterdir())


def test_06_stage_logo_rejects_garbage(isolated_tmp):
    with pytest.raises(RenderingError):
        stage_logo(b"not an image", 200)
    assert list(isolated_tmp.iterdir()) == []


def test_07_staged_logo_is_removed_after_use(settings, isolated_tmp):
    with staged_logo(_png(), settings.thermal_image_width) as path:
        assert path is not None
        assert list(isolated_tmp.iterdir())
    assert list(isolated_tmp.iterdir()) == []


def test_08_staged_logo_is_removed_on_error(settings, isolated_tmp):
    with pytest.raises(RuntimeError):
        with staged_logo(_png(), settings.thermal_image_width):
            raise RuntimeError("boom")
    assert list(isolated_tmp.iterdir()) == []


def test_09_bad_image_degrades_to_no_logo(settings, isolated_tmp):
    payload = ReceiptPayload(title="x", image=b"broken")
    with_bad_image = render_escpos(_job(settings, payload), settings, payload.image)
    without_image = render_escpos(_job(settings, ReceiptPayload(title="x")), settings)
    assert with_bad_image == without_image
    assert list(isolated_tmp.iterdir()) == []
