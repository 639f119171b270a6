from conftest import FIXED_NOW
from receipt_printing.layout import (
    build_receipt_html,
    build_receipt_job,
    display_width,
    format_amount,
    format_timestamp,
)
from receipt_printing.models import ReceiptItem, ReceiptPayload

SAMPLE = ReceiptPayload(
    title="レシート",
    items=(ReceiptItem("コーヒー", 300), ReceiptItem("サンドイッチ", 450)),
    total=750,
)


def _ops(job):
    return [cmd.op for cmd in job.commands]


def test_01_command_order(settings):
    job = build_receipt_job(SAMPLE, FIXED_NOW, settings)
    assert job.text_lines == [
        "レシート",
        "コーヒー",
        "¥300",
        "サンドイッチ",
        "¥450",
        "合計: ¥750",
        "",
        "ありがとうございました",
        "",
        "2025/9/25 9:05:09",
    ]
    ops = _ops(job)
    assert ops.count("rule") == 2
    assert ops[-2:] == ["feed", "cut"]
    assert "image" not in ops


def test_02_title_is_centered_bold_and_large(settings):
    commands = build_receipt_job(SAMPLE, FIXED_NOW, settings).commands
    title_at = next(i for i, c in enumerate(commands) if c.op == "text")
    assert [(c.op, c.args) for c in commands[:title_at]] == [
        ("align", ("center",)),
        ("size", (2, 2)),
        ("bold", (True,)),
    ]


def test_03_image_is_first_when_present(settings):
    payload = ReceiptPayload(title="x", image=b"\x89PNG")
    assert _ops(build_receipt_job(payload, FIXED_NOW, settings))[0] == "image"


def test_04_empty_items_still_well_formed(settings):
    job = build_receipt_job(ReceiptPayload(title="", total=0), FIXED_NOW, settings)
    assert job.text_lines[0] == "レシート"
    assert "合計: ¥0" in job.text_lines
    assert "ありがとうございました" in job.text_lines
    assert _ops(job).count("rule") == 2
    assert _ops(job)[-1] == "cut"


def test_05_total_is_not_recomputed(settings):
    payload = ReceiptPayload(items=(ReceiptItem("a", 100),), total=999)
    assert "合計: ¥999" in build_receipt_job(payload, FIXED_NOW, settings).text_lines


def test_06_same_input_same_job_and_document(settings):
    assert build_receipt_job(SAMPLE, FIXED_NOW, settings) == build_receipt_job(SAMPLE, FIXED_NOW, settings)
    assert build_receipt_html(SAMPLE, FIXED_NOW, settings, "logo.png") == build_receipt_html(
        SAMPLE, FIXED_NOW, settings, "logo.png"
    )


def test_07_amount_formatting():
    assert format_amount(300) == "¥300"
    assert format_amount(750.0) == "¥750"
    assert format_amount(12.5) == "¥12.5"
    assert format_amount(5, "$") == "$5"


def test_08_timestamp_matches_japanese_locale():
    assert format_timestamp(FIXED_NOW) == "2025/9/25 9:05:09"


def test_09_preview_aligns_wide_text(settings):
    preview = build_receipt_job(SAMPLE, FIXED_NOW, settings).preview(width=32)
    lines = preview.splitlines()
    price_line = next(line for line in lines if line.endswith("¥300"))
    assert display_width(price_line) == 32
    assert any(line.strip() == "合計: ¥750" for line in lines)
    assert display_width("合計") == 4


def test_10_html_document_contents(settings):
    payload = ReceiptPayload(title="<Café>", items=(ReceiptItem("Tea & Cake", 500),), total=500)
    html = build_receipt_html(payload, FIXED_NOW, settings, "logo.png")

    assert "size: 57mm auto" in html
    assert "margin: 0" in html
    assert 'src="logo.png"' in html
    assert "&lt;Café&gt;" in html
    assert "Tea &amp; Cake" in html
    assert "合計: ¥500" in html
    assert "ありがとうございました" in html
    assert html.index("Tea &amp; Cake") < html.index("合計: ¥500")


def test_11_html_without_logo(settings):
    html = build_receipt_html(SAMPLE, FIXED_NOW, settings)
    assert "<img" not in html
