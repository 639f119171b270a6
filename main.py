import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from receipt_printing import PrintDispatcher, ReceiptItem, ReceiptPayload, get_printer_driver

logger = logging.getLogger(__name__)


def _parse_item(value: str) -> ReceiptItem:
    name, sep, price = value.rpartition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=PRICE, got {value!r}")
    try:
        amount = int(price) if price.strip().isdigit() else float(price)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid price in {value!r}") from exc
    return ReceiptItem(name=name, price=amount)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List printers and print a sample receipt.")
    parser.add_argument("--list", action="store_true", help="list available printers and exit")
    parser.add_argument("--printer", default="mock_epson_thermal", help="printer id from --list")
    parser.add_argument("--title", default="レシート")
    parser.add_argument("--item", action="append", type=_parse_item, default=None,
                        help="receipt line as NAME=PRICE (repeatable)")
    parser.add_argument("--total", type=float, default=None,
                        help="receipt total (defaults to the sum of item prices)")
    parser.add_argument("--image", type=Path, default=None, help="logo image file")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    # Qt spooler output needs an application object for the whole session.
    _app = QApplication.instance() or QApplication(sys.argv[:1])
    host = get_printer_driver()
    dispatcher = PrintDispatcher()

    if args.list:
        for device in dispatcher.list_devices(host):
            marker = "*" if device.is_default else " "
            print(f"{marker} {device.id:<40} {device.kind.value:<15} {device.display_name} [{device.status}]")
        return 0

    items = tuple(args.item or (ReceiptItem("コーヒー", 300), ReceiptItem("サンドイッチ", 450)))
    total = args.total if args.total is not None else sum(item.price for item in items)
    payload = ReceiptPayload(
        title=args.title,
        items=items,
        total=int(total) if float(total).is_integer() else total,
        image=args.image.read_bytes() if args.image else None,
    )
    result = dispatcher.print_receipt(args.printer, payload, host=host)
    print(result.message)
    if result.preview:
        print(result.preview)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
