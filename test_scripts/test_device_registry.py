from types import SimpleNamespace

from conftest import FakeHost
from receipt_printing.base_driver import PrinterDevice
from receipt_printing.models import MOCK_PRINTER_ID, PrinterKind
from receipt_printing.registry import DeviceRegistry, friendly_name, is_thermal_candidate


def _port(device, description="n/a", manufacturer=None, product=None, vid=None, pid=None):
    return SimpleNamespace(
        device=device,
        description=description,
        manufacturer=manufacturer,
        product=product,
        vid=vid,
        pid=pid,
    )


def _registry(settings, ports=(), fail_with=None):
    def enumerate_ports():
        if fail_with is not None:
            raise fail_with
        return list(ports)

    return DeviceRegistry(settings=settings, serial_enumerator=enumerate_ports)


def test_01_order_system_then_serial_then_mock(settings):
    host = FakeHost([
        PrinterDevice(name="Office", display_name="Office Laser", status="idle"),
        PrinterDevice(name="Front", is_default=True, status="idle"),
    ])
    ports = [
        _port("/dev/rfcomm0", description="Bluetooth Serial"),
        _port("/dev/ttyUSB0", manufacturer="FTDI", vid=0x0403, pid=0x6001),
    ]
    devices = _registry(settings, ports).list_devices(host)

    assert [d.id for d in devices] == [
        "Office",
        "Front",
        "serial_thermal_/dev/rfcomm0",
        "serial_thermal_/dev/ttyUSB0",
        MOCK_PRINTER_ID,
    ]
    assert [d.kind for d in devices] == [
        PrinterKind.SYSTEM,
        PrinterKind.SYSTEM,
        PrinterKind.SERIAL_THERMAL,
        PrinterKind.SERIAL_THERMAL,
        PrinterKind.MOCK,
    ]
    assert devices[0].display_name == "Office Laser"
    assert devices[1].display_name == "Front"
    assert devices[1].is_default and not devices[0].is_default


def test_02_serial_descriptor_metadata(settings):
    ports = [_port("COM3", description="EPSON TM-T20", manufacturer="EPSON", vid=0x04B8, pid=0x0E15)]
    (serial,) = [d for d in _registry(settings, ports).list_devices(None) if d.kind is PrinterKind.SERIAL_THERMAL]

    assert serial.id == "serial_thermal_COM3"
    assert serial.path == "COM3"
    assert serial.display_name == "EPSON TM-T20"
    assert serial.name == "Thermal Printer (COM3)"
    assert serial.status == "available"
    assert serial.vendor_id == "04b8"
    assert serial.product_id == "0e15"
    assert serial.manufacturer == "EPSON"


def test_03_heuristic_filter(settings):
    ports = [
        _port("/dev/a", description="POS-58 printer"),
        _port("/dev/b", description="Thermal Printer"),
        _port("/dev/c", description="Standard Serial over BLUETOOTH link"),
        _port("/dev/d", description="ttyS0"),
        _port("/dev/e", description="n/a", manufacturer="Prolific"),
        _port("/dev/f", description="n/a", product="Epson USB"),
        _port("/dev/g", description="Modem", manufacturer=""),
    ]
    ids = [d.id for d in _registry(settings, ports).list_devices(None)]

    assert ids == [
        "serial_thermal_/dev/a",
        "serial_thermal_/dev/b",
        "serial_thermal_/dev/c",
        "serial_thermal_/dev/e",
        "serial_thermal_/dev/f",
        MOCK_PRINTER_ID,
    ]


def test_04_is_thermal_candidate_rules():
    keywords = ("bluetooth", "thermal", "pos", "epson")
    assert is_thermal_candidate("EPSON TM", None, keywords)
    assert is_thermal_candidate("", "Any Vendor", keywords)
    assert not is_thermal_candidate("USB Modem", None, keywords)
    assert not is_thermal_candidate("", "   ", keywords)


def test_05_friendly_name_skips_placeholder():
    assert friendly_name(_port("/dev/x", description="n/a", product="Printer")) == "Printer"
    assert friendly_name(_port("/dev/x", description="n/a")) == ""


def test_06_missing_host_degrades_to_serial_and_mock(settings):
    registry = _registry(settings, [_port("/dev/rfcomm0", description="bluetooth")])
    results = registry.enumerate(None)

    assert [r.source for r in results] == ["host", "serial", "mock"]
    assert results[0].is_degraded
    assert "host print context" in results[0].reason
    assert not results[1].is_degraded
    assert [d.id for d in registry.list_devices(None)] == ["serial_thermal_/dev/rfcomm0", MOCK_PRINTER_ID]


def test_07_failing_sources_do_not_fail_listing(settings):
    host = FakeHost(fail_with=RuntimeError("cups down"))
    registry = _registry(settings, fail_with=OSError("no serial bus"))

    results = registry.enumerate(host)
    assert results[0].reason == "cups down"
    assert results[1].reason == "no serial bus"

    devices = registry.list_devices(host)
    assert len(devices) == 1
    assert devices[0].id == MOCK_PRINTER_ID
    assert devices[0].is_demo


def test_08_only_first_default_is_kept(settings):
    host = FakeHost([
        PrinterDevice(name="A", is_default=True),
        PrinterDevice(name="B", is_default=True),
    ])
    devices = _registry(settings).list_devices(host)
    assert [d.is_default for d in devices if d.kind is PrinterKind.SYSTEM] == [True, False]


def test_09_same_device_from_two_sources_is_not_deduplicated(settings):
    host = FakeHost([PrinterDevice(name="EPSON_TM_T20")])
    ports = [_port("/dev/usb/lp0", description="EPSON TM-T20")]
    ids = [d.id for d in _registry(settings, ports).list_devices(host)]
    assert ids == ["EPSON_TM_T20", "serial_thermal_/dev/usb/lp0", MOCK_PRINTER_ID]


def test_10_find_resolves_against_fresh_snapshot(settings):
    registry = _registry(settings, [_port("/dev/rfcomm0", description="thermal")])
    assert registry.find("serial_thermal_/dev/rfcomm0", None).kind is PrinterKind.SERIAL_THERMAL
    assert registry.find("missing", None) is None


def test_11_listing_is_deterministic(settings):
    host = FakeHost([PrinterDevice(name="Office")])
    ports = [_port("/dev/rfcomm0", description="bluetooth")]
    registry = _registry(settings, ports)
    assert registry.list_devices(host) == registry.list_devices(host)
