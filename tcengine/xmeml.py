from pathlib import Path

from lxml import etree

from .arithmetic import Policy
from .errors import MalformedInputError
from .framerate import FrameRate, UpperLimit
from .timecode import Timecode


def _rate_element(parent, rate: FrameRate):
    rate_el = etree.SubElement(parent, "rate")
    etree.SubElement(rate_el, "timebase").text = str(rate.max_frames)
    etree.SubElement(rate_el, "ntsc").text = "TRUE" if rate.is_fractional else "FALSE"
    return rate_el


def timecode_element(tc: Timecode, parent=None):
    """Build an FCP 7 XML (XMEML) <timecode> element for `tc`."""
    if parent is None:
        timecode = etree.Element("timecode")
    else:
        timecode = etree.SubElement(parent, "timecode")

    _rate_element(timecode, tc.frame_rate)
    etree.SubElement(timecode, "string").text = str(tc)
    etree.SubElement(timecode, "frame").text = str(tc.frame_count.whole_frames)
    etree.SubElement(timecode, "displayformat").text = "DF" if tc.frame_rate.is_drop else "NDF"
    return timecode


def read_timecode_element(
    element,
    upper_limit: UpperLimit = UpperLimit.HOURS_24,
    subframes_base: int = 80,
    policy: Policy = Policy.EXACT,
) -> Timecode:
    """Restore a Timecode from a <timecode> element using its <frame> count and <rate>."""
    timebase = element.findtext("rate/timebase")
    ntsc = element.findtext("rate/ntsc", default="FALSE")
    frame = element.findtext("frame")
    displayformat = element.findtext("displayformat", default="NDF")

    if timebase is None or frame is None:
        raise MalformedInputError("<timecode> element needs <rate><timebase> and <frame>")

    try:
        timebase_value = int(timebase)
        frame_value = int(frame)
    except ValueError as e:
        raise MalformedInputError(f"Non-numeric <timecode> field: {e}") from e

    rate = FrameRate.from_timebase(
        timebase_value,
        ntsc=ntsc.strip().upper() == "TRUE",
        drop=displayformat.strip().upper() == "DF",
    )
    if rate is None:
        raise MalformedInputError(f"No frame rate for timebase {timebase} ntsc={ntsc} {displayformat}")

    return Timecode.from_frame_count(frame_value, rate, upper_limit, subframes_base, policy)


def write_timecode_xml(tc: Timecode, out_xml: Path, name: str = "Timecode") -> Path:
    """Write a minimal XMEML document holding one sequence start timecode."""
    xmeml = etree.Element("xmeml", version="5")
    sequence = etree.SubElement(xmeml, "sequence", id=name)
    etree.SubElement(sequence, "name").text = name
    _rate_element(sequence, tc.frame_rate)
    timecode_element(tc, sequence)

    out_xml.write_bytes(etree.tostring(xmeml, pretty_print=True, xml_declaration=True, encoding="utf-8"))
    return out_xml


def read_timecode_xml(
    xml_path: Path,
    upper_limit: UpperLimit = UpperLimit.HOURS_24,
    subframes_base: int = 80,
    policy: Policy = Policy.EXACT,
) -> Timecode:
    try:
        root = etree.parse(str(xml_path)).getroot()
    except etree.XMLSyntaxError as e:
        raise MalformedInputError(f"Invalid XML in {xml_path}: {e}") from e

    element = root.find(".//timecode")
    if element is None:
        raise MalformedInputError(f"No <timecode> element in {xml_path}")
    return read_timecode_element(element, upper_limit, subframes_base, policy)
