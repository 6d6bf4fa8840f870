"""
FCPXML rational time helpers.

FCPXML encodes time locations and durations as fractions of seconds with an
`s` suffix ("0s", "3600s", "335335/24000s"), which map directly onto a
Timecode's rational value.
"""

from fractions import Fraction
from pathlib import Path
from typing import List, Tuple
import re
import xml.etree.ElementTree as ET
import xml.dom.minidom as minidom

from .errors import MalformedInputError
from .framerate import FrameRate, UpperLimit
from .timecode import Timecode

_RATIONAL_TIME = re.compile(r"^\s*(-?\d+)(?:/(\d+))?s\s*$")


def format_rational_time(value: Fraction) -> str:
    value = Fraction(value)
    if value.denominator == 1:
        return f"{value.numerator}s"
    return f"{value.numerator}/{value.denominator}s"


def parse_rational_time(text: str) -> Fraction:
    match = _RATIONAL_TIME.match(text or "")
    if not match:
        raise MalformedInputError(f"Invalid FCPXML time value: {text!r}")
    numerator, denominator = match.groups()
    if denominator is not None and int(denominator) == 0:
        raise MalformedInputError(f"Zero denominator in FCPXML time value: {text!r}")
    return Fraction(int(numerator), int(denominator or 1))


def write_fcpxml_markers(markers: List[Tuple[str, Timecode]], rate: FrameRate, out_xml: Path) -> Path:
    """
    Generate an FCPXML file with a gap spanning the markers and one marker per entry.

    Args:
        markers: List of (name, Timecode) pairs; timecodes are converted to `rate` if needed
        rate: Frame rate of the sequence
        out_xml: Output path for the FCPXML file
    """
    frame_duration = format_rational_time(rate.frame_duration)

    fcpxml = ET.Element('fcpxml', version='1.8')

    resources = ET.SubElement(fcpxml, 'resources')
    ET.SubElement(resources, 'format', {
        'id': 'r1',
        'name': f'FFVideoFormat1080p{rate.max_frames}',
        'frameDuration': frame_duration,
        'width': '1920',
        'height': '1080'
    })

    library = ET.SubElement(fcpxml, 'library')
    event = ET.SubElement(library, 'event', {'name': 'Timecode Markers'})
    project = ET.SubElement(event, 'project', {'name': 'Marker Sequence'})

    placed = [(name, tc if tc.frame_rate is rate else tc.converted(rate)) for name, tc in markers]

    # sequence runs one frame past the last marker
    end = max((tc.rational_value for _, tc in placed), default=Fraction(0)) + rate.frame_duration

    sequence = ET.SubElement(project, 'sequence', {
        'format': 'r1',
        'duration': format_rational_time(end),
        'tcStart': '0s',
        'tcFormat': 'DF' if rate.is_drop else 'NDF'
    })
    spine = ET.SubElement(sequence, 'spine')
    gap = ET.SubElement(spine, 'gap', {
        'name': 'Gap',
        'offset': '0s',
        'duration': format_rational_time(end)
    })

    for name, tc in placed:
        ET.SubElement(gap, 'marker', {
            'start': format_rational_time(tc.rational_value),
            'duration': frame_duration,
            'value': name
        })

    xml_str = ET.tostring(fcpxml, encoding='unicode')
    pretty_xml = minidom.parseString(xml_str).toprettyxml(indent='  ')
    lines = [line for line in pretty_xml.split('\n') if line.strip()]

    with open(out_xml, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines))

    return out_xml


def read_fcpxml_markers(
    xml_path: Path,
    rate: FrameRate,
    upper_limit: UpperLimit = UpperLimit.HOURS_24,
    subframes_base: int = 80,
) -> List[Tuple[str, Timecode]]:
    """Return (name, Timecode) for every <marker> in the document, in order."""
    try:
        root = ET.parse(xml_path).getroot()
    except ET.ParseError as e:
        raise MalformedInputError(f"Invalid XML in {xml_path}: {e}") from e

    markers = []
    for marker in root.iter('marker'):
        start = parse_rational_time(marker.get('start', ''))
        tc = Timecode.from_rational(start, rate, upper_limit, subframes_base)
        markers.append((marker.get('value', ''), tc))
    return markers
