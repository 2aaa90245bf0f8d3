"""Parse Shearwater XML dive log exports into Dive objects."""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from divelog.dive import Dive, Sample

logger = logging.getLogger(__name__)

# e.g. "Thu Nov  7 14:35:12 2019 UTC"
START_DATE_FORMAT = "%a %b %d %H:%M:%S %Y UTC"


class LogParseError(ValueError):
    """The log could not be turned into a Dive."""


def _parse_date(date_str: str) -> datetime:
    """Parse a Shearwater startDate/endDate string as a UTC datetime."""
    t = datetime.strptime(date_str.strip(), START_DATE_FORMAT)
    return t.replace(tzinfo=timezone.utc)


def _parse_bool(text: Optional[str]) -> bool:
    return (text or "").strip().lower() in ("true", "1", "yes")


def _child_text(elem: ET.Element, tag: str) -> Optional[str]:
    child = elem.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _child_float(elem: ET.Element, tag: str, default: float = 0.0) -> float:
    text = _child_text(elem, tag)
    return float(text) if text else default


def _child_int(elem: ET.Element, tag: str, default: int = 0) -> int:
    text = _child_text(elem, tag)
    return int(float(text)) if text else default


class ShearwaterParser:
    """Parse Shearwater Desktop/Cloud XML exports (one dive per file)."""

    def parse_file(self, filepath: str) -> Dive:
        """
        Parse a Shearwater XML file.

        Args:
            filepath: Path to XML file

        Returns:
            Dive

        Raises:
            FileNotFoundError: if the file does not exist
            LogParseError: if the content is not a usable Shearwater log
        """
        content = Path(filepath).read_text(encoding='utf-8', errors='replace')
        try:
            return self.parse_string(content)
        except LogParseError as e:
            raise LogParseError(f"{filepath}: {e}") from e

    def parse_string(self, content: str) -> Dive:
        """
        Parse Shearwater XML content.

        Args:
            content: XML string

        Returns:
            Dive
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise LogParseError(f"failed to decode XML: {e}") from e

        log_elem = root if root.tag == 'diveLog' else root.find('.//diveLog')
        if log_elem is None:
            raise LogParseError("no diveLog element")

        start_str = _child_text(log_elem, 'startDate') or ""
        try:
            start_time = _parse_date(start_str)
        except ValueError as e:
            raise LogParseError(f"invalid startDate {start_str!r}: {e}") from e

        end_time = None
        end_str = _child_text(log_elem, 'endDate')
        if end_str:
            try:
                end_time = _parse_date(end_str)
            except ValueError as e:
                logger.warning(f"Ignoring invalid endDate {end_str!r}: {e}")

        samples = []
        records = log_elem.findall('./diveLogRecords/diveLogRecord')
        for index, record in enumerate(records):
            try:
                samples.append(self._parse_record(record))
            except ValueError as e:
                raise LogParseError(f"invalid diveLogRecord {index}: {e}") from e

        try:
            metadata = dict(
                number=_child_int(log_elem, 'number'),
                gf_min=_child_int(log_elem, 'gfMin'),
                gf_max=_child_int(log_elem, 'gfMax'),
                imperial_units=_parse_bool(_child_text(log_elem, 'imperialUnits')),
                logged_max_depth=_child_float(log_elem, 'maxDepth'),
                max_time=_child_int(log_elem, 'maxTime'),
            )
        except ValueError as e:
            raise LogParseError(f"invalid diveLog metadata: {e}") from e

        # Out-of-order records raise SampleOrderError here
        dive = Dive(start_time=start_time, samples=samples, end_time=end_time, **metadata)

        logger.info(f"Parsed dive {dive.number} with {len(samples)} samples from Shearwater XML")
        return dive

    def _parse_record(self, record: ET.Element) -> Sample:
        """Parse a single diveLogRecord element."""
        time_text = _child_text(record, 'currentTime')
        if time_text is None:
            raise ValueError("missing currentTime")

        return Sample(
            offset_seconds=int(float(time_text)),
            depth=_child_float(record, 'currentDepth'),
            average_ppo2=_child_float(record, 'averagePPO2'),
            fraction_o2=_child_float(record, 'fractionO2', 0.21),
            fraction_he=_child_float(record, 'fractionHe'),
            first_stop_depth=_child_int(record, 'firstStopDepth'),
            first_stop_time=_child_int(record, 'firstStopTime'),
            tts_minutes=_child_int(record, 'ttsMins'),
        )


def load_shearwater_log(filepath: str) -> Dive:
    """Parse a Shearwater XML log file into a Dive."""
    return ShearwaterParser().parse_file(filepath)
