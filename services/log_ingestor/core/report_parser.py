"""
Where: services/log_ingestor/core/report_parser.py
What: Field extraction for the Lambda platform REPORT log line.
Why: The REPORT line is the only place Lambda publishes duration and memory metrics.

Format:
    REPORT RequestId: <id>\tDuration: 1.23 ms\tBilled Duration: 2 ms\tMemory Size: 128 MB\t...
"""

from typing import List, Optional, Sequence

from ..models.report import ReportRecord

REPORT_PREFIX = "REPORT "

FIELD_REQUEST_ID = "RequestId"
FIELD_DURATION = "Duration"
FIELD_BILLED_DURATION = "Billed Duration"
FIELD_MEMORY_SIZE = "Memory Size"
FIELD_MAX_MEMORY_USED = "Max Memory Used"
FIELD_INIT_DURATION = "Init Duration"


def is_report_message(message: str) -> bool:
    return message.startswith(REPORT_PREFIX)


def get_field_value(fields: Sequence[str], name: str) -> Optional[str]:
    """
    Return the value of the first "<name>: <value>" field, or None if absent.

    Matching is a case-sensitive prefix match on "<name>: ", so "Duration"
    never matches "Billed Duration".
    """
    prefix = f"{name}: "
    for field in fields:
        if field.startswith(prefix):
            return field[len(prefix) :]
    return None


def split_report_fields(message: str) -> List[str]:
    """Strip the REPORT sentinel and split the remainder into tab-separated fields."""
    if is_report_message(message):
        message = message[len(REPORT_PREFIX) :]
    return message.strip().split("\t")


def parse_report_message(message: str) -> Optional[ReportRecord]:
    """
    Parse a REPORT line into a ReportRecord.

    Returns None for non-REPORT messages and for lines without a RequestId.
    """
    if not is_report_message(message):
        return None

    fields = split_report_fields(message)
    request_id = get_field_value(fields, FIELD_REQUEST_ID)
    if not request_id:
        return None

    return ReportRecord(
        request_id=request_id,
        duration=get_field_value(fields, FIELD_DURATION),
        billed_duration=get_field_value(fields, FIELD_BILLED_DURATION),
        memory_size=get_field_value(fields, FIELD_MEMORY_SIZE),
        max_memory_used=get_field_value(fields, FIELD_MAX_MEMORY_USED),
        init_duration=get_field_value(fields, FIELD_INIT_DURATION),
    )
