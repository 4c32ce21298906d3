"""
Signal composition

Folds flat signal columns into the structured sub-records a contact carries:
- hiring signals: one entry per numbered slot that has a title
- job change: only when a previous or new company is known
- relocation: only when a from or to country is known

Each composite is either populated or None, never an empty placeholder.
"""

from typing import List, Mapping, Optional

from ..catalog import HIRING_SLOTS, hiring_key
from ..models import HiringSignal, JobChangeData, LocationMoveData


def compose_hiring_signals(values: Mapping[str, str]) -> Optional[List[HiringSignal]]:
    """
    Build hiring signals from slot columns, in slot order, skipping gaps.

    Args:
        values: field key -> normalized value

    Returns:
        Signals for every slot with a title, or None when there are none

    Example:
        Slots 1 and 3 populated -> [slot 1, slot 3]
    """
    signals = []
    for slot in HIRING_SLOTS:
        title = values.get(hiring_key('title', slot))
        if not title:
            continue
        signals.append(HiringSignal(
            title=title,
            url=values.get(hiring_key('url', slot)) or None,
            location=values.get(hiring_key('location', slot)) or None,
            date=values.get(hiring_key('date', slot)) or None,
            slot=slot,
        ))
    return signals or None


def compose_job_change(values: Mapping[str, str]) -> Optional[JobChangeData]:
    previous_company = values.get('job_change_previous_company') or None
    new_company = values.get('job_change_new_company') or None
    if not previous_company and not new_company:
        return None
    return JobChangeData(
        previous_company=previous_company,
        previous_title=values.get('job_change_previous_title') or None,
        new_company=new_company,
        new_title=values.get('job_change_new_title') or None,
        date=values.get('job_change_date') or None,
    )


def compose_location_move(values: Mapping[str, str]) -> Optional[LocationMoveData]:
    from_country = values.get('location_move_from_country') or None
    to_country = values.get('location_move_to_country') or None
    if not from_country and not to_country:
        return None
    return LocationMoveData(
        from_country=from_country,
        from_state=values.get('location_move_from_state') or None,
        to_country=to_country,
        to_state=values.get('location_move_to_state') or None,
        date=values.get('location_move_date') or None,
    )
