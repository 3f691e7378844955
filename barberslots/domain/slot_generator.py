"""
Core business logic for listing bookable start times.

Algorithm:
1. Lay a grid of start times from opening until the last start that still
   ends by closing time
2. On the current day, drop every start that is not strictly in the future
3. Keep the starts that do not overlap any existing appointment
4. For the combo service, pair each start with the one after it and keep
   the pair when the first half is free as HAIR and the second as BEARD
"""

from datetime import date, time
from typing import List

from .conflict_evaluator import ConflictEvaluator
from .models import AvailableSlotsQuery, ServiceType, at_time
from .ports import Clock


class SlotGenerator:
    """
    Produces ordered lists of available start times for a date and service.

    The combo service has no slot type of its own: it is synthesised from two
    consecutive 30 minute uses of the chair.
    """

    def __init__(self, evaluator: ConflictEvaluator, clock: Clock):
        self.evaluator = evaluator
        self.clock = clock
        self.business_hours = evaluator.business_hours

    def available_slots(self, query: AvailableSlotsQuery) -> List[time]:
        return self.get_available_slots(query.date, query.service_type)

    def get_available_slots(self, day: date, service_type: ServiceType) -> List[time]:
        """
        Find every start time on ``day`` that can take ``service_type``.

        Returns:
            Start times in ascending order, without duplicates
        """
        candidates = self.generate_candidate_slots(day, service_type)

        if service_type is not ServiceType.HAIR_AND_BEARD:
            return [
                slot for slot in candidates
                if self.evaluator.is_available(day, slot, service_type)
            ]

        return self._combo_slots(day, candidates)

    def generate_candidate_slots(self, day: date, service_type: ServiceType) -> List[time]:
        """
        Build the start-time grid for ``day`` before any availability check.

        Every service must end by closing time, which puts the last HAIR or
        BEARD start at 18:30 and the last combo start at 18:00.
        """
        step = self.business_hours.slot_minutes
        cursor = self.business_hours.opening_on(day)
        last_start = self.business_hours.last_start_on(day, service_type)

        slots: List[time] = []
        while cursor <= last_start:
            slots.append(cursor.time())
            cursor = cursor.add(minutes=step)

        now = self.business_hours.now_in_shop(self.clock.now())
        if day == now.date():
            tz = self.business_hours.timezone
            slots = [slot for slot in slots if at_time(day, slot, tz) > now]

        return slots

    def _combo_slots(self, day: date, candidates: List[time]) -> List[time]:
        """
        Keep each candidate whose own half-hour is free for HAIR and whose
        following half-hour is free for BEARD.
        """
        tz = self.business_hours.timezone
        step = self.business_hours.slot_minutes

        slots: List[time] = []
        for first, second in zip(candidates, candidates[1:]):
            if at_time(day, first, tz).add(minutes=step) != at_time(day, second, tz):
                continue
            if (
                self.evaluator.is_available(day, first, ServiceType.HAIR)
                and self.evaluator.is_available(day, second, ServiceType.BEARD)
            ):
                slots.append(first)

        # The last combo start has no successor in the grid; probe the final
        # BEARD half directly.
        last_combo = self.business_hours.last_start_on(day, ServiceType.HAIR_AND_BEARD).time()
        last_half = self.business_hours.last_start_on(day, ServiceType.BEARD).time()
        if (
            last_combo in candidates
            and last_combo not in slots
            and self.evaluator.is_available(day, last_half, ServiceType.BEARD)
        ):
            slots.append(last_combo)

        return slots
