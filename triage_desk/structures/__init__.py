"""Bounded queue, heap and slot list used by the scheduling engine."""

from triage_desk.structures.emergency_heap import EmergencyHeap, HeapEntry
from triage_desk.structures.routine_queue import RoutineQueue
from triage_desk.structures.slot_list import Slot, SlotList

__all__ = ["EmergencyHeap", "HeapEntry", "RoutineQueue", "Slot", "SlotList"]
